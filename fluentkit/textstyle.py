"""The Fluent typography ramp: named fonts sharing one family."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum

__all__ = ["FontWeight", "Font", "TextStyle"]

_WINDOWS_FAMILY = "微软雅黑"
_DEFAULT_FAMILY = "Sans Serif"


class FontWeight(IntEnum):
    """Font weights on the usual 100 to 900 scale."""

    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    NORMAL = 400
    MEDIUM = 500
    DEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


@dataclass(frozen=True)
class Font:
    """A font description: family, size in pixels and weight."""

    family: str
    pixel_size: int
    weight: FontWeight = FontWeight.NORMAL

    def __post_init__(self) -> None:
        if not isinstance(self.pixel_size, int) or self.pixel_size <= 0:
            raise ValueError(f"pixel_size must be a positive integer, got {self.pixel_size!r}")
        object.__setattr__(self, "weight", FontWeight(self.weight))


def _default_family() -> str:
    return _WINDOWS_FAMILY if sys.platform == "win32" else _DEFAULT_FAMILY


class TextStyle:
    """The standard text styles, from caption up to display."""

    def __init__(self, family: str | None = None) -> None:
        self.family = family if family is not None else _default_family()
        self.caption = Font(self.family, 12)
        self.body = Font(self.family, 13)
        self.body_strong = Font(self.family, 13, FontWeight.DEMI_BOLD)
        self.subtitle = Font(self.family, 20, FontWeight.DEMI_BOLD)
        self.title = Font(self.family, 28, FontWeight.DEMI_BOLD)
        self.title_large = Font(self.family, 40, FontWeight.DEMI_BOLD)
        self.display = Font(self.family, 68, FontWeight.DEMI_BOLD)