"""Colour values, accent colour ramps and the built-in Fluent palette."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["Color", "AccentColor", "Colors", "with_opacity"]


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA colour."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"{name} must be an integer in 0..255, got {value!r}")

    def rgba(self) -> int:
        """Return the colour packed as 0xAARRGGBB."""
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    @classmethod
    def from_rgba(cls, value: int) -> Color:
        """Build a colour from a packed 0xAARRGGBB integer."""
        value &= 0xFFFFFFFF
        return cls(
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
            (value >> 24) & 0xFF,
        )


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def with_opacity(color: Color, opacity: float) -> Color:
    """Return ``color`` with its alpha replaced by ``opacity`` (0.0 to 1.0)."""
    alpha = _round_half_away(opacity * 255) & 0xFF
    return Color.from_rgba((alpha << 24) | (color.rgba() & 0xFFFFFF))


@dataclass(frozen=True)
class AccentColor:
    """A seven-step ramp of shades around a primary colour."""

    darkest: Color
    darker: Color
    dark: Color
    normal: Color
    light: Color
    lighter: Color
    lightest: Color


def _ramp(*shades: tuple[int, int, int]) -> AccentColor:
    return AccentColor(*(Color(*shade) for shade in shades))


class Colors:
    """The standard Fluent palette: greys and accent ramps."""

    def __init__(self) -> None:
        self.transparent = Color(0, 0, 0, 0)
        self.black = Color(0, 0, 0)
        self.white = Color(255, 255, 255)
        self.grey10 = Color(250, 249, 248)
        self.grey20 = Color(243, 242, 241)
        self.grey30 = Color(237, 235, 233)
        self.grey40 = Color(225, 223, 221)
        self.grey50 = Color(210, 208, 206)
        self.grey60 = Color(200, 198, 196)
        self.grey70 = Color(190, 185, 184)
        self.grey80 = Color(179, 176, 173)
        self.grey90 = Color(161, 159, 157)
        self.grey100 = Color(151, 149, 146)
        self.grey110 = Color(138, 136, 134)
        self.grey120 = Color(121, 119, 117)
        self.grey130 = Color(96, 94, 92)
        self.grey140 = Color(72, 70, 68)
        self.grey150 = Color(59, 58, 57)
        self.grey160 = Color(50, 49, 48)
        self.grey170 = Color(41, 40, 39)
        self.grey180 = Color(37, 36, 35)
        self.grey190 = Color(32, 31, 30)
        self.grey200 = Color(27, 26, 25)
        self.grey210 = Color(22, 21, 20)
        self.grey220 = Color(17, 16, 15)

        self.yellow = _ramp(
            (249, 168, 37), (251, 192, 45), (253, 212, 53), (255, 235, 59),
            (255, 238, 88), (255, 241, 118), (255, 245, 155),
        )
        self.orange = _ramp(
            (153, 61, 7), (172, 68, 8), (209, 88, 10), (247, 99, 12),
            (248, 122, 48), (249, 145, 84), (250, 192, 106),
        )
        self.red = _ramp(
            (143, 10, 21), (162, 11, 24), (185, 13, 28), (232, 17, 35),
            (236, 64, 79), (238, 88, 101), (240, 107, 118),
        )
        self.magenta = _ramp(
            (111, 0, 79), (160, 7, 108), (181, 13, 125), (227, 0, 140),
            (234, 77, 168), (238, 110, 193), (241, 140, 213),
        )
        self.purple = _ramp(
            (44, 15, 118), (61, 15, 153), (78, 17, 174), (104, 33, 122),
            (123, 76, 157), (141, 110, 189), (158, 142, 217),
        )
        self.blue = _ramp(
            (0, 74, 131), (0, 84, 148), (0, 102, 180), (0, 120, 212),
            (38, 140, 220), (76, 160, 224), (96, 171, 228),
        )
        self.teal = _ramp(
            (0, 110, 91), (0, 124, 103), (0, 151, 125), (0, 178, 148),
            (38, 189, 164), (77, 201, 180), (96, 207, 188),
        )
        self.green = _ramp(
            (9, 76, 9), (12, 93, 12), (14, 111, 14), (16, 124, 16),
            (39, 137, 57), (76, 156, 76), (106, 173, 106),
        )

    def create_accent_color(self, primary_color: Color) -> AccentColor:
        """Derive an accent ramp from one colour by stepping down its opacity."""
        dark = with_opacity(primary_color, 0.9)
        light = with_opacity(primary_color, 0.9)
        darker = with_opacity(dark, 0.8)
        lighter = with_opacity(light, 0.8)
        return AccentColor(
            darkest=with_opacity(darker, 0.7),
            darker=darker,
            dark=dark,
            normal=primary_color,
            light=light,
            lighter=lighter,
            lightest=with_opacity(lighter, 0.7),
        )