"""Light and dark theme state and the colours derived from it."""

from __future__ import annotations

import math
import threading
from collections.abc import Callable
from enum import Enum, auto

from fluentkit.colors import AccentColor, Color, Colors
from fluentkit.tools import get_wallpaper_file_path

__all__ = ["DarkMode", "Theme", "is_dark_color"]


class DarkMode(Enum):
    """Whether the theme follows the system, or is forced light or dark."""

    SYSTEM = auto()
    LIGHT = auto()
    DARK = auto()


def is_dark_color(color: Color) -> bool:
    """True when the colour's relative luminance is at most half scale."""
    luminance = color.red * 0.2126 + color.green * 0.7152 + color.blue * 0.0722
    return luminance <= 255.0 / 2


def _alpha(fraction: float) -> int:
    return math.floor(255 * fraction + 0.5)


class Theme:
    """Theme settings; derived colours are recomputed whenever they change."""

    def __init__(
        self,
        accent_color: AccentColor | None = None,
        *,
        system_dark: bool = False,
        wallpaper_provider: Callable[[], str] = get_wallpaper_file_path,
    ) -> None:
        self._accent_color = accent_color if accent_color is not None else Colors().blue
        self._dark_mode = DarkMode.LIGHT
        self._system_dark = system_dark
        self._blur_behind_window_enabled = False
        self._wallpaper_provider = wallpaper_provider
        self._lock = threading.Lock()
        self.native_text = False
        self.animation_enabled = True
        self.desktop_image_path = ""
        self.refresh_colors()

    @property
    def dark(self) -> bool:
        if self._dark_mode is DarkMode.DARK:
            return True
        if self._dark_mode is DarkMode.SYSTEM:
            return self._system_dark
        return False

    @property
    def dark_mode(self) -> DarkMode:
        return self._dark_mode

    @dark_mode.setter
    def dark_mode(self, value: DarkMode) -> None:
        self._dark_mode = DarkMode(value)
        self.refresh_colors()

    @property
    def accent_color(self) -> AccentColor:
        return self._accent_color

    @accent_color.setter
    def accent_color(self, value: AccentColor) -> None:
        self._accent_color = value
        self.refresh_colors()

    @property
    def blur_behind_window_enabled(self) -> bool:
        return self._blur_behind_window_enabled

    @blur_behind_window_enabled.setter
    def blur_behind_window_enabled(self, value: bool) -> None:
        self._blur_behind_window_enabled = bool(value)
        self.update_desktop_image()

    def refresh_colors(self) -> None:
        """Recompute every derived colour from the accent and the dark flag."""
        dark = self.dark
        accent = self._accent_color
        self.primary_color = accent.lighter if dark else accent.dark
        self.background_color = Color(0, 0, 0, 255) if dark else Color(255, 255, 255, 255)
        self.divider_color = Color(80, 80, 80, 255) if dark else Color(210, 210, 210, 255)
        self.window_background_color = (
            Color(32, 32, 32, 255) if dark else Color(237, 237, 237, 255)
        )
        self.window_active_background_color = (
            Color(26, 26, 26, 255) if dark else Color(243, 243, 243, 255)
        )
        self.font_primary_color = Color(248, 248, 248, 255) if dark else Color(7, 7, 7, 255)
        self.font_secondary_color = (
            Color(222, 222, 222, 255) if dark else Color(102, 102, 102, 255)
        )
        self.font_tertiary_color = (
            Color(200, 200, 200, 255) if dark else Color(153, 153, 153, 255)
        )
        self.item_normal_color = Color(255, 255, 255, 0) if dark else Color(0, 0, 0, 0)
        self.frame_color = (
            Color(56, 56, 56, _alpha(0.8)) if dark else Color(243, 243, 243, _alpha(0.8))
        )
        self.frame_active_color = (
            Color(48, 48, 48, _alpha(0.8)) if dark else Color(255, 255, 255, _alpha(0.8))
        )
        self.item_hover_color = (
            Color(255, 255, 255, _alpha(0.06)) if dark else Color(0, 0, 0, _alpha(0.03))
        )
        self.item_press_color = (
            Color(255, 255, 255, _alpha(0.09)) if dark else Color(0, 0, 0, _alpha(0.06))
        )
        self.item_check_color = (
            Color(255, 255, 255, _alpha(0.12)) if dark else Color(0, 0, 0, _alpha(0.09))
        )

    def handle_palette_change(self, window_color: Color) -> bool:
        """Record the system window colour and return the resulting dark flag."""
        self._system_dark = is_dark_color(window_color)
        self.refresh_colors()
        return self.dark

    def update_desktop_image(self) -> bool:
        """Refresh the wallpaper path when blur is on; return whether it changed."""
        if not self._blur_behind_window_enabled:
            return False
        with self._lock:
            path = self._wallpaper_provider()
            if path == self.desktop_image_path:
                return False
            self.desktop_image_path = path
            return True