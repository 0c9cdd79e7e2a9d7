"""Framework-independent colours, themes, text styles, table and tree models, captchas and hotkeys."""

__version__ = "1.0.0"

__all__ = [
    "captcha",
    "colors",
    "hotkey",
    "sortproxy",
    "tablemodel",
    "textstyle",
    "theme",
    "tools",
    "treemodel",
]