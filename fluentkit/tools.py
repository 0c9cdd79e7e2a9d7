"""Assorted helpers: hashing, encoding, files and URLs, platform queries."""

from __future__ import annotations

import base64
import functools
import hashlib
import os
import platform
import re
import shutil
import subprocess
import sys
import time
import uuid as _uuid
from collections.abc import Sequence
from html.parser import HTMLParser
from urllib.parse import quote, unquote, urlsplit

from fluentkit.colors import Color

__all__ = [
    "uuid", "read_file", "is_macos", "is_linux", "is_win", "md5", "sha256",
    "to_base64", "from_base64", "remove_dir", "remove_file", "to_local_path",
    "get_file_name_by_url", "get_url_by_file_path", "html_to_plain_text",
    "current_timestamp", "get_application_dir_path", "window_build_number",
    "is_windows11_or_greater", "is_windows10_or_greater", "show_file_in_folder",
    "get_wallpaper_file_path", "image_main_color",
]

MAC_DEFAULT_WALLPAPER = "/System/Library/CoreServices/DefaultDesktop.heic"


def uuid() -> str:
    """Return a random UUID as 32 hex digits without dashes or braces."""
    return _uuid.uuid4().hex


def read_file(file_name: str | os.PathLike) -> str:
    """Return the text of a file, or an empty string if it cannot be read."""
    try:
        with open(file_name, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError:
        return ""


def is_macos() -> bool:
    return sys.platform == "darwin"


def is_linux() -> bool:
    return sys.platform.startswith("linux")


def is_win() -> bool:
    return sys.platform == "win32"


def md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def to_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def from_base64(text: str) -> str:
    """Decode base64 leniently: stray characters are skipped, padding is optional."""
    cleaned = re.sub(r"[^A-Za-z0-9+/]", "", text)
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned).decode("utf-8", errors="replace")


def remove_dir(dir_path: str | os.PathLike) -> bool:
    """Remove a directory tree; a missing directory counts as removed."""
    if not os.path.exists(dir_path):
        return True
    try:
        shutil.rmtree(dir_path)
    except OSError:
        return False
    return True


def remove_file(file_path: str | os.PathLike) -> bool:
    try:
        os.remove(file_path)
    except OSError:
        return False
    return True


def to_local_path(url: str) -> str:
    """Return the local path of a ``file:`` URL, or "" for any other URL."""
    parts = urlsplit(url)
    if parts.scheme.lower() != "file":
        return ""
    path = unquote(parts.path)
    if parts.netloc and parts.netloc.lower() != "localhost":
        path = f"//{parts.netloc}{path}"
    if re.match(r"^/[A-Za-z]:", path):
        path = path[1:]
    return path


def get_file_name_by_url(url: str) -> str:
    return os.path.basename(to_local_path(url))


def get_url_by_file_path(path: str | os.PathLike) -> str:
    """Build a ``file:`` URL for a local path."""
    text = os.fspath(path)
    if not text:
        return ""
    if sys.platform == "win32":
        text = text.replace("\\", "/")
    if text.startswith("//"):
        host, _, rest = text[2:].partition("/")
        return f"file://{host}/{quote(rest, safe='/:')}"
    if re.match(r"^[A-Za-z]:", text):
        text = "/" + text
    if text.startswith("/"):
        return "file://" + quote(text, safe="/:")
    return "file:" + quote(text, safe="/:")


_BLOCK_TAGS = frozenset({
    "html", "body", "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "ul", "ol",
    "table", "tr", "blockquote", "pre", "address", "center", "dl", "dt", "dd", "hr",
})
_SKIP_TAGS = frozenset({"head", "title", "script", "style"})
_LINE_BREAK = "\u2028"


class _PlainTextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: list[str] = []
        self._current: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
        elif tag == "br":
            self._current.append(_LINE_BREAK)
        elif tag in _BLOCK_TAGS:
            self.flush()

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
        elif tag in _BLOCK_TAGS:
            self.flush()

    def handle_data(self, data):
        if not self._skip_depth:
            self._current.append(data)

    def flush(self) -> None:
        text = re.sub(r"[ \t\r\n\f]+", " ", "".join(self._current)).replace("\xa0", " ")
        self._current.clear()
        block = "\n".join(line.strip(" ") for line in text.split(_LINE_BREAK))
        if block.strip():
            self.blocks.append(block)


def html_to_plain_text(html: str) -> str:
    """Render HTML to plain text: tags dropped, whitespace collapsed, blocks on lines."""
    extractor = _PlainTextExtractor()
    extractor.feed(html)
    extractor.close()
    extractor.flush()
    return "\n".join(extractor.blocks)


def current_timestamp() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def get_application_dir_path() -> str:
    """Directory holding the running program."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not program:
        return os.getcwd()
    return os.path.dirname(os.path.abspath(program))


def window_build_number() -> int:
    """The Windows build number, or -1 elsewhere or when it cannot be read."""
    if sys.platform != "win32":
        return -1
    import winreg

    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"
        ) as key:
            value, _ = winreg.QueryValueEx(key, "CurrentBuildNumber")
    except OSError:
        return -1
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@functools.lru_cache(maxsize=None)
def is_windows11_or_greater() -> bool:
    return sys.platform == "win32" and window_build_number() >= 22000


@functools.lru_cache(maxsize=None)
def is_windows10_or_greater() -> bool:
    return sys.platform == "win32" and window_build_number() >= 10240


def show_file_in_folder(path: str | os.PathLike) -> bool:
    """Reveal a file in the system file manager; return whether it was launched."""
    text = os.fspath(path)
    try:
        if sys.platform == "win32":
            subprocess.Popen(["explorer.exe", "/select,", os.path.normpath(text)],
                             stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            return True
        if sys.platform.startswith("linux"):
            folder = os.path.dirname(os.path.abspath(text))
            subprocess.Popen(["xdg-open", folder],
                             stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            return True
        if sys.platform == "darwin":
            subprocess.run(
                ["/usr/bin/osascript", "-e",
                 f'tell application "Finder" to reveal POSIX file "{text}"'],
                capture_output=True, check=False,
            )
            subprocess.run(
                ["/usr/bin/osascript", "-e", 'tell application "Finder" to activate'],
                capture_output=True, check=False,
            )
            return True
    except OSError:
        return False
    return False


def _run_output(args: list[str]) -> bytes:
    try:
        completed = subprocess.run(args, capture_output=True, check=False)
    except OSError:
        return b""
    return (completed.stdout or b"").strip()


def get_wallpaper_file_path() -> str:
    """Path of the current desktop wallpaper, or "" when it cannot be found."""
    if sys.platform == "win32":
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Control Panel\Desktop") as key:
                value, _ = winreg.QueryValueEx(key, "Wallpaper")
        except OSError:
            return ""
        return str(value)
    if sys.platform.startswith("linux"):
        try:
            product = platform.freedesktop_os_release().get("ID", "")
        except OSError:
            return ""
        if product != "uos":
            return ""
        result = _run_output([
            "dbus-send", "--session", "--type=method_call", "--print-reply",
            "--dest=com.deepin.wm", "/com/deepin/wm",
            "com.deepin.wm.GetCurrentWorkspaceBackgroundForMonitor",
            f"string:'{current_timestamp()}'",
        ])
        start = result.find(b"file:///")
        if start == -1:
            return ""
        length = len(result) - start - 8
        return result[start + 7:start + 7 + length].decode("utf-8", errors="replace")
    if sys.platform == "darwin":
        result = _run_output([
            "osascript", "-e",
            'tell application "Finder" to get POSIX path of (desktop picture as alias)',
        ])
        if not result:
            return MAC_DEFAULT_WALLPAPER
        return result.decode("utf-8", errors="replace")
    return ""


def _channels(pixel) -> tuple[int, int, int]:
    if isinstance(pixel, Color):
        return pixel.red, pixel.green, pixel.blue
    red, green, blue = pixel[:3]
    return red, green, blue


def image_main_color(image: Sequence[Sequence], bright: float = 1.0) -> Color:
    """Average colour of an image sampled on a 20-pixel grid, scaled by ``bright``.

    ``image`` is a sequence of rows; each pixel is a Color or an (r, g, b[, a]) tuple.
    """
    step = 20
    height = len(image)
    width = len(image[0]) if height else 0
    count = red = green = blue = 0
    for x in range(0, width, step):
        for y in range(0, height, step):
            row = image[y]
            if x >= len(row):
                continue
            r, g, b = _channels(row[x])
            count += 1
            red += r
            green += g
            blue += b
    if count == 0:
        raise ValueError("image has no pixels")

    def scale(total: int) -> int:
        return min(255, int(bright * total / count))

    return Color(scale(red), scale(green), scale(blue))