"""System-wide hotkeys: key sequences, native shortcuts and their registration."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntFlag

__all__ = [
    "KEY_UNKNOWN",
    "Modifier",
    "NativeShortcut",
    "KeySequence",
    "HotkeyBackend",
    "HotkeyManager",
    "Hotkey",
    "SequenceHotkey",
]

logger = logging.getLogger(__name__)

KEY_UNKNOWN = 0x01FFFFFF


class Modifier(IntFlag):
    """Keyboard modifiers, as bits above the key code."""

    NONE = 0
    SHIFT = 0x02000000
    CONTROL = 0x04000000
    ALT = 0x08000000
    META = 0x10000000
    KEYPAD = 0x20000000


_MODIFIER_NAMES: tuple[tuple[Modifier, str], ...] = (
    (Modifier.CONTROL, "Ctrl"),
    (Modifier.ALT, "Alt"),
    (Modifier.SHIFT, "Shift"),
    (Modifier.META, "Meta"),
    (Modifier.KEYPAD, "Num"),
)

_MODIFIER_PARSE = {
    "ctrl": Modifier.CONTROL,
    "control": Modifier.CONTROL,
    "alt": Modifier.ALT,
    "shift": Modifier.SHIFT,
    "meta": Modifier.META,
    "num": Modifier.KEYPAD,
}

_KEY_NAMES: dict[int, str] = {
    0x01000000: "Esc",
    0x01000001: "Tab",
    0x01000002: "Backtab",
    0x01000003: "Backspace",
    0x01000004: "Return",
    0x01000005: "Enter",
    0x01000006: "Ins",
    0x01000007: "Del",
    0x01000008: "Pause",
    0x01000009: "Print",
    0x0100000A: "SysReq",
    0x0100000B: "Clear",
    0x01000010: "Home",
    0x01000011: "End",
    0x01000012: "Left",
    0x01000013: "Up",
    0x01000014: "Right",
    0x01000015: "Down",
    0x01000016: "PgUp",
    0x01000017: "PgDown",
    0x01000024: "CapsLock",
    0x01000025: "NumLock",
    0x01000026: "ScrollLock",
    0x01000055: "Menu",
    0x01000058: "Help",
    0x20: "Space",
}
_KEY_NAMES.update({0x01000030 + n - 1: f"F{n}" for n in range(1, 36)})

_KEY_PARSE: dict[str, int] = {name.lower(): code for code, name in _KEY_NAMES.items()}
_KEY_PARSE.update({
    "escape": 0x01000000,
    "insert": 0x01000006,
    "delete": 0x01000007,
    "pageup": 0x01000016,
    "pagedown": 0x01000017,
})


@dataclass(frozen=True)
class NativeShortcut:
    """A shortcut in the backend's own key and modifier codes."""

    key: int = 0
    modifier: int = 0
    valid: bool = True

    @classmethod
    def invalid(cls) -> NativeShortcut:
        return cls(0, 0, False)


def _parse_combo(text: str) -> tuple[int, Modifier]:
    combo = text.strip()
    if not combo:
        raise ValueError("empty key combination")
    if combo == "+":
        key_name, modifier_part = "+", ""
    elif combo.endswith("++"):
        key_name, modifier_part = "+", combo[:-2]
    else:
        modifier_part, _, key_name = combo.rpartition("+")
        if not key_name:
            raise ValueError(f"missing key in {text!r}")
    modifiers = Modifier.NONE
    if modifier_part:
        for name in modifier_part.split("+"):
            try:
                modifiers |= _MODIFIER_PARSE[name.strip().lower()]
            except KeyError:
                raise ValueError(f"unknown modifier {name!r} in {text!r}") from None
    lowered = key_name.strip().lower()
    if lowered in _KEY_PARSE:
        return _KEY_PARSE[lowered], modifiers
    if len(key_name) == 1:
        return ord(key_name.upper()), modifiers
    raise ValueError(f"unknown key {key_name!r} in {text!r}")


def _combo_to_string(key: int, modifiers: Modifier) -> str:
    parts = [name for flag, name in _MODIFIER_NAMES if modifiers & flag]
    if key in _KEY_NAMES:
        parts.append(_KEY_NAMES[key])
    elif 0 < key <= 0x10FFFF:
        parts.append(chr(key))
    else:
        parts.append(f"0x{key:x}")
    return "+".join(parts)


@dataclass(frozen=True)
class KeySequence:
    """One or more key combinations, each a key code with modifiers."""

    combos: tuple[tuple[int, Modifier], ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, text: str) -> KeySequence:
        """Parse text such as "Ctrl+Shift+A" or "Ctrl+A, Ctrl+B"; "" is empty."""
        if not text.strip():
            return cls(())
        return cls(tuple(_parse_combo(part) for part in re.split(r",\s+", text.strip())))

    def __len__(self) -> int:
        return len(self.combos)

    @property
    def is_empty(self) -> bool:
        return not self.combos

    @property
    def key(self) -> int:
        return self.combos[0][0] if self.combos else KEY_UNKNOWN

    @property
    def modifiers(self) -> Modifier:
        return self.combos[0][1] if self.combos else Modifier.NONE

    def __str__(self) -> str:
        return ", ".join(_combo_to_string(key, mods) for key, mods in self.combos)


class HotkeyBackend:
    """Translates shortcuts to native codes and grabs them.

    This base implementation works in-process: native key codes equal the key
    codes, modifiers use the bits shift=0x4, control=0x2, alt=0x1, meta=0x8,
    keypad=0x10, and grabs are recorded. Platform backends override the four
    methods and raise OSError when the system refuses a grab.
    """

    _NATIVE_MODIFIER_BITS = (
        (Modifier.SHIFT, 0x4),
        (Modifier.CONTROL, 0x2),
        (Modifier.ALT, 0x1),
        (Modifier.META, 0x8),
        (Modifier.KEYPAD, 0x10),
    )

    def __init__(self) -> None:
        self._grabbed: set[NativeShortcut] = set()

    @property
    def grabbed(self) -> frozenset[NativeShortcut]:
        return frozenset(self._grabbed)

    def native_keycode(self, key: int) -> int | None:
        """Native code of ``key``, or None when it has none."""
        if key <= 0 or key == KEY_UNKNOWN:
            return None
        return key

    def native_modifiers(self, modifiers: Modifier) -> int | None:
        """Native bits for ``modifiers``, or None when they cannot be mapped."""
        bits = 0
        for flag, native in self._NATIVE_MODIFIER_BITS:
            if modifiers & flag:
                bits |= native
        return bits

    def register_shortcut(self, shortcut: NativeShortcut) -> None:
        if not shortcut.valid:
            raise OSError("cannot grab an invalid shortcut")
        if shortcut in self._grabbed:
            raise OSError(f"shortcut {shortcut} is already grabbed")
        self._grabbed.add(shortcut)

    def unregister_shortcut(self, shortcut: NativeShortcut) -> None:
        if shortcut not in self._grabbed:
            raise OSError(f"shortcut {shortcut} is not grabbed")
        self._grabbed.remove(shortcut)


class HotkeyManager:
    """Keeps track of registered hotkeys and dispatches native key events to them."""

    def __init__(self, backend: HotkeyBackend | None = None) -> None:
        self.backend = backend if backend is not None else HotkeyBackend()
        self._mapping: dict[tuple[int, Modifier], NativeShortcut] = {}
        self._shortcuts: dict[NativeShortcut, list[Hotkey]] = {}
        self._lock = threading.RLock()

    def add_mapping(self, sequence: KeySequence | str, native: NativeShortcut) -> None:
        """Use ``native`` for the first combination of ``sequence`` from now on."""
        if isinstance(sequence, str):
            sequence = KeySequence.parse(sequence)
        if sequence.is_empty:
            raise ValueError("cannot map an empty key sequence")
        with self._lock:
            self._mapping[(sequence.key, Modifier(sequence.modifiers))] = native

    def native_shortcut(self, key: int, modifiers: Modifier) -> NativeShortcut:
        """Native form of a key and modifiers; invalid when the backend has none."""
        with self._lock:
            mapped = self._mapping.get((key, Modifier(modifiers)))
            if mapped is not None:
                return mapped
            native_key = self.backend.native_keycode(key)
            native_mods = self.backend.native_modifiers(Modifier(modifiers))
            if native_key is None or native_mods is None:
                return NativeShortcut.invalid()
            return NativeShortcut(native_key, native_mods)

    def add_shortcut(self, hotkey: Hotkey) -> bool:
        """Register ``hotkey``, grabbing its native shortcut if nobody holds it yet."""
        with self._lock:
            if hotkey.registered:
                return False
            shortcut = hotkey.native
            if shortcut not in self._shortcuts:
                try:
                    self.backend.register_shortcut(shortcut)
                except OSError as error:
                    logger.warning("Failed to register %s. Error: %s", hotkey.shortcut, error)
                    return False
                self._shortcuts[shortcut] = []
            self._shortcuts[shortcut].append(hotkey)
        hotkey._set_registered(True)
        return True

    def remove_shortcut(self, hotkey: Hotkey) -> bool:
        """Unregister ``hotkey``, releasing the grab when it was the last user."""
        with self._lock:
            if not hotkey.registered:
                return False
            shortcut = hotkey.native
            holders = self._shortcuts.get(shortcut, [])
            if hotkey not in holders:
                return False
            holders.remove(hotkey)
            last = not holders
            if last:
                del self._shortcuts[shortcut]
        hotkey._set_registered(False)
        if last:
            try:
                self.backend.unregister_shortcut(shortcut)
            except OSError as error:
                logger.warning("Failed to unregister %s. Error: %s", hotkey.shortcut, error)
                return False
        return True

    def _holders(self, shortcut: NativeShortcut) -> list[Hotkey]:
        with self._lock:
            return list(self._shortcuts.get(shortcut, ()))

    def activate_shortcut(self, shortcut: NativeShortcut) -> int:
        """Tell every hotkey on ``shortcut`` it was pressed; return how many."""
        holders = self._holders(shortcut)
        for hotkey in holders:
            hotkey._fire(hotkey._activated)
        return len(holders)

    def release_shortcut(self, shortcut: NativeShortcut) -> int:
        """Tell every hotkey on ``shortcut`` it was released; return how many."""
        holders = self._holders(shortcut)
        for hotkey in holders:
            hotkey._fire(hotkey._released)
        return len(holders)


_shared_manager: HotkeyManager | None = None
_shared_lock = threading.Lock()


def _default_manager() -> HotkeyManager:
    global _shared_manager
    with _shared_lock:
        if _shared_manager is None:
            _shared_manager = HotkeyManager()
        return _shared_manager


def _subscribe(listeners: list, callback: Callable) -> Callable[[], None]:
    listeners.append(callback)

    def unsubscribe() -> None:
        if callback in listeners:
            listeners.remove(callback)

    return unsubscribe


class Hotkey:
    """A global shortcut that can be registered with a manager."""

    def __init__(
        self,
        shortcut: KeySequence | str | NativeShortcut | None = None,
        auto_register: bool = False,
        *,
        manager: HotkeyManager | None = None,
    ) -> None:
        self.manager = manager if manager is not None else _default_manager()
        self.key_code = KEY_UNKNOWN
        self.modifiers = Modifier.NONE
        self.native = NativeShortcut.invalid()
        self._registered = False
        self._activated: list[Callable[[], None]] = []
        self._released: list[Callable[[], None]] = []
        self._registered_changed: list[Callable[[bool], None]] = []
        if isinstance(shortcut, NativeShortcut):
            self.set_native_shortcut(shortcut, auto_register)
        elif shortcut is not None:
            self.set_shortcut(shortcut, auto_register)

    def __repr__(self) -> str:
        return f"Hotkey({str(self.shortcut)!r}, registered={self._registered})"

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def shortcut(self) -> KeySequence:
        if self.key_code == KEY_UNKNOWN:
            return KeySequence(())
        return KeySequence(((self.key_code, self.modifiers),))

    def _set_registered(self, value: bool) -> None:
        self._registered = value
        for callback in list(self._registered_changed):
            callback(value)

    def _fire(self, listeners: list[Callable[[], None]]) -> None:
        for callback in list(listeners):
            callback()

    def _clear(self) -> None:
        self.key_code = KEY_UNKNOWN
        self.modifiers = Modifier.NONE
        self.native = NativeShortcut.invalid()

    def _release_for_change(self, auto_register: bool) -> bool:
        if not self._registered:
            return True
        if not auto_register:
            return False
        return self.manager.remove_shortcut(self)

    def set_shortcut(self, sequence: KeySequence | str, auto_register: bool = False) -> bool:
        """Use the first combination of ``sequence``; an empty one resets."""
        if isinstance(sequence, str):
            sequence = KeySequence.parse(sequence)
        if sequence.is_empty:
            return self.reset_shortcut()
        if len(sequence) > 1:
            logger.warning(
                "Key sequences with multiple shortcuts are not allowed! "
                "Only the first shortcut will be used!"
            )
        return self.set_key(sequence.key, sequence.modifiers, auto_register)

    def set_key(self, key: int, modifiers: Modifier, auto_register: bool = False) -> bool:
        if not self._release_for_change(auto_register):
            return False
        if key == KEY_UNKNOWN:
            self._clear()
            return True
        self.key_code = key
        self.modifiers = Modifier(modifiers)
        self.native = self.manager.native_shortcut(key, self.modifiers)
        if self.native.valid:
            if auto_register:
                return self.manager.add_shortcut(self)
            return True
        logger.warning(
            "Unable to map shortcut to native keys. Key: %s Modifiers: %s", key, modifiers
        )
        self._clear()
        return False

    def reset_shortcut(self) -> bool:
        if self._registered and not self.manager.remove_shortcut(self):
            return False
        self._clear()
        return True

    def set_native_shortcut(self, native: NativeShortcut, auto_register: bool = False) -> bool:
        if not self._release_for_change(auto_register):
            return False
        self.key_code = KEY_UNKNOWN
        self.modifiers = Modifier.NONE
        if native.valid:
            self.native = native
            if auto_register:
                return self.manager.add_shortcut(self)
            return True
        self.native = NativeShortcut.invalid()
        return True

    def set_registered(self, registered: bool) -> bool:
        if self._registered and not registered:
            return self.manager.remove_shortcut(self)
        if not self._registered and registered:
            if not self.native.valid:
                return False
            return self.manager.add_shortcut(self)
        return True

    def on_activated(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` on each press; return a function that stops it."""
        return _subscribe(self._activated, callback)

    def on_released(self, callback: Callable[[], None]) -> Callable[[], None]:
        return _subscribe(self._released, callback)

    def on_registered_changed(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        return _subscribe(self._registered_changed, callback)


class SequenceHotkey:
    """A named hotkey bound to a text sequence, registered whenever it is set."""

    def __init__(
        self, sequence: str = "", name: str = "", *, manager: HotkeyManager | None = None
    ) -> None:
        self.name = name
        self._manager = manager
        self._sequence = ""
        self._hotkey: Hotkey | None = None
        self._is_registered = False
        self._activated: list[Callable[[], None]] = []
        if sequence:
            self.sequence = sequence

    @property
    def is_registered(self) -> bool:
        return self._is_registered

    @property
    def sequence(self) -> str:
        return self._sequence

    @sequence.setter
    def sequence(self, value: str) -> None:
        if value == self._sequence:
            return
        parsed = KeySequence.parse(value)
        self._sequence = value
        if self._hotkey is not None:
            self._hotkey.set_registered(False)
            self._hotkey = None
        hotkey = Hotkey(manager=self._manager)
        hotkey.on_activated(self._forward)
        hotkey.on_registered_changed(self._track)
        self._hotkey = hotkey
        hotkey.set_shortcut(parsed, True)
        self._is_registered = hotkey.registered

    def _forward(self) -> None:
        for callback in list(self._activated):
            callback()

    def _track(self, registered: bool) -> None:
        if self._hotkey is not None:
            self._is_registered = self._hotkey.registered

    def on_activated(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` when the sequence is pressed; return an unsubscriber."""
        return _subscribe(self._activated, callback)