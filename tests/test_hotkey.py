import pytest

from fluentkit.hotkey import (
    KEY_UNKNOWN,
    Hotkey,
    HotkeyBackend,
    HotkeyManager,
    KeySequence,
    Modifier,
    NativeShortcut,
    SequenceHotkey,
)


@pytest.fixture
def manager():
    return HotkeyManager(HotkeyBackend())


class RefusingBackend(HotkeyBackend):
    def register_shortcut(self, shortcut):
        raise OSError("grab refused")


class NoKeysBackend(HotkeyBackend):
    def native_keycode(self, key):
        return None


def test_native_shortcut_validity_and_equality():
    assert not NativeShortcut.invalid().valid
    assert NativeShortcut(5, 2).valid
    assert NativeShortcut(5, 2) == NativeShortcut(5, 2)
    assert NativeShortcut(0, 0) != NativeShortcut.invalid()
    assert len({NativeShortcut(5, 2), NativeShortcut(5, 2)}) == 1


def test_parse_letter_with_modifiers():
    seq = KeySequence.parse("Ctrl+Shift+a")
    assert seq.key == ord("A")
    assert seq.modifiers == Modifier.CONTROL | Modifier.SHIFT
    assert len(seq) == 1


def test_parse_empty():
    seq = KeySequence.parse("")
    assert seq.is_empty
    assert seq.key == KEY_UNKNOWN


def test_parse_plus_key():
    assert KeySequence.parse("Ctrl++").key == ord("+")
    assert KeySequence.parse("Ctrl++").modifiers == Modifier.CONTROL


@pytest.mark.parametrize("text", ["Ctrl+Bogus", "Hyper+A", "Ctrl+"])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        KeySequence.parse(text)


@pytest.mark.parametrize("text", ["Ctrl+Alt+F5", "Shift+Esc", "Meta+Space", "Ctrl+A, Alt+B"])
def test_string_round_trip(text):
    seq = KeySequence.parse(text)
    assert KeySequence.parse(str(seq)) == seq


def test_parse_multiple_combos():
    seq = KeySequence.parse("Ctrl+A, Ctrl+B")
    assert len(seq) == 2
    assert seq.combos[1][0] == ord("B")


def test_auto_register_grabs_and_dispatches(manager):
    hotkey = Hotkey("Ctrl+K", True, manager=manager)
    assert hotkey.registered
    assert hotkey.native in manager.backend.grabbed
    presses = []
    releases = []
    hotkey.on_activated(lambda: presses.append(1))
    hotkey.on_released(lambda: releases.append(1))
    assert manager.activate_shortcut(hotkey.native) == 1
    assert manager.release_shortcut(hotkey.native) == 1
    assert presses == [1]
    assert releases == [1]


def test_unsubscribe_stops_callbacks(manager):
    hotkey = Hotkey("Alt+X", True, manager=manager)
    calls = []
    stop = hotkey.on_activated(lambda: calls.append(1))
    stop()
    manager.activate_shortcut(hotkey.native)
    assert calls == []


def test_registered_changed_events(manager):
    hotkey = Hotkey("Ctrl+K", manager=manager)
    events = []
    hotkey.on_registered_changed(events.append)
    assert hotkey.set_registered(True)
    assert hotkey.set_registered(False)
    assert events == [True, False]
    assert manager.backend.grabbed == frozenset()


def test_shared_native_shortcut_grabbed_once(manager):
    first = Hotkey("Ctrl+J", True, manager=manager)
    second = Hotkey("Ctrl+J", True, manager=manager)
    assert first.native == second.native
    assert manager.activate_shortcut(first.native) == 2
    assert manager.remove_shortcut(first)
    assert first.native in manager.backend.grabbed
    assert manager.remove_shortcut(second)
    assert manager.backend.grabbed == frozenset()


def test_add_shortcut_twice_fails(manager):
    hotkey = Hotkey("Ctrl+J", True, manager=manager)
    assert manager.add_shortcut(hotkey) is False


def test_remove_unregistered_fails(manager):
    hotkey = Hotkey("Ctrl+J", manager=manager)
    assert manager.remove_shortcut(hotkey) is False


def test_change_while_registered_needs_auto_register(manager):
    hotkey = Hotkey("Ctrl+J", True, manager=manager)
    assert hotkey.set_shortcut("Ctrl+L") is False
    assert hotkey.shortcut == KeySequence.parse("Ctrl+J")
    assert hotkey.set_shortcut("Ctrl+L", True) is True
    assert hotkey.shortcut == KeySequence.parse("Ctrl+L")
    assert manager.backend.grabbed == frozenset({hotkey.native})


def test_mapping_overrides_native(manager):
    custom = NativeShortcut(99, 7)
    manager.add_mapping("Ctrl+Q", custom)
    hotkey = Hotkey("Ctrl+Q", True, manager=manager)
    assert hotkey.native == custom
    assert manager.native_shortcut(ord("Q"), Modifier.CONTROL) == custom


def test_add_mapping_empty_rejected(manager):
    with pytest.raises(ValueError):
        manager.add_mapping("", NativeShortcut(1, 1))


def test_refused_grab_leaves_unregistered():
    manager = HotkeyManager(RefusingBackend())
    hotkey = Hotkey(manager=manager)
    assert hotkey.set_shortcut("Ctrl+K", True) is False
    assert not hotkey.registered
    assert manager.activate_shortcut(hotkey.native) == 0


def test_unmappable_key_resets():
    manager = HotkeyManager(NoKeysBackend())
    hotkey = Hotkey(manager=manager)
    assert hotkey.set_shortcut("Ctrl+K") is False
    assert hotkey.key_code == KEY_UNKNOWN
    assert not hotkey.native.valid
    assert hotkey.shortcut.is_empty


def test_empty_sequence_resets(manager):
    hotkey = Hotkey("Ctrl+K", True, manager=manager)
    assert hotkey.set_shortcut("") is True
    assert hotkey.shortcut.is_empty
    assert not hotkey.registered


def test_multiple_combos_use_first(manager):
    hotkey = Hotkey(manager=manager)
    assert hotkey.set_shortcut("Ctrl+A, Ctrl+B")
    assert hotkey.key_code == ord("A")


def test_native_shortcut_hotkey(manager):
    native = NativeShortcut(42, 3)
    hotkey = Hotkey(native, True, manager=manager)
    assert hotkey.registered
    assert hotkey.native == native
    assert hotkey.key_code == KEY_UNKNOWN
    assert hotkey.set_native_shortcut(NativeShortcut.invalid(), True) is True
    assert not hotkey.native.valid
    assert manager.backend.grabbed == frozenset()


def test_set_registered_without_native_fails(manager):
    hotkey = Hotkey(manager=manager)
    assert hotkey.set_registered(True) is False
    assert hotkey.set_registered(False) is True


def test_backend_errors():
    backend = HotkeyBackend()
    with pytest.raises(OSError):
        backend.register_shortcut(NativeShortcut.invalid())
    with pytest.raises(OSError):
        backend.unregister_shortcut(NativeShortcut(1, 1))
    backend.register_shortcut(NativeShortcut(1, 1))
    with pytest.raises(OSError):
        backend.register_shortcut(NativeShortcut(1, 1))


def test_sequence_hotkey_registers_and_forwards(manager):
    item = SequenceHotkey("Ctrl+Alt+T", "terminal", manager=manager)
    assert item.is_registered
    assert item.name == "terminal"
    calls = []
    item.on_activated(lambda: calls.append(item.sequence))
    native = manager.native_shortcut(ord("T"), Modifier.CONTROL | Modifier.ALT)
    manager.activate_shortcut(native)
    assert calls == ["Ctrl+Alt+T"]


def test_sequence_hotkey_change_frees_old(manager):
    item = SequenceHotkey("Ctrl+1", manager=manager)
    old = manager.native_shortcut(ord("1"), Modifier.CONTROL)
    item.sequence = "Ctrl+2"
    new = manager.native_shortcut(ord("2"), Modifier.CONTROL)
    assert manager.backend.grabbed == frozenset({new})
    assert manager.activate_shortcut(old) == 0
    assert item.is_registered


def test_sequence_hotkey_empty_not_registered(manager):
    item = SequenceHotkey("Ctrl+1", manager=manager)
    item.sequence = ""
    assert not item.is_registered
    assert manager.backend.grabbed == frozenset()


def test_sequence_hotkey_conflict_reports_unregistered():
    manager = HotkeyManager(RefusingBackend())
    item = SequenceHotkey("Ctrl+1", manager=manager)
    assert item.is_registered is False