import os

import pytest

from app_state import AppState
from dispatcher import Action, Dispatcher
from key_input import Key
from navigator import Navigator
from orchestrator import Orchestrator


class DummyDisplay:
    def __init__(self, h=24, w=400):
        self._h = h
        self._w = w
        self.frames = []

    def get_terminal_size(self):
        return self._h, self._w

    def render(self, rows):
        self.frames.append([r.text for r in rows])


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "inner.txt").write_bytes(b"inner")
    (tmp_path / "a.txt").write_bytes(b"hi")
    return tmp_path


def _app(start, opened=None):
    nav = Navigator(str(start))
    nav.enter()
    state = AppState(nav, [1, 5, 12])
    dispatcher = Dispatcher(
        opener=(opened if opened is not None else []).append,
        toggle_display=state.toggle_full_paths,
    )
    display = DummyDisplay()
    return Orchestrator(None, state, dispatcher, display=display), state


def _focus_on(state, name):
    nav = state.navigator
    for idx, entry in enumerate(nav.entries):
        if entry.display_name == name:
            nav.focus_index = idx
            return
    raise AssertionError(f"{name} not listed")


def _press(orch, *keys):
    for key in keys:
        assert orch.handle_key(key) is True


def test_enter_on_directory_descends(tree):
    orch, state = _app(tree)
    _focus_on(state, "docs")
    _press(orch, Key.ENTER)
    assert state.navigator.current_path == str(tree / "docs")
    assert state.navigator.focus_index == 0
    assert [e.display_name for e in state.navigator.entries] == ["inner.txt"]


def test_encrypt_and_decrypt_through_menu(tree):
    orch, state = _app(tree)
    _focus_on(state, "a.txt")
    _press(orch, Key.ENTER)
    assert state.mode == "menu"

    _press(orch, Key.DOWN, Key.ENTER)  # Encrypt with shift 1
    assert state.mode == "browse"
    assert not state.notification.error
    assert (tree / "1c.a.txt").read_bytes() == b"ij"
    assert state.navigator.focused().display_name == "1c.a.txt"

    _press(orch, Key.ENTER)
    _press(orch, Key.DOWN, Key.DOWN, Key.ENTER)  # Decrypt
    assert (tree / "a.txt").read_bytes() == b"hi"
    assert not (tree / "1c.a.txt").exists()
    assert state.navigator.focused().display_name == "a.txt"


def test_menu_left_right_cycles_method(tree):
    orch, state = _app(tree)
    _focus_on(state, "a.txt")
    _press(orch, Key.ENTER, Key.DOWN, Key.RIGHT, Key.RIGHT)
    assert state.selected_shift(Action.ENCRYPT) == 12
    assert state.selected_shift(Action.DECRYPT) == 1
    _press(orch, Key.ENTER)
    assert (tree / "12c.a.txt").exists()


def test_decrypt_preselects_tagged_shift(tree):
    (tree / "5c.b.txt").write_bytes(b"mn")
    orch, state = _app(tree)
    _focus_on(state, "5c.b.txt")
    _press(orch, Key.ENTER)
    assert state.selected_shift(Action.DECRYPT) == 5
    _press(orch, Key.DOWN, Key.DOWN, Key.ENTER)
    assert (tree / "b.txt").read_bytes() == b"hi"


def test_decrypt_mismatch_keeps_menu_open(tree):
    (tree / "5c.b.txt").write_bytes(b"mn")
    orch, state = _app(tree)
    _focus_on(state, "5c.b.txt")
    _press(orch, Key.ENTER, Key.DOWN, Key.DOWN, Key.LEFT, Key.ENTER)
    assert state.notification.error
    assert state.mode == "menu"
    assert (tree / "5c.b.txt").read_bytes() == b"mn"


def test_read_action_opens_file(tree):
    opened = []
    orch, state = _app(tree, opened)
    _focus_on(state, "a.txt")
    _press(orch, Key.ENTER, Key.ENTER)
    assert opened == [str(tree / "a.txt")]


def test_toggle_display_flips_full_paths(tree):
    orch, state = _app(tree)
    _focus_on(state, "a.txt")
    _press(orch, Key.ENTER, Key.DOWN, Key.DOWN, Key.DOWN, Key.ENTER)
    assert state.full_paths is True
    orch.redraw()
    assert any(str(tree / "a.txt") in line for line in orch.display.frames[-1])


def test_back_leaves_menu(tree):
    orch, state = _app(tree)
    _focus_on(state, "a.txt")
    _press(orch, Key.ENTER, Key.BACK)
    assert state.mode == "browse"
    assert state.selected_path is None


def test_ascend_at_root_reports_lowest_directory():
    orch, state = _app(os.path.abspath(os.sep))
    path = state.navigator.current_path
    _press(orch, Key.ASCEND)
    assert state.notification.text == "At lowest directory"
    assert state.navigator.current_path == path


def test_ascend_moves_to_parent(tree):
    orch, state = _app(tree / "docs")
    _press(orch, Key.LEFT)
    assert state.navigator.current_path == str(tree)
    assert state.navigator.focused().display_name == "docs"


def test_notification_cleared_on_next_key():
    orch, state = _app(os.path.abspath(os.sep))
    _press(orch, Key.ASCEND)
    assert state.notification is not None
    _press(orch, Key.DOWN)
    assert state.notification is None


def test_vanished_directory_becomes_notification(tree):
    orch, state = _app(tree / "docs")
    (tree / "docs" / "inner.txt").unlink()
    (tree / "docs").rmdir()
    orch._refresh_listing()
    assert state.notification.error
    assert [e.display_name for e in state.navigator.entries] == ["inner.txt"]


def test_help_toggles_and_quit_stops():
    orch, state = _app(os.path.abspath(os.sep))
    _press(orch, Key.HELP)
    assert state.mode == "help"
    _press(orch, Key.HELP)
    assert state.mode == "browse"
    assert orch.handle_key(None) is True
    assert orch.handle_key(Key.QUIT) is False


class DummyWin:
    def __init__(self, keys):
        self.keys = list(keys)

    def getch(self):
        return self.keys.pop(0) if self.keys else ord("q")

    def keypad(self, flag):
        pass

    def timeout(self, ms):
        pass

    def clear(self):
        pass

    def refresh(self):
        pass


def _run(start, keys, opened=None, refresh_seconds=1.0):
    nav = Navigator(str(start))
    nav.enter()
    state = AppState(nav, [1, 5, 12])
    dispatcher = Dispatcher(opener=(opened if opened is not None else []).append)
    orch = Orchestrator(
        DummyWin(keys), state, dispatcher,
        display=DummyDisplay(), refresh_seconds=refresh_seconds,
    )
    return orch, state


def test_idle_ticks_relist_on_cadence(tree):
    orch, state = _run(tree, [-1, -1, ord("q")], refresh_seconds=0)
    (tree / "new.txt").write_bytes(b"x")
    orch.run()
    assert "new.txt" in [e.display_name for e in state.navigator.entries]
    assert len(orch.display.frames) == 3


def test_idle_ticks_wait_for_cadence(tree):
    orch, state = _run(tree, [-1, ord("q")], refresh_seconds=3600)
    (tree / "new.txt").write_bytes(b"x")
    orch.run()
    assert "new.txt" not in [e.display_name for e in state.navigator.entries]


def test_action_message_survives_failed_relist(tree):
    opened = []
    orch, state = _run(tree / "docs", [10, 10, ord("q")], opened=opened)
    (tree / "docs" / "inner.txt").unlink()
    (tree / "docs").rmdir()
    orch.run()
    assert opened == [str(tree / "docs" / "inner.txt")]
    assert state.notification.text == "Opened inner.txt"
