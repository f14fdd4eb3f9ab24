# ~/Apps/shiftfm/orchestrator.py
import curses
import time

from dispatcher import Action
from display import CursesDisplay
from key_input import Key, translate
from layout import build_screen
from navigator import EnterDirectory, ListError, SelectFile


class Orchestrator:
    def __init__(self, stdscr, app_state, dispatcher, display=None,
                 poll_timeout_ms=100, refresh_seconds=1.0):
        self.stdscr = stdscr
        self.state = app_state
        self.dispatcher = dispatcher
        self.display = display
        self.poll_timeout_ms = poll_timeout_ms
        self.refresh_seconds = refresh_seconds
        self._last_refresh = 0.0

        if stdscr is not None:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self.stdscr.keypad(True)
            self.stdscr.timeout(self.poll_timeout_ms)
            if self.display is None:
                self.display = CursesDisplay(stdscr)

    # ---------------- helpers ----------------

    def _refresh_listing(self, focus_path=None, keep_notification=False):
        try:
            self.state.navigator.refresh(focus_path=focus_path)
        except ListError as e:
            # keep the previous listing; only tell the user, unless this
            # key press already produced a message
            if not (keep_notification and self.state.notification is not None):
                self.state.notify(str(e), error=True)
        self._last_refresh = time.monotonic()

    # ---------------- UI ----------------

    def redraw(self):
        if self.display is None:
            return
        h, w = self.display.get_terminal_size()
        self.display.render(build_screen(self.state, w, h))

    # ---------------- key routing ----------------

    def handle_key(self, key):
        """Apply one logical key. Returns False when the loop should stop."""
        if key is None:
            return True
        if key is Key.QUIT:
            return False

        self.state.clear_notification()

        if key is Key.HELP:
            if self.state.mode == "help":
                self.state.mode = "browse"
            elif self.state.mode == "browse":
                self.state.mode = "help"
            return True

        if self.state.mode == "help":
            if key in (Key.BACK, Key.ASCEND, Key.ENTER):
                self.state.mode = "browse"
            return True

        if self.state.mode == "menu":
            self._handle_menu_key(key)
        else:
            self._handle_browse_key(key)
        return True

    def _handle_browse_key(self, key):
        nav = self.state.navigator
        if key is Key.UP:
            nav.move_focus(-1)
        elif key is Key.DOWN:
            nav.move_focus(1)
        elif key in (Key.ENTER, Key.RIGHT):
            try:
                result = nav.descend_into()
            except ListError as e:
                self.state.notify(str(e), error=True)
                return
            if result is None:
                self.state.notify("Nothing to select")
            elif isinstance(result, SelectFile):
                self.state.open_menu(result.path)
            elif isinstance(result, EnterDirectory):
                self._last_refresh = time.monotonic()
        elif key in (Key.ASCEND, Key.LEFT):
            try:
                moved = nav.ascend()
            except ListError as e:
                self.state.notify(str(e), error=True)
                return
            if not moved:
                self.state.notify("At lowest directory")
            else:
                self._last_refresh = time.monotonic()

    def _handle_menu_key(self, key):
        if key is Key.UP:
            self.state.move_menu(-1)
        elif key is Key.DOWN:
            self.state.move_menu(1)
        elif key in (Key.LEFT, Key.RIGHT):
            self.state.cycle_method(
                self.state.current_action(), -1 if key is Key.LEFT else 1
            )
        elif key in (Key.BACK, Key.ASCEND):
            self.state.close_menu()
        elif key is Key.ENTER:
            self._apply_current_action()

    def _apply_current_action(self):
        action = self.state.current_action()
        path = self.state.selected_path
        shift = self.state.selected_shift(action)
        note = self.dispatcher.apply(action, path, shift)
        self.state.notification = note

        if action in (Action.ENCRYPT, Action.DECRYPT) and not note.error:
            self.state.close_menu()
            self._refresh_listing(focus_path=note.new_path, keep_notification=True)

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self._last_refresh = time.monotonic()
        self.redraw()

        while True:
            try:
                ch = self.stdscr.getch()
            except KeyboardInterrupt:
                break

            key = translate(ch)
            if key is not None:
                if not self.handle_key(key):
                    break
                self._refresh_listing(
                    focus_path=getattr(self.state.navigator.focused(), "absolute_path", None),
                    keep_notification=True,
                )
            elif time.monotonic() - self._last_refresh >= self.refresh_seconds:
                self._refresh_listing(
                    focus_path=getattr(self.state.navigator.focused(), "absolute_path", None)
                )

            self.redraw()
