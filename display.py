# ~/Apps/shiftfm/display.py
import curses

from layout import Style


class CursesDisplay:
    PAIR_REGULAR = 1
    PAIR_HIGHLIGHTED = 2

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self._attrs = {Style.REGULAR: curses.A_NORMAL, Style.HIGHLIGHTED: curses.A_REVERSE}
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_REGULAR, curses.COLOR_WHITE, -1)
            curses.init_pair(
                self.PAIR_HIGHLIGHTED, curses.COLOR_BLACK, curses.COLOR_WHITE
            )
            self._attrs = {
                Style.REGULAR: curses.color_pair(self.PAIR_REGULAR),
                Style.HIGHLIGHTED: curses.color_pair(self.PAIR_HIGHLIGHTED),
            }
        except curses.error:
            pass
        self._row = 0
        self._col = 0

    def clear(self):
        self.stdscr.erase()

    def move_cursor(self, row: int, col: int):
        self._row = row
        self._col = col

    def draw_text(self, text: str, style: Style = Style.REGULAR):
        h, w = self.get_terminal_size()
        if self._row >= h or self._col >= w:
            return
        try:
            self.stdscr.addnstr(self._row, self._col, text, w - self._col, self._attrs[style])
        except curses.error:
            # writing the bottom-right cell always raises; the text is drawn anyway
            pass

    def present(self):
        self.stdscr.refresh()

    def get_terminal_size(self):
        return self.stdscr.getmaxyx()

    def render(self, rows):
        self.clear()
        for r, row in enumerate(rows):
            self.move_cursor(r, 0)
            self.draw_text(row.text, row.style)
        self.present()
