import curses
from enum import Enum


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ASCEND = "ascend"
    QUIT = "quit"
    HELP = "help"
    BACK = "back"


_KEYMAP = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
    10: Key.ENTER,
    13: Key.ENTER,
    27: Key.BACK,  # Esc
    ord("d"): Key.ASCEND,
    ord("q"): Key.QUIT,
    ord("?"): Key.HELP,
}


def translate(ch):
    """Map a raw getch() code to a logical Key; None for no key / unknown."""
    if ch is None or ch == -1:
        return None
    return _KEYMAP.get(ch)


HELP_LINES = [
    "Up/Down      move focus",
    "Enter/Right  open directory / choose action for file",
    "d/Left       go to parent directory",
    "Left/Right   change shift on Encrypt/Decrypt rows",
    "d/Esc        leave the action menu",
    "?            toggle this help",
    "q            quit",
]
