import sys
import os
import curses

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

from activity_log import ActivityLog
from app_state import AppState
from config_paths import ACTIVITY_LOG_PATH, ensure_config_dirs, load_config
from dispatcher import Dispatcher, open_with_default
from navigator import ListError, Navigator
from orchestrator import Orchestrator

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = "shiftfm - terminal file browser with reversible shift encoding\n\nUsage:\n  shiftfm [path]\n  shiftfm -v\n  shiftfm -h\n"


def _resolve_start_path(args):
    if not args:
        return os.getcwd()
    return os.path.abspath(os.path.expanduser(args[0]))


def build_app(start_path, cfg):
    navigator = Navigator(start_path, show_hidden=cfg["SHOW_HIDDEN"])
    navigator.enter()
    state = AppState(navigator, cfg["METHODS"], full_paths=cfg["FULL_PATHS"])

    journal = ActivityLog(ACTIVITY_LOG_PATH)
    open_cmd = cfg["OPEN_COMMAND"]
    dispatcher = Dispatcher(
        opener=lambda path: open_with_default(path, open_cmd),
        toggle_display=state.toggle_full_paths,
        journal=journal,
    )
    return state, dispatcher


def main():
    args = sys.argv[1:]

    if "-v" in args or "-V" in args:
        print(__version__)
        return

    if "-h" in args or len(args) > 1:
        print(USAGE)
        return

    ensure_config_dirs()
    cfg = load_config()

    try:
        state, dispatcher = build_app(_resolve_start_path(args), cfg)
    except ListError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    def curses_main(stdscr):
        Orchestrator(
            stdscr,
            state,
            dispatcher,
            poll_timeout_ms=cfg["POLL_TIMEOUT_MS"],
            refresh_seconds=cfg["REFRESH_SECONDS"],
        ).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
