import json
import os

from shift_cipher import normalize_shift

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "shiftfm")
ACTIVITY_LOG_PATH = os.path.join(CONFIG_DIR, "activity.log")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
METHODS_DEFAULT = [1, 5, 12]
SHOW_HIDDEN_DEFAULT = True
FULL_PATHS_DEFAULT = False
POLL_TIMEOUT_MS_DEFAULT = 100
REFRESH_SECONDS_DEFAULT = 1.0
OPEN_COMMAND_DEFAULT = None


def ensure_config_dirs():
    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)
        if not os.path.exists(ACTIVITY_LOG_PATH):
            with open(ACTIVITY_LOG_PATH, "w", encoding="utf-8") as f:
                f.write("")
    except OSError:
        pass


def _parse_methods(value):
    if not isinstance(value, list):
        return None
    methods = []
    for item in value:
        # bool is an int subclass; reject it explicitly
        if isinstance(item, bool) or not isinstance(item, int):
            continue
        shift = normalize_shift(item)
        if shift == 0 or shift in methods:
            continue
        methods.append(shift)
    return methods or None


def load_config():
    cfg = {
        "METHODS": list(METHODS_DEFAULT),
        "SHOW_HIDDEN": SHOW_HIDDEN_DEFAULT,
        "FULL_PATHS": FULL_PATHS_DEFAULT,
        "POLL_TIMEOUT_MS": POLL_TIMEOUT_MS_DEFAULT,
        "REFRESH_SECONDS": REFRESH_SECONDS_DEFAULT,
        "OPEN_COMMAND": OPEN_COMMAND_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    methods = _parse_methods(data.get("methods"))
    if methods:
        cfg["METHODS"] = methods

    for key, cfg_key in (("show_hidden", "SHOW_HIDDEN"), ("full_paths", "FULL_PATHS")):
        if isinstance(data.get(key), bool):
            cfg[cfg_key] = data[key]

    timeout = data.get("poll_timeout_ms")
    if isinstance(timeout, int) and not isinstance(timeout, bool) and timeout > 0:
        cfg["POLL_TIMEOUT_MS"] = timeout

    refresh = data.get("refresh_seconds")
    if isinstance(refresh, (int, float)) and not isinstance(refresh, bool) and refresh > 0:
        cfg["REFRESH_SECONDS"] = float(refresh)

    open_cmd = data.get("open_command")
    if isinstance(open_cmd, list) and open_cmd and all(
        isinstance(item, str) for item in open_cmd
    ):
        cfg["OPEN_COMMAND"] = open_cmd

    return cfg
