import os
from typing import List, Optional

import filename_codec
from dispatcher import Action, Notification
from navigator import Navigator


MENU_ACTIONS = [Action.READ, Action.ENCRYPT, Action.DECRYPT, Action.TOGGLE_DISPLAY]


class AppState:
    def __init__(self, navigator: Navigator, methods: List[int], full_paths: bool = False):
        if not methods:
            raise ValueError("at least one shift method is required")
        self.navigator = navigator
        self.methods = list(methods)
        self.full_paths = full_paths

        self.mode = "browse"  # browse | menu | help
        self.selected_path: Optional[str] = None
        self.menu_actions = list(MENU_ACTIONS)
        self.menu_index = 0

        # encrypt and decrypt rows remember their shift independently
        self.method_index = {Action.ENCRYPT: 0, Action.DECRYPT: 0}

        self.notification: Optional[Notification] = None

    # ---- notification ----

    def notify(self, text: str, error: bool = False):
        self.notification = Notification(text, error=error)

    def clear_notification(self):
        self.notification = None

    # ---- display ----

    def toggle_full_paths(self) -> bool:
        self.full_paths = not self.full_paths
        return self.full_paths

    # ---- action menu ----

    def open_menu(self, path: str):
        self.selected_path = path
        self.mode = "menu"
        self.menu_index = 0
        tag = filename_codec.parse_tag(os.path.basename(path))
        if tag is not None and tag[0] in self.methods:
            self.method_index[Action.DECRYPT] = self.methods.index(tag[0])

    def close_menu(self):
        self.mode = "browse"
        self.selected_path = None
        self.menu_index = 0

    def current_action(self) -> Action:
        return self.menu_actions[self.menu_index]

    def move_menu(self, delta: int):
        self.menu_index = max(0, min(self.menu_index + delta, len(self.menu_actions) - 1))

    def selected_shift(self, action: Action) -> int:
        idx = self.method_index.get(action, 0)
        return self.methods[idx % len(self.methods)]

    def cycle_method(self, action: Action, delta: int) -> bool:
        if action not in self.method_index:
            return False
        self.method_index[action] = (self.method_index[action] + delta) % len(self.methods)
        return True
