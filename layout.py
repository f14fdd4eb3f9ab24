import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from dispatcher import Action
from key_input import HELP_LINES


class Style(Enum):
    REGULAR = 0
    HIGHLIGHTED = 1


@dataclass(frozen=True)
class Row:
    text: str
    style: Style = Style.REGULAR


class RowBuilder:
    """Accumulates screen rows top to bottom instead of moving a shared cursor."""

    def __init__(self, width: int):
        self.width = max(1, width)
        self._rows: List[Row] = []

    def label(self, text: str, style: Style = Style.REGULAR, indent: int = 0):
        line = (" " * indent + text)[: self.width]
        self._rows.append(Row(line, style))
        return self

    def blank(self):
        self._rows.append(Row(""))
        return self

    def __len__(self):
        return len(self._rows)

    def build(self) -> List[Row]:
        return list(self._rows)


def visible_window(total: int, focus: int, height: int) -> Tuple[int, int]:
    if total <= 0 or height <= 0:
        return 0, 0
    if total <= height:
        return 0, total
    focus = max(0, min(focus, total - 1))
    start = max(0, min(focus - height // 2, total - height))
    return start, start + height


def entry_label(entry, full_paths: bool) -> str:
    text = entry.absolute_path if full_paths else entry.display_name
    if entry.is_directory:
        text += os.sep
    return text


def _status_text(state, width: int) -> str:
    if state.notification is not None:
        text = f" {state.notification.text}"
    else:
        nav = state.navigator
        count = len(nav.entries)
        pos = f"{nav.focus_index + 1}/{count}" if count else "empty"
        text = f" {state.mode.upper()} | {pos} | ? for help"
    return text.ljust(width)[:width]


def _listing_rows(builder: RowBuilder, state, height: int):
    nav = state.navigator
    if not nav.entries:
        builder.label("(empty directory)", indent=2)
        return
    start, end = visible_window(len(nav.entries), nav.focus_index, height)
    for idx in range(start, end):
        entry = nav.entries[idx]
        style = Style.HIGHLIGHTED if idx == nav.focus_index else Style.REGULAR
        builder.label(entry_label(entry, state.full_paths), style, indent=2)


def _menu_rows(builder: RowBuilder, state):
    name = os.path.basename(state.selected_path or "")
    shown = state.selected_path if state.full_paths else name
    builder.label(f"File: {shown}")
    builder.blank()
    for idx, action in enumerate(state.menu_actions):
        text = action.value
        if action in (Action.ENCRYPT, Action.DECRYPT):
            text = f"{text}  < shift {state.selected_shift(action)} >"
        style = Style.HIGHLIGHTED if idx == state.menu_index else Style.REGULAR
        builder.label(text, style, indent=2)


def build_screen(state, width: int, height: int) -> List[Row]:
    builder = RowBuilder(width)
    builder.label(f"shiftfm  {state.navigator.current_path}")
    builder.blank()

    body_h = max(0, height - len(builder) - 1)
    if state.mode == "help":
        for line in HELP_LINES[:body_h]:
            builder.label(line, indent=2)
    elif state.mode == "menu":
        _menu_rows(builder, state)
    else:
        _listing_rows(builder, state, body_h)

    rows = builder.build()[: max(0, height - 1)]
    while len(rows) < height - 1:
        rows.append(Row(""))
    status_style = (
        Style.HIGHLIGHTED
        if state.notification is not None and state.notification.error
        else Style.REGULAR
    )
    if height > 0:
        rows.append(Row(_status_text(state, builder.width), status_style))
    return rows
