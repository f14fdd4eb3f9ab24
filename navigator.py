import os
from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Entry:
    display_name: str
    absolute_path: str
    is_directory: bool


@dataclass(frozen=True)
class EnterDirectory:
    path: str


@dataclass(frozen=True)
class SelectFile:
    path: str


class ListError(Exception):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot list {path}: {reason}")
        self.path = path
        self.reason = reason


def _is_dir(dir_entry) -> bool:
    try:
        return dir_entry.is_dir()
    except OSError:
        return False


def list_directory(path: str, show_hidden: bool = True) -> List[Entry]:
    # keep whatever order the filesystem yields; callers must not assume sorting
    entries: List[Entry] = []
    try:
        with os.scandir(path) as it:
            for dir_entry in it:
                if not show_hidden and dir_entry.name.startswith("."):
                    continue
                entries.append(
                    Entry(
                        display_name=dir_entry.name,
                        absolute_path=os.path.join(path, dir_entry.name),
                        is_directory=_is_dir(dir_entry),
                    )
                )
    except OSError as e:
        raise ListError(path, e.strerror or str(e)) from e
    return entries


class Navigator:
    """Owns the current directory, its listing and the focus cursor.

    Listings are always taken before any state is touched, so a failed
    listing (ListError) leaves path, entries and focus exactly as they were.
    """

    def __init__(
        self,
        start_path: Optional[str] = None,
        show_hidden: bool = True,
        lister: Callable[..., List[Entry]] = list_directory,
    ):
        self.start_path = start_path
        self.show_hidden = show_hidden
        self._lister = lister

        self.current_path = ""
        self.entries: List[Entry] = []
        self.focus_index = 0

    def _list(self, path: str) -> List[Entry]:
        return self._lister(path, show_hidden=self.show_hidden)

    def _clamp_focus(self):
        if not self.entries:
            self.focus_index = 0
        else:
            self.focus_index = max(0, min(self.focus_index, len(self.entries) - 1))

    def _index_of(self, path: Optional[str]) -> Optional[int]:
        if path is None:
            return None
        for idx, entry in enumerate(self.entries):
            if entry.absolute_path == path:
                return idx
        return None

    def enter(self):
        path = self.start_path if self.start_path else os.getcwd()
        path = os.path.normpath(os.path.abspath(path))
        entries = self._list(path)
        self.current_path = path
        self.entries = entries
        self.focus_index = 0

    def refresh(self, focus_path: Optional[str] = None):
        entries = self._list(self.current_path)
        self.entries = entries
        idx = self._index_of(focus_path)
        if idx is not None:
            self.focus_index = idx
        self._clamp_focus()

    def focused(self) -> Optional[Entry]:
        if not self.entries:
            return None
        return self.entries[self.focus_index]

    def move_focus(self, delta: int):
        if not self.entries:
            self.focus_index = 0
            return
        self.focus_index += delta
        self._clamp_focus()

    def descend_into(self, entry: Optional[Entry] = None):
        if entry is None:
            entry = self.focused()
        if entry is None:
            return None
        if not entry.is_directory:
            return SelectFile(entry.absolute_path)

        path = os.path.normpath(os.path.join(self.current_path, entry.absolute_path))
        entries = self._list(path)
        self.current_path = path
        self.entries = entries
        self.focus_index = 0
        return EnterDirectory(path)

    def ascend(self) -> bool:
        parent = os.path.dirname(self.current_path)
        if not parent or parent == self.current_path:
            return False

        entries = self._list(parent)
        came_from = self.current_path
        self.current_path = parent
        self.entries = entries
        self.focus_index = self._index_of(came_from) or 0
        return True
