import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import filename_codec
import shift_cipher


class Action(Enum):
    READ = "Read"
    ENCRYPT = "Encrypt"
    DECRYPT = "Decrypt"
    TOGGLE_DISPLAY = "Toggle full path"


@dataclass(frozen=True)
class Notification:
    text: str
    error: bool = False
    new_path: Optional[str] = None


def open_with_default(path: str, command: Optional[List[str]] = None) -> None:
    """Hand ``path`` to the desktop's default handler without blocking."""
    if command:
        argv = list(command) + [path]
    elif sys.platform == "darwin":
        argv = ["open", path]
    elif sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
        return
    else:
        argv = ["xdg-open", path]

    # detach from the curses terminal so the handler cannot scribble on it
    subprocess.Popen(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class Dispatcher:
    """Turns a menu action on a file into filesystem work plus a status line.

    Holds no state between calls; the selected shift is read fresh from
    each ``apply`` call.
    """

    def __init__(
        self,
        opener: Optional[Callable[[str], None]] = None,
        toggle_display: Optional[Callable[[], bool]] = None,
        journal=None,
    ):
        self._open = opener or open_with_default
        self._toggle_display = toggle_display
        self._journal = journal

    def apply(self, action: Action, path: str, selected_shift: int) -> Notification:
        if action is Action.READ:
            return self._read(path)
        if action is Action.ENCRYPT:
            return self._encrypt(path, selected_shift)
        if action is Action.DECRYPT:
            return self._decrypt(path, selected_shift)
        if action is Action.TOGGLE_DISPLAY:
            return self._toggle()
        return Notification(f"Unknown action: {action}", error=True)

    # ---------- actions ----------

    def _read(self, path: str) -> Notification:
        name = os.path.basename(path)
        try:
            self._open(path)
        except OSError as e:
            return Notification(f"Open failed: {e.strerror or e}", error=True)
        return Notification(f"Opened {name}")

    def _toggle(self) -> Notification:
        if self._toggle_display is None:
            return Notification("Display toggle unavailable", error=True)
        full = self._toggle_display()
        return Notification("Showing full paths" if full else "Showing names")

    def _encrypt(self, path: str, shift: int) -> Notification:
        shift = shift_cipher.normalize_shift(shift)
        directory, name = os.path.split(path)
        try:
            target = os.path.join(directory, filename_codec.tag_for_encrypt(name, shift))
        except filename_codec.FilenameTagError as e:
            return Notification(f"Encrypt failed: {e}", error=True)
        if os.path.exists(target):
            return Notification(
                f"Encrypt failed: {os.path.basename(target)} already exists", error=True
            )

        try:
            self._transform_in_place(path, target, shift_cipher.encode, shift)
        except OSError as e:
            return Notification(f"Encrypt failed: {e.strerror or e}", error=True)
        except MemoryError:
            return Notification(f"Encrypt failed: {name} is too large", error=True)

        suffix = self._record("encrypt", shift, path, target)
        return Notification(
            f"Encrypted {name} -> {os.path.basename(target)} (shift {shift}){suffix}",
            new_path=target,
        )

    def _decrypt(self, path: str, shift: int) -> Notification:
        shift = shift_cipher.normalize_shift(shift)
        directory, name = os.path.split(path)
        tag = filename_codec.parse_tag(name)
        if tag is None:
            return Notification(f"Not an encrypted file: {name}", error=True)

        tagged_shift = shift_cipher.normalize_shift(tag[0])
        if tagged_shift != shift:
            return Notification(
                f"Shift mismatch: {name} is tagged {tagged_shift}, selected {shift}",
                error=True,
            )

        target = os.path.join(directory, filename_codec.strip_for_decrypt(name))
        if os.path.exists(target):
            return Notification(
                f"Decrypt failed: {os.path.basename(target)} already exists", error=True
            )

        try:
            self._transform_in_place(path, target, shift_cipher.decode, shift)
        except OSError as e:
            return Notification(f"Decrypt failed: {e.strerror or e}", error=True)
        except MemoryError:
            return Notification(f"Decrypt failed: {name} is too large", error=True)

        suffix = self._record("decrypt", shift, path, target)
        return Notification(
            f"Decrypted {name} -> {os.path.basename(target)}{suffix}", new_path=target
        )

    # ---------- helpers ----------

    @staticmethod
    def _transform_in_place(path, target, transform, shift):
        # read, write back, rename: three syscalls; a failed rename leaves
        # transformed content under the old name
        with open(path, "rb") as f:
            data = f.read()
        # transform before truncating so a failure leaves the file intact
        out = transform(data, shift)
        with open(path, "wb") as f:
            f.write(out)
        os.rename(path, target)

    def _record(self, operation, shift, old_path, new_path) -> str:
        """Journal a finished transform; returns a status suffix on failure."""
        if self._journal is None:
            return ""
        try:
            written = self._journal.record(operation, shift, old_path, new_path)
        except (OSError, ValueError):
            written = False
        return "" if written else " (journal not written)"
