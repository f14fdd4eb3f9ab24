from datetime import datetime
from typing import Optional


class ActivityLog:
    """Append-only journal of encrypt/decrypt operations (one line each)."""

    def __init__(self, log_path: str):
        self.log_path = log_path

    def persist(self, entry: str) -> bool:
        if not entry:
            return False
        # names that are not valid UTF-8 arrive as surrogate escapes from os.scandir
        try:
            with open(self.log_path, 'a', encoding='utf-8', errors='backslashreplace') as f:
                f.write(entry + '\n')
        except (OSError, ValueError):
            return False
        return True

    def record(self, operation: str, shift: int, old_path: str, new_path: str,
               when: Optional[datetime] = None) -> bool:
        stamp = (when or datetime.now()).isoformat(timespec='seconds')
        return self.persist(f"{stamp} {operation} {shift} {old_path} -> {new_path}")
