import numpy as np


PRINTABLE_LOW = 32
PRINTABLE_HIGH = 126
WINDOW_SIZE = PRINTABLE_HIGH - PRINTABLE_LOW + 1
SHIFT_MODULUS = 26


def normalize_shift(shift) -> int:
    return int(shift) % SHIFT_MODULUS


def _rotate(data, delta: int) -> bytes:
    """Rotate every printable ASCII byte by ``delta`` inside 32..126.

    Bytes outside the window (control codes, UTF-8 continuation bytes, ...)
    are passed through untouched so the mapping stays a bijection.
    """
    raw = bytes(data)
    if not raw or delta % WINDOW_SIZE == 0:
        return raw

    buf = np.frombuffer(raw, dtype=np.uint8).astype(np.int16)
    printable = (buf >= PRINTABLE_LOW) & (buf <= PRINTABLE_HIGH)
    rotated = (buf - PRINTABLE_LOW + delta) % WINDOW_SIZE + PRINTABLE_LOW
    return np.where(printable, rotated, buf).astype(np.uint8).tobytes()


def encode(data, shift) -> bytes:
    return _rotate(data, normalize_shift(shift))


def decode(data, shift) -> bytes:
    return _rotate(data, -normalize_shift(shift))
