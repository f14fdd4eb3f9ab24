import os
import re


TAG_SUFFIX = "c"
TAG_PATTERN = re.compile(r"^(\d+)c\.(.+)$", re.DOTALL)


class FilenameTagError(ValueError):
    pass


def _check_name(name: str) -> None:
    if not name:
        raise FilenameTagError("empty file name")
    if os.sep in name or (os.altsep and os.altsep in name):
        raise FilenameTagError(f"not a bare file name: {name}")


def tag_for_encrypt(name: str, shift: int) -> str:
    _check_name(name)
    return f"{int(shift)}{TAG_SUFFIX}.{name}"


def strip_for_decrypt(tagged: str) -> str:
    _check_name(tagged)
    _, sep, rest = tagged.partition(".")
    if not sep or not rest:
        raise FilenameTagError(f"no method tag in {tagged}")
    return rest


def parse_tag(name: str):
    """Return ``(shift, original_name)`` for a tagged name, else None.

    A file that was never encrypted but happens to be called e.g.
    ``3c.notes`` is indistinguishable from a tagged one.
    """
    if not name:
        return None
    m = TAG_PATTERN.match(name)
    if not m:
        return None
    return int(m.group(1)), m.group(2)


def is_tagged(name: str) -> bool:
    return parse_tag(name) is not None
