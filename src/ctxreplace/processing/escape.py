"""Backslash escape detection."""


def is_escaped(text: str, pos: int) -> bool:
    """Return True if *pos* is preceded by an odd run of backslashes."""
    count = 0
    i = pos - 1
    while i >= 0 and text[i] == '\\':
        count += 1
        i -= 1
    return count % 2 == 1
