"""Size-bounded copying and concatenation of wide-character strings."""

from __future__ import annotations


def _terminated(text: str) -> str:
    """Return text up to its first NUL character."""
    end = text.find("\0")
    return text if end < 0 else text[:end]


def wcslcpy(src: str, size: int) -> tuple[str, int]:
    """Copy src into a buffer of size characters.

    Returns the copied text (at most size - 1 characters) and the length of
    src; a length of size or more means the copy was truncated.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    src = _terminated(src)
    if size == 0:
        return "", len(src)
    return src[: size - 1], len(src)


def wcslcat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append src to dst within a buffer of size characters in total.

    Returns the resulting text and the length it tried to create, that is the
    length of dst (bounded by size) plus the length of src; a value of size
    or more means truncation happened.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    dst = _terminated(dst)
    src = _terminated(src)
    dlen = min(len(dst), size)
    room = size - dlen
    if room == 0:
        return dst, dlen + len(src)
    return dst + src[: room - 1], dlen + len(src)