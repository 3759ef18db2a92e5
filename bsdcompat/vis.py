"""Visual encoding of strings: make unprintable bytes visible and safe.

Input is treated as UTF-8 multibyte text.  A byte sequence that does not
decode switches the rest of the conversion to byte-at-a-time handling, just
as it does for a C multibyte conversion error.  With ``VisFlag.NOLOCALE``
everything is handled one byte at a time and classified by the C locale.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from itertools import islice
from typing import Union

__all__ = ["VisFlag", "vis", "strvis", "strvisx", "strnvis"]

Text = Union[str, bytes, bytearray, memoryview]


class VisFlag(enum.IntFlag):
    """Flags selecting the encoding style and the characters to encode."""

    OCTAL = 0x0001
    CSTYLE = 0x0002
    SP = 0x0004
    TAB = 0x0008
    NL = 0x0010
    WHITE = SP | TAB | NL
    SAFE = 0x0020
    NOSLASH = 0x0040
    HTTPSTYLE = 0x0080
    HTTP1808 = 0x0080
    MIMESTYLE = 0x0100
    GLOB = 0x1000
    SHELL = 0x2000
    META = WHITE | GLOB | SHELL
    NOLOCALE = 0x4000
    DQ = 0x8000


_BELL = 0x07
_CHAR_SHELL = "'`\";&<>()|{}]\\$!^~"
_CHAR_GLOB = "*?[#"
_HTTP_SAFE = frozenset(map(ord, "$-_.+!*'(),"))
_MIME_SPECIAL = frozenset(map(ord, "#$@[\\]^`{|}~"))
_HEX_LOWER = "0123456789abcdef"
_HEX_UPPER = "0123456789ABCDEF"
_CSTYLE_ESCAPES = {
    ord("\n"): "n",
    ord("\r"): "r",
    ord("\b"): "b",
    _BELL: "a",
    ord("\v"): "v",
    ord("\t"): "t",
    ord("\f"): "f",
    ord(" "): "s",
}
# Characters that have a meaning of their own after a backslash in C style.
_CSTYLE_RESERVED = frozenset(map(ord, "nrbavtfs0M^$"))

_Encoder = Callable[[list, int, int, int, frozenset], None]


def _to_bytes(value: Text) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _cstring(value: Text) -> bytes:
    """Return value up to its first NUL byte."""
    data = _to_bytes(value)
    end = data.find(b"\0")
    return data if end < 0 else data[:end]


def _byte_split(value: int) -> list[int]:
    """Split a value into big-endian bytes, dropping leading zero bytes."""
    return [
        (value >> shift) & 0xFF
        for shift in range(56, -1, -8)
        if (value >> shift) or shift == 0
    ]


def _iswspace(c: int) -> bool:
    if c < 0x80:
        return c == 0x20 or 0x09 <= c <= 0x0D
    if c > 0x10FFFF or c in (0xA0, 0x2007, 0x202F):
        return False
    return chr(c).isspace()


def _isgraph(flags: int, c: int) -> bool:
    if flags & VisFlag.NOLOCALE:
        return 0x21 <= c <= 0x7E
    if c > 0x10FFFF:
        return False
    ch = chr(c)
    return ch.isprintable() and ch != " "


def _iswalnum(c: int) -> bool:
    return c <= 0x10FFFF and chr(c).isalnum()


def _iswoctal(c: int) -> bool:
    return ord("0") <= (c & 0xFF) <= ord("7")


def _iswcntrl(c: int) -> bool:
    return c < 0x20 or c == 0x7F


def _do_mbyte(out: list, c: int, flags: int, nextc: int, iswextra: bool) -> None:
    """Encode one byte of a character that needs escaping."""
    if flags & VisFlag.CSTYLE:
        if c in _CSTYLE_ESCAPES:
            out.extend((ord("\\"), ord(_CSTYLE_ESCAPES[c])))
            return
        if c == 0:
            out.extend((ord("\\"), ord("0")))
            if _iswoctal(nextc):
                out.extend((ord("0"), ord("0")))
            return
        if c not in _CSTYLE_RESERVED and _isgraph(flags, c) and not _iswoctal(c):
            out.extend((ord("\\"), c))
            return
    if iswextra or (c & 0o177) == ord(" ") or flags & VisFlag.OCTAL:
        out.extend((
            ord("\\"),
            ((c >> 6) & 0o3) + ord("0"),
            ((c >> 3) & 0o7) + ord("0"),
            (c & 0o7) + ord("0"),
        ))
        return
    if not flags & VisFlag.NOSLASH:
        out.append(ord("\\"))
    if c & 0o200:
        c &= 0o177
        out.append(ord("M"))
    if _iswcntrl(c):
        out.append(ord("^"))
        out.append(ord("?") if c == 0o177 else c + ord("@"))
    else:
        out.extend((ord("-"), c))


def _do_svis(out: list, c: int, flags: int, nextc: int, extra: frozenset) -> None:
    """Standard encoding: pass graphic characters, escape the rest."""
    # Searching a NUL-terminated list always finds the NUL itself.
    iswextra = c == 0 or c in extra
    if not iswextra and (
        _isgraph(flags, c)
        or c in (ord(" "), ord("\t"), ord("\n"))
        or (flags & VisFlag.SAFE and c in (ord("\b"), _BELL, ord("\r")))
    ):
        out.append(c)
        return
    for byte in _byte_split(c):
        _do_mbyte(out, byte, flags, nextc, iswextra)


def _do_hvis(out: list, c: int, flags: int, nextc: int, extra: frozenset) -> None:
    """URL encoding in the style of RFC 1808."""
    if _iswalnum(c) or c in _HTTP_SAFE:
        _do_svis(out, c, flags, nextc, extra)
    else:
        out.extend((
            ord("%"),
            ord(_HEX_LOWER[(c >> 4) & 0xF]),
            ord(_HEX_LOWER[c & 0xF]),
        ))


def _do_mvis(out: list, c: int, flags: int, nextc: int, extra: frozenset) -> None:
    """Quoted-printable encoding (RFC 2045), without line-length handling."""
    space = _iswspace(c)
    if c != ord("\n") and (
        (space and nextc in (ord("\r"), ord("\n")))
        or (not space and (c < 33 or 60 < c < 62 or c > 126))
        or c == 0
        or c in _MIME_SPECIAL
    ):
        out.extend((
            ord("="),
            ord(_HEX_UPPER[(c >> 4) & 0xF]),
            ord(_HEX_UPPER[c & 0xF]),
        ))
    else:
        _do_svis(out, c, flags, nextc, extra)


def _select_encoder(flags: int) -> _Encoder:
    if flags & VisFlag.HTTPSTYLE:
        return _do_hvis
    if flags & VisFlag.MIMESTYLE:
        return _do_mvis
    return _do_svis


def _extra_list(flags: int, extra: Text) -> frozenset:
    """Build the set of characters that must always be encoded."""
    raw = _cstring(extra)
    if flags & VisFlag.NOLOCALE:
        chars = list(raw)
    else:
        try:
            chars = [ord(ch) for ch in raw.decode("utf-8")]
        except UnicodeDecodeError:
            chars = list(raw)
    if flags & VisFlag.GLOB:
        chars.extend(map(ord, _CHAR_GLOB))
    if flags & VisFlag.SHELL:
        chars.extend(map(ord, _CHAR_SHELL))
    if flags & VisFlag.SP:
        chars.append(ord(" "))
    if flags & VisFlag.TAB:
        chars.append(ord("\t"))
    if flags & VisFlag.NL:
        chars.append(ord("\n"))
    if flags & VisFlag.DQ:
        chars.append(ord('"'))
    if not flags & VisFlag.NOSLASH:
        chars.append(ord("\\"))
    return frozenset(chars)


def _mbtowc(buf: bytes, pos: int) -> tuple[int, int] | None:
    """Decode one UTF-8 character at pos, or return None if it is invalid."""
    lead = buf[pos]
    if lead < 0x80:
        return lead, 1
    if 0xC2 <= lead <= 0xDF:
        size = 2
    elif 0xE0 <= lead <= 0xEF:
        size = 3
    elif 0xF0 <= lead <= 0xF4:
        size = 4
    else:
        return None
    piece = buf[pos:pos + size]
    if len(piece) < size:
        return None
    try:
        return ord(piece.decode("utf-8")), size
    except UnicodeDecodeError:
        return None


def _encode(buf: bytes, length: int, flags: int, extra: Text, dlen: int | None) -> bytes:
    """Encode length bytes of buf; buf holds at least one byte of look-ahead."""
    # A single character still needs the next one for look-ahead.
    remaining = 2 if length == 1 else length
    cerr = bool(flags & VisFlag.NOLOCALE)
    chars: list[int] = []
    pos = 0
    while remaining > 0:
        decoded = None if cerr else _mbtowc(buf, pos)
        if decoded is None:
            decoded = (buf[pos], 1)
            cerr = True
        char, size = decoded
        chars.append(char)
        pos += size
        remaining -= size

    count = min(len(chars), length)
    extras = _extra_list(flags, extra)
    encoder = _select_encoder(flags)
    wide: list[int] = []
    for c, nextc in islice(zip(chars, chars[1:] + [0]), count):
        encoder(wide, c, flags, nextc, extras)

    out = bytearray()
    for w in wide:
        piece = None
        if not cerr:
            try:
                piece = chr(w).encode("utf-8")
            except (UnicodeEncodeError, ValueError):
                piece = None
        if piece is None:
            piece = bytes(_byte_split(w))
            cerr = True
        if dlen is not None and len(out) + len(piece) > dlen:
            break
        out += piece
    return bytes(out)


def vis(c: int, flags: int = 0, nextc: int = 0, extra: Text = "") -> bytes:
    """Encode the single byte c, using nextc as look-ahead."""
    buf = bytes((c & 0xFF, nextc & 0xFF))
    return _encode(buf, 1, int(flags), extra, None)


def strvis(src: Text, flags: int = 0, extra: Text = "") -> bytes:
    """Encode src up to its first NUL."""
    data = _cstring(src)
    return _encode(data + b"\0", len(data), int(flags), extra, None)


def strvisx(src: Text, length: int | None = None, flags: int = 0, extra: Text = "") -> bytes:
    """Encode exactly length bytes of src, NULs included."""
    data = _to_bytes(src)
    if length is None:
        length = len(data)
    if length < 0:
        raise ValueError("length must not be negative")
    if length > len(data):
        raise ValueError(f"length {length} exceeds the {len(data)} bytes given")
    return _encode(data + b"\0", length, int(flags), extra, None)


def strnvis(src: Text, dlen: int, flags: int = 0, extra: Text = "") -> bytes:
    """Encode src up to its first NUL, producing at most dlen bytes.

    Encoding stops before the first output character that would not fit.
    """
    if dlen < 0:
        raise ValueError("dlen must not be negative")
    data = _cstring(src)
    return _encode(data + b"\0", len(data), int(flags), extra, dlen)