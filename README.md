# bsdcompat

A small library of BSD-style utilities for Python. It has three modules:

- `bsdcompat.vis` encodes bytes visually, in the manner of `vis(3)`. It offers
  the default backslash and meta style, C style, octal, HTTP style (RFC 1808)
  and MIME quoted-printable (RFC 2045) encodings. The flags are members of
  `VisFlag`.
- `bsdcompat.wstring` provides `wcslcpy` and `wcslcat`. They copy and
  concatenate strings into a buffer of fixed size and report the length the
  result would have had without truncation.
- `bsdcompat.chacha` provides the ChaCha20 stream cipher as the `ChaCha` class.
  It uses a 64-bit block counter and a 64-bit nonce.

## Installation

```
pip install bsdcompat
```

## vis encoding

```python
from bsdcompat.vis import VisFlag, vis, strvis, strvisx, strnvis

strvis(b"tab\there\n", VisFlag.CSTYLE | VisFlag.TAB | VisFlag.NL)
strvisx(b"\x00\x01", 2, VisFlag.OCTAL)
strnvis(b"hello world", 6, VisFlag.SP)
vis(ord("\n"), VisFlag.NL, 0)
```

Every function returns `bytes`. The input may be `str`, which is encoded as
UTF-8, or a bytes-like object.

- `vis(c, flags=0, nextc=0, extra="")` encodes the single byte `c`. It uses
  `nextc` as look-ahead.
- `strvis(src, flags=0, extra="")` encodes `src` up to its first NUL.
- `strvisx(src, length=None, flags=0, extra="")` encodes exactly `length`
  bytes, NULs included. The default is the whole input. A negative length, or
  one longer than the input, raises `ValueError`.
- `strnvis(src, dlen, flags=0, extra="")` works like `strvis` but produces at
  most `dlen` bytes. It stops before the first output character that would not
  fit. A negative `dlen` raises `ValueError`.

The `extra` argument lists further characters that are always encoded.
`VisFlag.GLOB`, `VisFlag.SHELL`, `VisFlag.SP`, `VisFlag.TAB`, `VisFlag.NL` and
`VisFlag.DQ` add characters to this list. A backslash is on the list unless
`VisFlag.NOSLASH` is set.

Input is decoded as UTF-8. After the first byte sequence that does not decode,
the rest of the input is handled one byte at a time. With `VisFlag.NOLOCALE`,
all input is handled one byte at a time and classified by the C locale.

## Bounded copy and concatenation

```python
from bsdcompat.wstring import wcslcpy, wcslcat

copied, needed = wcslcpy("hello", 4)        # ("hel", 5)
joined, needed = wcslcat("ab", "cdef", 5)   # ("abcd", 6)
```

Both functions treat a NUL character as the end of a string. If the returned
length is equal to or greater than the buffer size, the text was truncated. A
negative size raises `ValueError`.

## ChaCha20

```python
from bsdcompat.chacha import ChaCha

cipher = ChaCha(bytes(32), bytes(8))
ciphertext = cipher.encrypt(b"attack at dawn")
stream = ChaCha(bytes(32), bytes(8)).keystream(64)
```

The key is 16 or 32 bytes long and the IV is 8 bytes long. Any other length
raises `ValueError`.

- `key_setup(key)` loads a new key.
- `iv_setup(iv)` loads a new nonce and resets the block counter to zero.

Each call to `encrypt` uses up whole 64-byte blocks, even when the data ends
partway through a block. Encryption and decryption are the same operation. To
decrypt, use a cipher set up with the same key and IV.

## Running the tests

```
pip install -e .[test]
pytest
```