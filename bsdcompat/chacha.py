"""ChaCha20 stream cipher with a 64-bit block counter and a 64-bit nonce."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_SIGMA = b"expand 32-byte k"
_TAU = b"expand 16-byte k"
_BLOCK = 64
_ROUNDS = 20


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) & _MASK) | (value >> (32 - shift))


def _quarter_round(x: list[int], a: int, b: int, c: int, d: int) -> None:
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 7)


def _block(state: list[int]) -> bytes:
    x = list(state)
    for _ in range(_ROUNDS // 2):
        _quarter_round(x, 0, 4, 8, 12)
        _quarter_round(x, 1, 5, 9, 13)
        _quarter_round(x, 2, 6, 10, 14)
        _quarter_round(x, 3, 7, 11, 15)
        _quarter_round(x, 0, 5, 10, 15)
        _quarter_round(x, 1, 6, 11, 12)
        _quarter_round(x, 2, 7, 8, 13)
        _quarter_round(x, 3, 4, 9, 14)
    return struct.pack("<16I", *((xi + si) & _MASK for xi, si in zip(x, state)))


class ChaCha:
    """A ChaCha20 context holding the sixteen-word input state."""

    def __init__(self, key: bytes, iv: bytes) -> None:
        self.state: list[int] = [0] * 16
        self.key_setup(key)
        self.iv_setup(iv)

    def key_setup(self, key: bytes) -> None:
        """Load a 128-bit or 256-bit key and the matching constants."""
        key = bytes(key)
        if len(key) == 32:
            constants = _SIGMA
            second = key[16:]
        elif len(key) == 16:
            constants = _TAU
            second = key
        else:
            raise ValueError(f"key must be 16 or 32 bytes, not {len(key)}")
        self.state[4:8] = struct.unpack("<4I", key[:16])
        self.state[8:12] = struct.unpack("<4I", second)
        self.state[0:4] = struct.unpack("<4I", constants)

    def iv_setup(self, iv: bytes) -> None:
        """Load an 8-byte nonce and reset the block counter to zero."""
        iv = bytes(iv)
        if len(iv) != 8:
            raise ValueError(f"iv must be 8 bytes, not {len(iv)}")
        self.state[12] = 0
        self.state[13] = 0
        self.state[14:16] = struct.unpack("<2I", iv)

    def encrypt(self, data: bytes) -> bytes:
        """XOR data with the keystream; a partial final block still uses up a whole block."""
        data = bytes(data)
        out = bytearray()
        for offset in range(0, len(data), _BLOCK):
            chunk = data[offset:offset + _BLOCK]
            stream = _block(self.state)
            out.extend(m ^ k for m, k in zip(chunk, stream))
            self.state[12] = (self.state[12] + 1) & _MASK
            if self.state[12] == 0:
                self.state[13] = (self.state[13] + 1) & _MASK
        return bytes(out)

    def keystream(self, length: int) -> bytes:
        """Return the next length bytes of raw keystream."""
        if length < 0:
            raise ValueError("length must not be negative")
        return self.encrypt(bytes(length))