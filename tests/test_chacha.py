import struct

import pytest

from bsdcompat.chacha import ChaCha

ZERO_KEY = bytes(32)
ZERO_IV = bytes(8)


def test_zero_key_known_keystream():
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    expected = bytes.fromhex(
        "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
    )
    assert ctx.keystream(32) == expected


def test_constants_for_256_bit_key():
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    assert ctx.state[0:4] == list(struct.unpack("<4I", b"expand 32-byte k"))


def test_constants_and_key_for_128_bit_key():
    key = bytes(range(16))
    ctx = ChaCha(key, ZERO_IV)
    assert ctx.state[0:4] == list(struct.unpack("<4I", b"expand 16-byte k"))
    assert ctx.state[4:8] == ctx.state[8:12]


def test_iv_loaded_into_state():
    iv = bytes(range(1, 9))
    ctx = ChaCha(ZERO_KEY, iv)
    assert ctx.state[12:16] == [0, 0] + list(struct.unpack("<2I", iv))


def test_round_trip():
    key = bytes(range(32))
    iv = bytes(range(8))
    message = b"attack at dawn, " * 9 + b"tail"
    ciphertext = ChaCha(key, iv).encrypt(message)
    assert ciphertext != message
    assert len(ciphertext) == len(message)
    assert ChaCha(key, iv).encrypt(ciphertext) == message


def test_split_on_block_boundaries_matches_one_call():
    whole = ChaCha(ZERO_KEY, ZERO_IV).keystream(192)
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    parts = ctx.keystream(64) + ctx.keystream(128)
    assert parts == whole


def test_partial_block_consumes_whole_block():
    whole = ChaCha(ZERO_KEY, ZERO_IV).keystream(128)
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    first = ctx.keystream(10)
    second = ctx.keystream(64)
    assert first == whole[:10]
    assert second == whole[64:128]
    assert ctx.state[12] == 2


def test_empty_input_leaves_state_alone():
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    before = list(ctx.state)
    assert ctx.encrypt(b"") == b""
    assert ctx.state == before


def test_counter_carries_into_high_word():
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    ctx.state[12] = 0xFFFFFFFF
    ctx.keystream(64)
    assert ctx.state[12] == 0
    assert ctx.state[13] == 1


def test_iv_setup_resets_counter():
    ctx = ChaCha(ZERO_KEY, ZERO_IV)
    first = ctx.keystream(64)
    ctx.iv_setup(ZERO_IV)
    assert ctx.keystream(64) == first


def test_different_iv_gives_different_stream():
    a = ChaCha(ZERO_KEY, ZERO_IV).keystream(64)
    b = ChaCha(ZERO_KEY, b"\x01" + bytes(7)).keystream(64)
    assert a != b


@pytest.mark.parametrize("size", [0, 8, 24, 33])
def test_bad_key_length(size):
    with pytest.raises(ValueError):
        ChaCha(bytes(size), ZERO_IV)


@pytest.mark.parametrize("size", [0, 7, 12])
def test_bad_iv_length(size):
    with pytest.raises(ValueError):
        ChaCha(ZERO_KEY, bytes(size))


def test_negative_keystream_length():
    with pytest.raises(ValueError):
        ChaCha(ZERO_KEY, ZERO_IV).keystream(-1)