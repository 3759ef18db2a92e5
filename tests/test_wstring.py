import pytest

from bsdcompat.wstring import wcslcat, wcslcpy


def test_wcslcpy_fits():
    text, length = wcslcpy("hello", 10)
    assert text == "hello"
    assert length == len("hello")


def test_wcslcpy_truncates():
    text, length = wcslcpy("hello world", 6)
    assert text == "hello"
    assert length == len("hello world")
    assert length >= 6


def test_wcslcpy_exact_boundary():
    text, length = wcslcpy("abcd", 4)
    assert text == "abc"
    assert length == 4


def test_wcslcpy_size_zero():
    text, length = wcslcpy("abc", 0)
    assert text == ""
    assert length == 3


def test_wcslcpy_size_one():
    assert wcslcpy("abc", 1) == ("", 3)


def test_wcslcpy_stops_at_nul():
    assert wcslcpy("ab\0cd", 10) == ("ab", 2)


def test_wcslcpy_negative_size():
    with pytest.raises(ValueError):
        wcslcpy("abc", -1)


def test_wcslcat_fits():
    text, length = wcslcat("foo", "bar", 10)
    assert text == "foobar"
    assert length == 6


def test_wcslcat_truncates():
    text, length = wcslcat("foo", "barbaz", 6)
    assert text == "fooba"
    assert len(text) == 5
    assert length == len("foo") + len("barbaz")


def test_wcslcat_no_room():
    text, length = wcslcat("foo", "bar", 3)
    assert text == "foo"
    assert length == 6


def test_wcslcat_dst_longer_than_size():
    text, length = wcslcat("foobar", "xy", 4)
    assert text == "foobar"
    assert length == 4 + 2


def test_wcslcat_room_for_nul_only():
    text, length = wcslcat("ab", "cd", 3)
    assert text == "ab"
    assert length == 4


def test_wcslcat_empty_source():
    assert wcslcat("abc", "", 8) == ("abc", 3)


def test_wcslcat_result_never_reaches_size():
    for size in range(1, 12):
        text, _ = wcslcat("abc", "defgh", size)
        assert len(text) <= max(size - 1, len("abc"))


def test_wcslcat_negative_size():
    with pytest.raises(ValueError):
        wcslcat("a", "b", -2)