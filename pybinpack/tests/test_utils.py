import pytest

from pybinpack.utils import parse_int, parse_ints, slicer


def test_slicer1():
    res = slicer([1, 2, 3, 4, 5, 6, 7, 8], 4)
    assert res == [[1, 2, 3, 4], [5, 6, 7, 8]]


def test_slicer2():
    res = slicer(["10", "20", "30", "40", "50", "60", "70", "80"], 4, tuple)
    assert res == [("10", "20", "30", "40"), ("50", "60", "70", "80")]


def test_slicer_remainder():
    assert slicer([1, 2, 3], 2) == [[1, 2], [3]]


def test_parse_int():
    assert parse_int("42", "BIN_CAPACITY") == 42
    assert parse_int("-3", "VALUE_MIN") == -3


def test_parse_int_fails():
    with pytest.raises(ValueError, match="BIN_CAPACITY must be an integer, got '4.5'"):
        parse_int("4.5", "BIN_CAPACITY")


def test_parse_ints():
    assert parse_ints(["1", "2", "3"], "VALUE") == [1, 2, 3]
    with pytest.raises(ValueError, match=r"VALUE\[2\]"):
        parse_ints(["1", "2", "0x3"], "VALUE")
