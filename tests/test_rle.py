import pytest

from sokoban_engine.errors import MalformedCode
from sokoban_engine.rle import compress, decompress, expand_rows


def test_decompress_basic():
    assert decompress("3r2Ul") == "rrrUUl"
    assert decompress("") == ""


def test_decompress_last_digit_is_the_count():
    assert decompress("12r") == "rr"
    assert decompress("10r") == ""
    assert decompress("0ru") == "u"
    assert decompress("9999999999r") == "r" * 9


def test_decompress_is_identity_without_digits():
    for s in ["", "udlr", "UUddLLrr", "#@$.#"]:
        assert decompress(s) == s


def test_trailing_count_dropped_or_rejected():
    assert decompress("ur3") == "ur"
    with pytest.raises(MalformedCode):
        decompress("ur3", strict=True)


def test_compress_then_decompress():
    s = "rrrUUlddddddddddddR"
    code = compress(s)
    assert code == "3r2Ul9d3dR"
    assert decompress(code) == s
    assert compress("") == ""


def test_expand_rows_splits_on_bar():
    assert expand_rows("5#|#@$.#|5#") == ["#####", "#@$.#", "#####"]
    assert expand_rows("#@ $.#") == ["#@ $.#"]


def test_compress_splits_long_runs():
    assert compress("r" * 9) == "9r"
    assert compress("r" * 10) == "9rr"
    assert compress("U" * 20) == "9U9U2U"
    assert decompress(compress("l" * 25)) == "l" * 25
