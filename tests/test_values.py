from __future__ import annotations

import pytest

from pydevconf.values import format_bool, format_ranged, parse_bool, parse_int, parse_ranged


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("0", 0),
        ("123", 123),
        ("+5", 5),
        ("-0x10", -16),
        ("0777", 511),
        ("\t12", 12),
        ("12\t", None),
        ("1_000", None),
        ("0b101", None),
        ("0o17", None),
        ("", None),
        ("-", None),
        ("18446744073709551615", 2**64 - 1),
        ("118446744073709551615", None),
        ("1" * 5000, None),
        ("0x" + "0" * 5000 + "1", 1),
    ],
)
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


def test_parse_ranged_bounds():
    assert parse_ranged("10", 0, 10) == 10
    assert parse_ranged("11", 0, 10) is None
    assert parse_ranged("-1", 0, 10) is None


def test_parse_bool_exact_text_only():
    assert parse_bool("true") is True
    assert parse_bool("false") is False
    assert parse_bool("TRUE") is None
    assert parse_bool("0") is None
    assert parse_bool(" true") is None
    assert parse_bool("false ") is None


def test_format_helpers():
    assert format_ranged(5, 0, 10, "small") == "5"
    assert format_bool(True) == "true"
    with pytest.raises(ValueError, match="out of range for small"):
        format_ranged(11, 0, 10, "small")
    with pytest.raises(ValueError):
        format_ranged("5", 0, 10, "small")
