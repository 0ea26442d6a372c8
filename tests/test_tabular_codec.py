"""
Tests for CSV decoding.
"""

import pytest

from backend.src.core.errors import TabularDecodeError
from backend.src.core.tabular_codec import decode_csv, parse_cell


def test_decode_rows_in_file_order_with_header_keys():
    rows = decode_csv("a,b\n1,x\n2,y\n")

    assert rows == [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]
    assert list(rows[0].keys()) == ["a", "b"]


def test_decode_empty_text_and_header_only_give_no_rows():
    assert decode_csv("") == []
    assert decode_csv("a,b\n") == []


def test_decode_empty_and_short_fields_become_none():
    rows = decode_csv("a,b,c\n1,,z\n2\n")

    assert rows[0] == {"a": 1, "b": None, "c": "z"}
    assert rows[1] == {"a": 2, "b": None, "c": None}


def test_decode_quoted_fields_keep_commas():
    rows = decode_csv('city,note\nBern,"cold, windy"\n')
    assert rows == [{"city": "Bern", "note": "cold, windy"}]


def test_decode_row_with_extra_fields_fails():
    with pytest.raises(TabularDecodeError):
        decode_csv("a,b\n1,2\n3,4,5\n")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5", 5),
        ("-3", -3),
        ("0", 0),
        ("1.5", 1.5),
        ("2e3", 2000),
        ("1E3", 1000),
        ("1.0", 1),
        ("1.50", 1.5),
        ("2.5e-1", 0.25),
        ("1e300", 1e300),
        ("007", "007"),
        ("1,5", "1,5"),
        (" 5", " 5"),
        ("abc", "abc"),
        ("1e999", "1e999"),
        ("", None),
        (None, None),
    ],
)
def test_parse_cell(raw, expected):
    assert parse_cell(raw) == expected
    assert type(parse_cell(raw)) is type(expected)


def test_parse_cell_nan_from_pandas_is_none():
    assert parse_cell(float("nan")) is None


def test_parse_cell_keeps_very_long_integers():
    wide = "9" * 400
    assert parse_cell(wide) == int(wide)

    # Past the interpreter's int string limit the field stays text
    huge = "7" * 5000
    assert parse_cell(huge) == huge


def test_decode_very_long_integer_field_does_not_fail():
    huge = "7" * 5000
    assert decode_csv(f"p\n{huge}\n1\n") == [{"p": huge}, {"p": 1}]
