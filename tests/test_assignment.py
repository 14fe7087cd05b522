"""Tests for the assignment parser."""

import pytest

from ion_core.assignment import find_separator, parse_assignment
from ion_core.errors import IonSyntaxError
from ion_core.model import Field
from ion_core.values import VArray, VDict, VInteger, VString


def test_find_separator_simple():
    assert find_separator("x = 1") == 2

def test_find_separator_ignores_strings():
    assert find_separator('"a=b"') == -1

def test_find_separator_ignores_brackets():
    assert find_separator("{a = 1}") == -1

def test_find_separator_missing():
    assert find_separator("no equals here") == -1


# ---------------------------------------------------------------------------
# parse_assignment
# ---------------------------------------------------------------------------

def test_string_field():
    assert parse_assignment('id = "HOTEL001"') == Field("id", VString("HOTEL001"), 1)

def test_field_keeps_line():
    assert parse_assignment("version = 3", line=12).line == 12

def test_value_containing_equals():
    assert parse_assignment('formula = "a=b"').value == VString("a=b")

def test_numeric_key_with_dictionary():
    field = parse_assignment('75042 = { view = "SV", loc = ["M","B"] }')
    assert field.key == "75042"
    assert field.value == VDict({
        "view": VString("SV"),
        "loc": VArray((VString("M"), VString("B"))),
    })

def test_key_with_dash_and_underscore():
    assert parse_assignment("max_pax-total = 4").key == "max_pax-total"

def test_multiline_value():
    field = parse_assignment("ary = [\n  1,\n  2,\n]", line=3)
    assert field.value == VArray((VInteger(1), VInteger(2)))

def test_missing_equals():
    with pytest.raises(IonSyntaxError, match="expected '='"):
        parse_assignment("just words")

def test_empty_key():
    with pytest.raises(IonSyntaxError, match="empty key"):
        parse_assignment("= 5")

def test_invalid_key():
    with pytest.raises(IonSyntaxError, match="invalid key"):
        parse_assignment("bad key = 1")

def test_missing_value():
    with pytest.raises(IonSyntaxError, match="expected a value"):
        parse_assignment("key =")

def test_trailing_characters_rejected():
    with pytest.raises(IonSyntaxError, match="trailing"):
        parse_assignment('key = "a" "b"')

def test_error_column_points_into_line():
    with pytest.raises(IonSyntaxError) as exc_info:
        parse_assignment(r'k = "a\qb"', line=4)
    assert exc_info.value.line == 4
    assert exc_info.value.column == 7

def test_error_line_in_continuation():
    with pytest.raises(IonSyntaxError) as exc_info:
        parse_assignment('d = {\n  a = 1\n  a b\n}', line=10)
    assert exc_info.value.line == 12
