"""Tests for the Scanner layer."""

import pytest

from ion_core.errors import IonSyntaxError
from ion_core.scanner import (
    LineKind,
    parse_header,
    scan,
    split_row,
    strip_comment,
)


# ---------------------------------------------------------------------------
# strip_comment
# ---------------------------------------------------------------------------

def test_strip_hash_comment():
    assert strip_comment("a = 1 # note") == "a = 1 "

def test_strip_slash_comment():
    assert strip_comment('markets = ["DE"] // source') == 'markets = ["DE"] '

def test_hash_inside_string_kept():
    assert strip_comment('a = "x#y" # c') == 'a = "x#y" '

def test_slashes_inside_string_kept():
    assert strip_comment('url = "http://example.com"') == 'url = "http://example.com"'

def test_escaped_quote_does_not_end_string():
    assert strip_comment(r'a = "q\"#" # c') == r'a = "q\"#" '

def test_whole_line_comment():
    assert strip_comment("# only a comment") == ""


# ---------------------------------------------------------------------------
# parse_header
# ---------------------------------------------------------------------------

def test_header_single_segment():
    assert parse_header("[CONTRACT]", 1) == ("CONTRACT",)

def test_header_dotted_path_trimmed():
    assert parse_header("  [ DEF . MEAL ]  ", 1) == ("DEF", "MEAL")

def test_header_missing_bracket():
    with pytest.raises(IonSyntaxError, match="closing"):
        parse_header("[DEF", 3)

def test_header_empty_segment():
    with pytest.raises(IonSyntaxError, match="segment"):
        parse_header("[DEF..MEAL]", 1)

def test_header_empty_name():
    with pytest.raises(IonSyntaxError, match="empty section name"):
        parse_header("[ ]", 1)

def test_header_invalid_segment():
    with pytest.raises(IonSyntaxError) as exc_info:
        parse_header("[DEF.ME AL]", 7)
    assert exc_info.value.line == 7


# ---------------------------------------------------------------------------
# split_row
# ---------------------------------------------------------------------------

def test_split_row_basic():
    cells = split_row("| a | b |")
    assert [c.text for c in cells] == ["a", "b"]
    assert [c.column for c in cells] == [3, 7]

def test_split_row_empty_cells_kept():
    assert [c.text for c in split_row("|1||2|")] == ["1", "", "2"]

def test_split_row_without_trailing_pipe():
    assert [c.text for c in split_row("| a | b")] == ["a", "b"]

def test_split_row_trailing_empty_cell():
    assert [c.text for c in split_row("| SGL | Single |   |")] == ["SGL", "Single", ""]

def test_split_row_escaped_pipe():
    assert [c.text for c in split_row(r"| a\|b | c |")] == ["a|b", "c"]

def test_split_row_escape_offsets():
    cells = split_row(r"| a\|b\|c | d |")
    assert cells[0].text == "a|b|c"
    assert cells[0].escapes == (1, 3)
    assert cells[1].escapes == ()
    # "c" sits at text offset 4, two escapes earlier in the cell
    assert cells[0].source_column(cells[0].column + 4) == 9

def test_split_row_indented():
    cells = split_row("    | x |")
    assert cells[0].text == "x"
    assert cells[0].column == 7


# ---------------------------------------------------------------------------
# scan
# ---------------------------------------------------------------------------

def test_scan_kinds():
    text = "[A]\nx = 1\n\n| a |\n|---|\n"
    kinds = [line.kind for line in scan(text)]
    assert kinds == [
        LineKind.HEADER,
        LineKind.ASSIGNMENT,
        LineKind.BLANK,
        LineKind.ROW,
        LineKind.ROW,
    ]

def test_scan_line_numbers():
    lines = list(scan("# c\n[A]\n\nx = 1\n"))
    assert [line.line for line in lines] == [2, 3, 4]

def test_scan_comment_only_lines_dropped():
    assert list(scan("# one\n   # two\n// three\n")) == []

def test_scan_header_line():
    (line,) = list(scan("[DEF.MEAL] # meals\n"))
    assert line.kind is LineKind.HEADER
    assert parse_header(line.text, line.line) == ("DEF", "MEAL")

def test_scan_defers_header_validation():
    (line,) = list(scan("[DEF..MEAL]\n"))
    assert line.kind is LineKind.HEADER

def test_scan_multiline_assignment():
    text = "x = [\n  1,\n  2\n]\ny = 3\n"
    lines = list(scan(text))
    assert len(lines) == 2
    assert lines[0].kind is LineKind.ASSIGNMENT
    assert lines[0].line == 1
    assert lines[0].text == "x = [\n  1,\n  2\n]"
    assert lines[1].line == 5

def test_scan_multiline_strips_comments_in_continuation():
    (line,) = list(scan("d = {\n  a = 1 # first\n}\n"))
    assert line.text == "d = {\n  a = 1\n}"

def test_scan_brackets_in_strings_ignored():
    lines = list(scan('x = "["\ny = 2\n'))
    assert len(lines) == 2

def test_scan_unterminated_bracket_reports_opening_line():
    with pytest.raises(IonSyntaxError, match="unterminated") as exc_info:
        list(scan("[A]\nx = [1,\n2\n"))
    assert exc_info.value.line == 2
    assert exc_info.value.column == 5

def test_scan_unterminated_reports_outermost_opener():
    with pytest.raises(IonSyntaxError, match="unterminated") as exc_info:
        list(scan("d = {\n  a = [1,\n"))
    assert (exc_info.value.line, exc_info.value.column) == (1, 5)

def test_scan_unterminated_opener_on_continuation_line():
    with pytest.raises(IonSyntaxError, match="unterminated") as exc_info:
        list(scan("x = [1,\n 2] [\n"))
    assert (exc_info.value.line, exc_info.value.column) == (2, 5)

def test_scan_stray_closer():
    with pytest.raises(IonSyntaxError, match="unbalanced") as exc_info:
        list(scan("x = 1]\n"))
    assert exc_info.value.line == 1
    assert exc_info.value.column == 6

def test_scan_row_with_comment():
    (line,) = list(scan("| a | b | # trailing\n"))
    assert [c.text for c in line.cells] == ["a", "b"]
