from __future__ import annotations

from dataclasses import dataclass

import pytest

from assertpack.core import Exclude, OmitEmpty, objects_are_equal
from assertpack.diff import diff, diff_lines, diff_text, format_unified, render_documents, unified_diff


@dataclass
class Data:
    text: str = ""
    num: int = 0


def _numbered(count: int) -> list[str]:
    return [f"line {index}" for index in range(1, count + 1)]


def _document(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"


def test_text_diff_drops_file_header_and_first_hunk_header() -> None:
    assert diff("hello\nworld", "goodbye\nworld") == "-hello\n+goodbye\n world\n"


def test_record_diff_uses_canonical_rendering() -> None:
    rendered = diff(Data("expected", 1234), Data("expected", 1235))

    assert rendered == (
        " Data(\n"
        "   text='expected',\n"
        "-  num=1234,\n"
        "+  num=1235,\n"
        " )\n"
    )


def test_equal_values_produce_empty_diff() -> None:
    assert diff(1, 1) == ""
    assert diff("same", "same") == ""
    assert diff({"a": [1]}, {"a": [1]}) == ""
    assert diff_lines(Data(), Data()) == []


def test_single_line_documents() -> None:
    assert diff("", "a") == "-\n+a\n"


def test_diff_lines_splits_body() -> None:
    assert diff_lines("hello\nworld", "goodbye\nworld") == ["-hello", "+goodbye", " world"]


def test_full_unified_format_has_labels_and_ranges() -> None:
    before = _numbered(20)
    after = list(before)
    after[17] = "changed"

    rendered = format_unified(unified_diff(_document(before), _document(after)))

    assert rendered.splitlines()[:3] == [
        "--- expected.txt",
        "+++ actual.txt",
        "@@ -15,6 +15,6 @@",
    ]
    assert rendered.endswith(" line 20\n")


def test_distant_changes_split_into_separate_hunks() -> None:
    before = _numbered(20)
    after = list(before)
    after[1] = "second"
    after[18] = "nineteenth"

    full = format_unified(unified_diff(_document(before), _document(after)))
    body = diff_text(_document(before), _document(after))

    assert full.count("@@ ") == 2
    assert "@@ -1,5 +1,5 @@" in full
    assert "@@ -16,5 +16,5 @@\n" in body
    assert not body.startswith("@@")


def test_nearby_changes_merge_into_one_hunk() -> None:
    before = _numbered(20)
    after = list(before)
    after[4] = "fifth"
    after[10] = "eleventh"

    full = format_unified(unified_diff(_document(before), _document(after)))

    assert full.count("@@ ") == 1
    assert "@@ -2,13 +2,13 @@" in full


def test_insertions_and_deletions_use_zero_length_ranges() -> None:
    full = format_unified(unified_diff("", "a\n"))

    assert full == "--- expected.txt\n+++ actual.txt\n@@ -0,0 +1 @@\n+a\n"


def test_render_documents_terminates_both_sides() -> None:
    assert render_documents("a", "b") == ("a\n", "b\n")
    assert render_documents([1], [2]) == ("[\n  1,\n]\n", "[\n  2,\n]\n")


def test_diff_is_deterministic() -> None:
    expected = {"b": [Data("x", 1)], "a": {3, 1}}
    actual = {"a": {1, 2}, "b": [Data("y", 1)]}

    assert diff(expected, actual) == diff(expected, actual)


@pytest.mark.parametrize(
    ("expected", "actual", "options"),
    [
        (Data("x", 1), Data("x", 2), [Exclude(int)]),
        (Data("x", 1), Data("x", 2), []),
        ({"a": []}, {}, [OmitEmpty()]),
        ({"a": []}, {}, []),
        (b"ab", bytearray(b"ab"), []),
        ("text", "text", []),
        ("text", "other", []),
    ],
)
def test_diff_is_empty_exactly_when_values_are_equal(expected: object, actual: object, options: list) -> None:
    assert (diff(expected, actual, options) == "") is objects_are_equal(expected, actual, options)


def test_multiline_text_fields_show_both_sides() -> None:
    lines = diff_lines(Data("expected\ntext", 1234), Data("actual\ntext", 1234))

    assert "-  text='expected\\ntext'," in lines
    assert "+  text='actual\\ntext'," in lines
