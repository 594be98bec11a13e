"""Structural diff rendering between two values."""

from __future__ import annotations

from typing import Any, Iterable

from assertpack.core.canonical import canonical_form
from assertpack.core.options import CompareOption, expand_compare_options
from assertpack.core.types import classify_value
from assertpack.diff.formatting import format_unified, to_unified
from assertpack.diff.models import UnifiedDiff
from assertpack.diff.myers import compute_edits

EXPECTED_LABEL = "expected.txt"
ACTUAL_LABEL = "actual.txt"
HEADER_LINE_COUNT = 3


def diff(expected: Any, actual: Any, options: Iterable[CompareOption] = ()) -> str:
    """Return a unified diff of two values without the file header.

    Two strings are diffed as raw text. Anything else is diffed through its
    canonical rendering with the same options equality uses. Returns ``""``
    when the renderings match.
    """
    before, after = render_documents(expected, actual, options)
    return diff_text(before, after)


def diff_lines(expected: Any, actual: Any, options: Iterable[CompareOption] = ()) -> list[str]:
    text = diff(expected, actual, options)
    if not text:
        return []
    return text.removesuffix("\n").split("\n")


def render_documents(
    expected: Any,
    actual: Any,
    options: Iterable[CompareOption] = (),
) -> tuple[str, str]:
    """Render both sides to newline-terminated documents."""
    if classify_value(expected) == "text" and classify_value(actual) == "text":
        return f"{expected}\n", f"{actual}\n"

    settings = expand_compare_options(options)
    return (
        canonical_form(expected, settings) + "\n",
        canonical_form(actual, settings) + "\n",
    )


def unified_diff(before: str, after: str) -> UnifiedDiff:
    edits = compute_edits(_split_lines(before), _split_lines(after))
    return to_unified(EXPECTED_LABEL, ACTUAL_LABEL, edits)


def diff_text(before: str, after: str) -> str:
    """Diff two documents and strip the three header lines."""
    lines = format_unified(unified_diff(before, after)).split("\n")
    if len(lines) < HEADER_LINE_COUNT:
        return ""
    return "\n".join(lines[HEADER_LINE_COUNT:])


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines
