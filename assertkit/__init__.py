"""Stable public API surface for assertkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any, Sequence

from assertpack.assertion import (
    AssertionFailedError,
    AssertionUsageError,
    MessageFormatError,
    assert_contains,
    assert_equal,
    assert_equal_error,
    assert_error,
    assert_false,
    assert_has_prefix,
    assert_has_suffix,
    assert_is_error,
    assert_no_error,
    assert_not_contains,
    assert_not_equal,
    assert_not_is_error,
    assert_not_raises,
    assert_not_sequence_contains,
    assert_not_zero,
    assert_raises,
    assert_sequence_contains,
    assert_true,
    assert_zero,
    compare,
)
from assertpack.core import (
    CompareOption,
    Exclude,
    IgnoreCustomFormatting,
    OmitEmpty,
    is_zero_value,
    objects_are_equal,
    render_canonical,
)
from assertpack.diff import NeedlePosition, needle_position
from assertpack.diff import diff as _diff_values
from assertpack.diff import diff_lines as _diff_value_lines

__version__ = "0.1.0"


def equal(expected: Any, actual: Any, options: Sequence[CompareOption] = ()) -> bool:
    """Return whether two values are structurally equal."""
    return objects_are_equal(expected, actual, options)


def diff(expected: Any, actual: Any, options: Sequence[CompareOption] = ()) -> str:
    """Return the unified diff body between two values (``""`` when equal)."""
    return _diff_values(expected, actual, options)


def diff_lines(expected: Any, actual: Any, options: Sequence[CompareOption] = ()) -> list[str]:
    """Return the unified diff body as a list of lines."""
    return _diff_value_lines(expected, actual, options)


def canonical(value: Any, options: Sequence[CompareOption] = ()) -> str:
    """Return the canonical text used for comparison and diffs."""
    return render_canonical(value, options)


def is_zero(value: Any, options: Sequence[CompareOption] = ()) -> bool:
    """Return whether a value is zero; empty collections count as zero."""
    return is_zero_value(value, options)


__all__ = [
    "__version__",
    "CompareOption",
    "Exclude",
    "OmitEmpty",
    "IgnoreCustomFormatting",
    "AssertionFailedError",
    "AssertionUsageError",
    "MessageFormatError",
    "NeedlePosition",
    "equal",
    "diff",
    "diff_lines",
    "canonical",
    "is_zero",
    "needle_position",
    "compare",
    "assert_equal",
    "assert_not_equal",
    "assert_has_prefix",
    "assert_has_suffix",
    "assert_contains",
    "assert_not_contains",
    "assert_sequence_contains",
    "assert_not_sequence_contains",
    "assert_zero",
    "assert_not_zero",
    "assert_equal_error",
    "assert_is_error",
    "assert_not_is_error",
    "assert_error",
    "assert_no_error",
    "assert_true",
    "assert_false",
    "assert_raises",
    "assert_not_raises",
]
