"""Assertion wrappers and failure reporting for assertkit."""

from assertpack.assertion.checks import (
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
from assertpack.assertion.exceptions import (
    AssertionFailedError,
    AssertionUsageError,
    MessageFormatError,
)
from assertpack.assertion.messages import format_message

__all__ = [
    "AssertionFailedError",
    "AssertionUsageError",
    "MessageFormatError",
    "format_message",
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
