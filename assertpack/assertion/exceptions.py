"""Assertion subsystem exceptions."""

from __future__ import annotations


class AssertionFailedError(AssertionError):
    """An assertion did not hold.

    ``str(error)`` is the full report: the message line, a newline, then the
    detail block (diff or diagnostic).
    """

    def __init__(self, message: str, *, assertion: str, detail: str = "") -> None:
        report = f"{message}\n{detail}" if detail else message
        super().__init__(report)
        self.message = message
        self.assertion = assertion
        self.detail = detail


class AssertionUsageError(TypeError):
    """Base class for mistakes in how an assertion was called."""


class MessageFormatError(AssertionUsageError):
    """Custom assertion message is not a format string for its arguments."""
