"""Failure message formatting for assertion wrappers."""

from __future__ import annotations

from typing import Any

from assertpack.assertion.exceptions import MessageFormatError


def format_message(default: str, message: Any = None, args: tuple[Any, ...] = ()) -> str:
    """Resolve the headline of a failure report.

    ``message`` replaces ``default`` and is ``%``-formatted with ``args`` when
    any are given.
    """
    if message is None:
        if args:
            raise MessageFormatError("message arguments were given without a message template")
        return default
    if not isinstance(message, str):
        raise MessageFormatError(
            f"message argument to an assertion must be a format string, got {type(message).__name__}"
        )
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError, KeyError) as error:
        raise MessageFormatError(f"could not format message {message!r} with {args!r}: {error}") from error
