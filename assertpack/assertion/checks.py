"""Assertion wrappers over the comparison and diff engine.

Every ``assert_*`` function returns ``None`` when its condition holds and
raises :class:`AssertionFailedError` otherwise. The optional ``message``
replaces the default headline and is ``%``-formatted with the extra
positional arguments. Comparison options are keyword-only.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Sequence

from assertpack.assertion.exceptions import AssertionFailedError
from assertpack.assertion.messages import format_message
from assertpack.core.canonical import render_canonical
from assertpack.core.equality import is_zero_value, objects_are_equal
from assertpack.core.options import CompareOption
from assertpack.diff.engine import diff
from assertpack.diff.needle import needle_position, quote_text
from assertpack.plugins.base import AssertionEndEvent, AssertionStartEvent
from assertpack.plugins.runtime import get_active_plugin_manager


@contextmanager
def _lifecycle(assertion: str) -> Iterator[None]:
    manager = get_active_plugin_manager()
    manager.on_assert_start(AssertionStartEvent(assertion=assertion))
    try:
        yield
    except AssertionFailedError as failure:
        manager.on_assert_end(
            AssertionEndEvent(assertion=assertion, status="fail", message=str(failure))
        )
        raise
    except Exception as error:
        manager.on_assert_end(
            AssertionEndEvent(
                assertion=assertion,
                status="error",
                error_type=type(error).__name__,
                error_message=str(error),
            )
        )
        raise
    manager.on_assert_end(AssertionEndEvent(assertion=assertion, status="pass"))


def _failure(
    assertion: str,
    default: str,
    message: Any,
    message_args: tuple[Any, ...],
    detail: str = "",
) -> AssertionFailedError:
    headline = format_message(default, message, message_args)
    return AssertionFailedError(headline, assertion=assertion, detail=detail)


def compare(expected: Any, actual: Any, *, options: Sequence[CompareOption] = ()) -> bool:
    """Compare two values for equality and return the result."""
    return objects_are_equal(expected, actual, options)


def assert_equal(
    expected: Any,
    actual: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    """Assert that ``expected`` and ``actual`` are equal.

    On failure the report carries a unified diff of both values.
    """
    with _lifecycle("equal"):
        if objects_are_equal(expected, actual, options):
            return
        raise _failure(
            "equal",
            "Expected values to be equal:",
            message,
            message_args,
            diff(expected, actual, options),
        )


def assert_not_equal(
    expected: Any,
    actual: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    """Assert that ``expected`` and ``actual`` differ."""
    with _lifecycle("not_equal"):
        if not objects_are_equal(expected, actual, options):
            return
        raise _failure(
            "not_equal",
            "Expected values to not be equal but both were:",
            message,
            message_args,
            render_canonical(expected, options),
        )


def assert_has_prefix(s: str, prefix: str, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("has_prefix"):
        if s.startswith(prefix):
            return
        raise _failure(
            "has_prefix",
            "Expected string to have prefix:",
            message,
            message_args,
            f"Prefix: {quote_text(prefix)}\nString: {quote_text(s)}",
        )


def assert_has_suffix(s: str, suffix: str, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("has_suffix"):
        if s.endswith(suffix):
            return
        raise _failure(
            "has_suffix",
            "Expected string to have suffix:",
            message,
            message_args,
            f"Suffix: {quote_text(suffix)}\nString: {quote_text(s)}",
        )


def assert_contains(haystack: str, needle: str, message: str | None = None, *message_args: Any) -> None:
    """Assert that ``needle`` is a substring of ``haystack``."""
    with _lifecycle("contains"):
        if needle in haystack:
            return
        raise _failure(
            "contains",
            "Haystack does not contain needle.",
            message,
            message_args,
            f"Needle: {quote_text(needle)}\nHaystack: {quote_text(haystack)}",
        )


def assert_not_contains(haystack: str, needle: str, message: str | None = None, *message_args: Any) -> None:
    """Assert that ``needle`` is not a substring of ``haystack``.

    The failure report marks every occurrence with carets.
    """
    with _lifecycle("not_contains"):
        if needle not in haystack:
            return
        raise _failure(
            "not_contains",
            "Haystack should not contain needle.",
            message,
            message_args,
            needle_position(haystack, needle).render(),
        )


def assert_sequence_contains(
    haystack: Iterable[Any],
    needle: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    """Assert that some item of ``haystack`` is structurally equal to ``needle``."""
    with _lifecycle("sequence_contains"):
        items = list(haystack)
        if any(objects_are_equal(item, needle, options) for item in items):
            return
        raise _failure(
            "sequence_contains",
            "Haystack does not contain needle.",
            message,
            message_args,
            _membership_detail(items, needle, options),
        )


def assert_not_sequence_contains(
    haystack: Iterable[Any],
    needle: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    with _lifecycle("not_sequence_contains"):
        items = list(haystack)
        if not any(objects_are_equal(item, needle, options) for item in items):
            return
        raise _failure(
            "not_sequence_contains",
            "Haystack should not contain needle.",
            message,
            message_args,
            _membership_detail(items, needle, options),
        )


def _membership_detail(items: list[Any], needle: Any, options: Sequence[CompareOption]) -> str:
    return (
        f"Needle: {render_canonical(needle, options)}\n"
        f"Haystack: {render_canonical(items, options)}"
    )


def assert_zero(
    value: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    """Assert that ``value`` is the zero value of its type.

    Empty collections count as zero.
    """
    with _lifecycle("zero"):
        if is_zero_value(value, options):
            return
        raise _failure(
            "zero",
            "Expected a zero value but got:",
            message,
            message_args,
            render_canonical(value, options),
        )


def assert_not_zero(
    value: Any,
    message: str | None = None,
    *message_args: Any,
    options: Sequence[CompareOption] = (),
) -> None:
    with _lifecycle("not_zero"):
        if not is_zero_value(value, options):
            return
        raise _failure(
            "not_zero",
            "Did not expect the zero value:",
            message,
            message_args,
            render_canonical(value, options),
        )


def assert_equal_error(
    error: BaseException | None,
    expected_message: str,
    message: str | None = None,
    *message_args: Any,
) -> None:
    """Assert that ``error`` carries ``expected_message``.

    ``None`` with an empty expected message passes.
    """
    with _lifecycle("equal_error"):
        if error is None and expected_message == "":
            return
        if error is None:
            raise _failure("equal_error", "Expected an error", message, message_args)
        if str(error) != expected_message:
            raise _failure(
                "equal_error",
                "Error message not as expected:",
                message,
                message_args,
                diff(expected_message, str(error)),
            )


def assert_is_error(
    error: BaseException | None,
    target: type[BaseException] | BaseException,
    message: str | None = None,
    *message_args: Any,
) -> None:
    """Assert that ``target`` matches some exception in ``error``'s tree.

    The tree follows ``__cause__``, ``__context__`` and exception groups. A
    class target matches by ``isinstance``; an instance matches itself or an
    exception of the same type with the same arguments.
    """
    with _lifecycle("is_error"):
        if _error_tree_matches(error, target):
            return
        raise _failure(
            "is_error",
            f"Error tree {error!r} should contain error {_describe_target(target)}",
            message,
            message_args,
        )


def assert_not_is_error(
    error: BaseException | None,
    target: type[BaseException] | BaseException,
    message: str | None = None,
    *message_args: Any,
) -> None:
    with _lifecycle("not_is_error"):
        if not _error_tree_matches(error, target):
            return
        raise _failure(
            "not_is_error",
            f"Error tree {error!r} should NOT contain error {_describe_target(target)}",
            message,
            message_args,
        )


def assert_error(error: BaseException | None, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("error"):
        if error is not None:
            return
        raise _failure("error", "Expected an error", message, message_args)


def assert_no_error(error: BaseException | None, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("no_error"):
        if error is None:
            return
        raise _failure("no_error", "Did not expect an error but got:", message, message_args, repr(error))


def assert_true(ok: Any, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("true"):
        if ok:
            return
        raise _failure("true", "Expected expression to be true", message, message_args)


def assert_false(ok: Any, message: str | None = None, *message_args: Any) -> None:
    with _lifecycle("false"):
        if not ok:
            return
        raise _failure("false", "Expected expression to be false", message, message_args)


def assert_raises(fn: Callable[[], Any], message: str | None = None, *message_args: Any) -> None:
    """Assert that calling ``fn`` raises an exception."""
    with _lifecycle("raises"):
        try:
            fn()
        except Exception:
            return
        raise _failure("raises", "Expected function to raise", message, message_args)


def assert_not_raises(fn: Callable[[], Any], message: str | None = None, *message_args: Any) -> None:
    """Assert that calling ``fn`` returns without raising."""
    with _lifecycle("not_raises"):
        try:
            fn()
        except Exception as error:
            raise _failure(
                "not_raises",
                "Expected function not to raise",
                message,
                message_args,
                f"Exception: {error!r}",
            ) from error


def _error_tree_matches(
    error: BaseException | None,
    target: type[BaseException] | BaseException,
) -> bool:
    return any(_error_matches(candidate, target) for candidate in _walk_error_tree(error))


def _walk_error_tree(error: BaseException | None) -> Iterator[BaseException]:
    pending = [error] if error is not None else []
    seen: set[int] = set()
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        grouped = getattr(current, "exceptions", None)
        if isinstance(grouped, (list, tuple)):
            pending.extend(item for item in grouped if isinstance(item, BaseException))
        if current.__cause__ is not None:
            pending.append(current.__cause__)
        if current.__context__ is not None:
            pending.append(current.__context__)


def _error_matches(candidate: BaseException, target: type[BaseException] | BaseException) -> bool:
    if isinstance(target, type):
        return isinstance(candidate, target)
    if candidate is target:
        return True
    return type(candidate) is type(target) and candidate.args == target.args


def _describe_target(target: type[BaseException] | BaseException) -> str:
    if isinstance(target, type):
        return target.__qualname__
    return repr(target)
