"""Structural equality and zero-value checks."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from assertpack.core.canonical import canonical_form, is_kept
from assertpack.core.options import CompareOption, RenderSettings, expand_compare_options
from assertpack.core.types import COLLECTION_KINDS, classify_value, record_fields


def objects_are_equal(expected: Any, actual: Any, options: Iterable[CompareOption] = ()) -> bool:
    """Decide whether two values are the same for assertion purposes.

    None, byte sequences and text are compared directly. Everything else is
    compared through its canonical rendering, so options that hide fields from
    the diff also hide them from equality.
    """
    if expected is None or actual is None:
        return expected is None and actual is None

    expected_kind = classify_value(expected)
    actual_kind = classify_value(actual)
    if expected_kind == "bytes" and actual_kind == "bytes":
        return bytes(expected) == bytes(actual)
    if expected_kind == "text" and actual_kind == "text":
        return expected == actual

    settings = expand_compare_options(options)
    return canonical_form(expected, settings) == canonical_form(actual, settings)


def is_zero_value(value: Any, options: Iterable[CompareOption] = ()) -> bool:
    """Report whether a value is the zero value of its type.

    Scalars are zero when falsy, text and bytes when empty, records when every
    compared field is zero under the same options. Empty collections count as
    zero even when their representation differs from the type's zero value.
    Enum members and opaque values are never zero. No instance is built, so
    user validation in ``__init__`` or ``__post_init__`` never runs.
    """
    return _is_zero(value, settings=expand_compare_options(options), seen=frozenset())


def _is_zero(value: Any, *, settings: RenderSettings, seen: frozenset[int]) -> bool:
    kind = classify_value(value)
    if kind == "absent":
        return True
    if kind == "scalar":
        return not isinstance(value, Enum) and not value
    if kind in {"bytes", "text"} or kind in COLLECTION_KINDS:
        return len(value) == 0
    if kind == "custom" and not settings.ignore_custom_formatting:
        return False
    if kind not in {"record", "custom"} or id(value) in seen:
        return False

    fields = [
        field
        for field in record_fields(value)
        if is_kept(field.value, settings=settings, declared_type=field.declared_type)
    ]
    nested = seen | {id(value)}
    return all(_is_zero(field.value, settings=settings, seen=nested) for field in fields)
