"""Canonical rendering and structural equality for assertkit."""

from assertpack.core.canonical import canonical_form, is_kept, render_canonical
from assertpack.core.equality import is_zero_value, objects_are_equal
from assertpack.core.options import (
    CompareOption,
    Exclude,
    IgnoreCustomFormatting,
    OmitEmpty,
    RenderSettings,
    expand_compare_options,
)
from assertpack.core.types import VALUE_KINDS, RecordField, ValueKind, classify_value

__all__ = [
    "CompareOption",
    "Exclude",
    "OmitEmpty",
    "IgnoreCustomFormatting",
    "RenderSettings",
    "expand_compare_options",
    "canonical_form",
    "render_canonical",
    "is_kept",
    "objects_are_equal",
    "is_zero_value",
    "VALUE_KINDS",
    "ValueKind",
    "RecordField",
    "classify_value",
]
