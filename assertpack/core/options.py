"""Comparison options and their expansion into renderer directives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

DEFAULT_INDENT = "  "


@dataclass(frozen=True, slots=True)
class Exclude:
    """Exclude fields holding values of ``field_type`` from comparison."""

    field_type: type

    def __post_init__(self) -> None:
        if not isinstance(self.field_type, type):
            raise TypeError(f"Exclude expects a type, got {self.field_type!r}")


@dataclass(frozen=True, slots=True)
class OmitEmpty:
    """Treat empty fields as absent."""


@dataclass(frozen=True, slots=True)
class IgnoreCustomFormatting:
    """Render objects structurally even when they define ``__repr__``."""


CompareOption = Union[Exclude, OmitEmpty, IgnoreCustomFormatting]


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """Merged directives consumed by canonical rendering."""

    indent: str = DEFAULT_INDENT
    excluded_types: tuple[type, ...] = ()
    omit_empty: bool = False
    ignore_custom_formatting: bool = False


def expand_compare_options(options: Iterable[CompareOption] = ()) -> RenderSettings:
    """Merge options in order.

    Directives only accumulate: a later option can add an excluded type or
    enable a flag but never undo an earlier one.
    """
    excluded: list[type] = []
    omit_empty = False
    ignore_custom_formatting = False

    for option in options:
        if isinstance(option, Exclude):
            if option.field_type not in excluded:
                excluded.append(option.field_type)
        elif isinstance(option, OmitEmpty):
            omit_empty = True
        elif isinstance(option, IgnoreCustomFormatting):
            ignore_custom_formatting = True
        else:
            raise TypeError(f"Unsupported compare option: {option!r}")

    return RenderSettings(
        excluded_types=tuple(excluded),
        omit_empty=omit_empty,
        ignore_custom_formatting=ignore_custom_formatting,
    )
