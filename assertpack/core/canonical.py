"""Deterministic canonical rendering of arbitrary values."""

from __future__ import annotations

from enum import Enum
import inspect
from typing import Any, Iterable

from assertpack.core.options import CompareOption, RenderSettings, expand_compare_options
from assertpack.core.types import RecordField, classify_value, is_empty_value, record_fields

_SEQUENCE_BRACKETS: dict[type, tuple[str, str]] = {
    list: ("[", "]"),
    tuple: ("(", ")"),
}
_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex)
_BYTE_TYPES: tuple[type, ...] = (bytes, bytearray, memoryview)


def render_canonical(value: Any, options: Iterable[CompareOption] = ()) -> str:
    """Render a value to its canonical text using comparison options."""
    return canonical_form(value, expand_compare_options(options))


def canonical_form(value: Any, settings: RenderSettings | None = None) -> str:
    """Render a value with already-expanded settings.

    Nested values are indented by ``settings.indent`` per level, record fields
    keep declaration order and mapping/set entries are sorted.
    """
    return _render(value, settings=settings or RenderSettings(), depth=0, stack=frozenset())


def _render(
    value: Any,
    *,
    settings: RenderSettings,
    depth: int,
    stack: frozenset[int],
) -> str:
    kind = classify_value(value)

    if kind == "absent":
        return "None"

    if kind == "scalar":
        if isinstance(value, Enum):
            return f"{type(value).__qualname__}.{value.name}"
        return _builtin_repr(value, _SCALAR_TYPES)

    if kind == "bytes":
        return repr(bytes(value))

    if kind == "text":
        return _builtin_repr(value, (str,))

    if kind == "opaque":
        return _render_opaque(value)

    if id(value) in stack:
        return f"<cycle {type(value).__qualname__}>"
    nested = stack | {id(value)}

    if kind == "sequence":
        items = [_render(item, settings=settings, depth=depth + 1, stack=nested) for item in value]
        opener, closer = _sequence_brackets(value)
        return _block(opener, closer, items, settings=settings, depth=depth)

    if kind == "set":
        items = sorted(_render(item, settings=settings, depth=depth + 1, stack=nested) for item in value)
        if type(value) is set:
            if not items:
                return "set()"
            return _block("{", "}", items, settings=settings, depth=depth)
        return _block(f"{type(value).__qualname__}({{", "})", items, settings=settings, depth=depth)

    if kind == "mapping":
        entries = [
            (key, item)
            for key, item in value.items()
            if is_kept(item, settings=settings)
        ]
        rendered = [
            (
                _render(key, settings=settings, depth=depth + 1, stack=nested),
                key,
                _render(item, settings=settings, depth=depth + 1, stack=nested),
            )
            for key, item in entries
        ]
        lines = [f"{key_text}: {item_text}" for key_text, _, item_text in _sort_entries(rendered)]
        if type(value) is dict:
            return _block("{", "}", lines, settings=settings, depth=depth)
        return _block(f"{type(value).__qualname__}({{", "})", lines, settings=settings, depth=depth)

    if kind == "custom":
        if not settings.ignore_custom_formatting:
            return repr(value)
        fields = record_fields(value)
        if not fields:
            return repr(value)
        return _render_record(value, fields, settings=settings, depth=depth, stack=nested)

    return _render_record(value, record_fields(value), settings=settings, depth=depth, stack=nested)


def _render_record(
    value: Any,
    fields: list[RecordField],
    *,
    settings: RenderSettings,
    depth: int,
    stack: frozenset[int],
) -> str:
    lines = [
        f"{field.name}={_render(field.value, settings=settings, depth=depth + 1, stack=stack)}"
        for field in fields
        if is_kept(field.value, settings=settings, declared_type=field.declared_type)
    ]
    return _block(f"{type(value).__qualname__}(", ")", lines, settings=settings, depth=depth)


def is_kept(value: Any, *, settings: RenderSettings, declared_type: Any = None) -> bool:
    """Report whether a record field or mapping entry survives the directives.

    Every byte sequence renders as a bytes literal, so excluding any byte type
    hides all of them.
    """
    for excluded in settings.excluded_types:
        if isinstance(value, excluded):
            return False
        if isinstance(value, _BYTE_TYPES) and issubclass(excluded, _BYTE_TYPES):
            return False
        if declared_type is excluded:
            return False
        if isinstance(declared_type, str) and declared_type == excluded.__name__:
            return False
    if settings.omit_empty and is_empty_value(value):
        return False
    return True


def _block(opener: str, closer: str, lines: list[str], *, settings: RenderSettings, depth: int) -> str:
    if not lines:
        return f"{opener}{closer}"
    inner = settings.indent * (depth + 1)
    body = "\n".join(f"{inner}{line}," for line in lines)
    return f"{opener}\n{body}\n{settings.indent * depth}{closer}"


def _builtin_repr(value: Any, builtins: tuple[type, ...]) -> str:
    cls = type(value)
    if cls in builtins:
        return repr(value)
    base = next(builtin for builtin in builtins if isinstance(value, builtin))
    return f"{cls.__qualname__}({base.__repr__(value)})"


def _sequence_brackets(value: Any) -> tuple[str, str]:
    brackets = _SEQUENCE_BRACKETS.get(type(value))
    if brackets is not None:
        return brackets
    return f"{type(value).__qualname__}([", "])"


def _sort_entries(entries: list[tuple[str, Any, str]]) -> list[tuple[str, Any, str]]:
    keys = [key for _, key, _ in entries]
    if all(type(key) is str for key in keys):
        return sorted(entries, key=lambda entry: entry[1])
    if all(type(key) in (int, float) for key in keys):
        return sorted(entries, key=lambda entry: (entry[1], entry[0]))
    return sorted(entries, key=lambda entry: entry[0])


def _render_opaque(value: Any) -> str:
    if inspect.ismodule(value):
        return f"<module {value.__name__}>"
    if isinstance(value, type):
        return f"<class {value.__module__}.{value.__qualname__}>"
    qualname = getattr(value, "__qualname__", None)
    if qualname is not None:
        module = getattr(value, "__module__", None)
        prefix = f"{module}." if module else ""
        code = getattr(value, "__code__", None)
        line = f":{code.co_firstlineno}" if code is not None else ""
        return f"<function {prefix}{qualname}{line}>"
    return f"<{type(value).__qualname__} object>"
