"""Value classification used by canonical rendering and equality."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
import inspect
from typing import Any, Literal

ValueKind = Literal[
    "absent",
    "scalar",
    "bytes",
    "text",
    "sequence",
    "set",
    "mapping",
    "record",
    "custom",
    "opaque",
]

VALUE_KINDS: tuple[str, ...] = (
    "absent",
    "scalar",
    "bytes",
    "text",
    "sequence",
    "set",
    "mapping",
    "record",
    "custom",
    "opaque",
)

COLLECTION_KINDS: frozenset[str] = frozenset({"sequence", "set", "mapping"})


@dataclass(frozen=True, slots=True)
class RecordField:
    """A single named field of a record value."""

    name: str
    value: Any
    declared_type: Any = None


def classify_value(value: Any) -> ValueKind:
    """Map a runtime value onto the closed set of renderable kinds."""
    if value is None:
        return "absent"
    if isinstance(value, Enum):
        return "scalar"
    if isinstance(value, (bool, int, float, complex)):
        return "scalar"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "bytes"
    if isinstance(value, str):
        return "text"
    if isinstance(value, type) or inspect.ismodule(value) or inspect.isroutine(value):
        return "opaque"
    if is_dataclass(value):
        return "record"
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return "record"
    if hasattr(type(value), "__attrs_attrs__"):
        return "record"
    if isinstance(value, Sequence):
        return "sequence"
    if isinstance(value, Set):
        return "set"
    if isinstance(value, Mapping):
        return "mapping"
    if has_custom_repr(type(value)):
        return "custom"
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return "record"
    return "opaque"


def has_custom_repr(cls: type) -> bool:
    return cls.__repr__ is not object.__repr__


def record_fields(value: Any) -> list[RecordField]:
    """Return the comparable fields of a record in stable order.

    Dataclass, named tuple and attrs fields keep their declaration order.
    Plain object attributes are sorted by name.
    """
    cls = type(value)
    if is_dataclass(value):
        return [
            RecordField(name=field.name, value=getattr(value, field.name), declared_type=field.type)
            for field in fields(value)
            if field.compare
        ]

    if isinstance(value, tuple) and hasattr(cls, "_fields"):
        annotations = getattr(cls, "__annotations__", {})
        return [
            RecordField(name=name, value=item, declared_type=annotations.get(name))
            for name, item in zip(cls._fields, value)
        ]

    attrs_attributes = getattr(cls, "__attrs_attrs__", None)
    if attrs_attributes is not None:
        return [
            RecordField(name=attribute.name, value=getattr(value, attribute.name), declared_type=attribute.type)
            for attribute in attrs_attributes
            if getattr(attribute, "eq", True)
        ]

    attributes: dict[str, Any] = {}
    for name in _slot_names(cls):
        if hasattr(value, name):
            attributes[name] = getattr(value, name)
    attributes.update(getattr(value, "__dict__", {}))
    return [RecordField(name=name, value=attributes[name]) for name in sorted(attributes)]


def is_empty_value(value: Any) -> bool:
    """Shallow emptiness used by the omit-empty directive.

    Records are empty when every field is empty.
    """
    return _is_empty(value, seen=frozenset())


def _is_empty(value: Any, *, seen: frozenset[int]) -> bool:
    kind = classify_value(value)
    if kind == "absent":
        return True
    if kind == "scalar":
        return not isinstance(value, Enum) and not value
    if kind in {"bytes", "text"} or kind in COLLECTION_KINDS:
        return len(value) == 0
    if kind == "record":
        if id(value) in seen:
            return False
        nested = seen | {id(value)}
        return all(_is_empty(field.value, seen=nested) for field in record_fields(value))
    return False


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in {"__dict__", "__weakref__"} or name in names:
                continue
            names.append(name)
    return tuple(names)
