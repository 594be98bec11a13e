"""Data models for line edit scripts and unified diffs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

EditKind = Literal["equal", "delete", "insert"]
BlockTag = Literal["equal", "change"]


@dataclass(frozen=True, slots=True)
class LineEdit:
    """One step of a line edit script."""

    kind: EditKind
    text: str


@dataclass(frozen=True, slots=True)
class EditBlock:
    """A run of edits of the same shape, as half-open line ranges."""

    tag: BlockTag
    from_start: int
    from_stop: int
    to_start: int
    to_stop: int


@dataclass(frozen=True, slots=True)
class Hunk:
    """A unified diff hunk. Line numbers are 0-based starts."""

    from_start: int
    from_count: int
    to_start: int
    to_count: int
    lines: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_start": self.from_start,
            "from_count": self.from_count,
            "to_start": self.to_start,
            "to_count": self.to_count,
            "lines": list(self.lines),
        }


@dataclass(frozen=True, slots=True)
class UnifiedDiff:
    """Unified diff between two labelled documents."""

    from_label: str
    to_label: str
    hunks: tuple[Hunk, ...] = ()

    @property
    def identical(self) -> bool:
        return not self.hunks

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_label": self.from_label,
            "to_label": self.to_label,
            "identical": self.identical,
            "hunks": [hunk.to_dict() for hunk in self.hunks],
        }
