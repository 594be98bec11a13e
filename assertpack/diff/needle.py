"""Substring diagnostics for containment assertions."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any


def quote_text(text: str) -> str:
    """Double-quote a string with backslash escapes."""
    return json.dumps(text, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class NeedlePosition:
    """Quoted haystack and needle plus a caret line marking occurrences."""

    quoted_haystack: str
    quoted_needle: str
    positions: str
    found: bool

    def render(self) -> str:
        label_width = len("Haystack: ")
        return (
            f"Needle: {self.quoted_needle}\n"
            f"Haystack: {self.quoted_haystack}\n"
            f"{' ' * label_width}{self.positions}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "quoted_haystack": self.quoted_haystack,
            "quoted_needle": self.quoted_needle,
            "positions": self.positions,
            "found": self.found,
        }


def needle_position(haystack: str, needle: str) -> NeedlePosition:
    """Locate ``needle`` inside ``haystack`` in quoted form.

    Every non-overlapping occurrence of the quoted needle is marked with ``^``
    under the quoted haystack. The marker line is blank when nothing matches.
    """
    quoted_needle = quote_text(needle)[1:-1]
    quoted_haystack = quote_text(haystack)

    marks = [" "] * len(quoted_haystack)
    if quoted_needle:
        start = quoted_haystack.find(quoted_needle)
        while start != -1:
            end = start + len(quoted_needle)
            marks[start:end] = "^" * len(quoted_needle)
            start = quoted_haystack.find(quoted_needle, end)

    return NeedlePosition(
        quoted_haystack=quoted_haystack,
        quoted_needle=quoted_needle,
        positions="".join(marks),
        found=needle in haystack,
    )
