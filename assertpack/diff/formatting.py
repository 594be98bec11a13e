"""Unified diff grouping and text rendering."""

from __future__ import annotations

from typing import Sequence

from assertpack.diff.models import EditBlock, Hunk, LineEdit, UnifiedDiff

DEFAULT_CONTEXT_LINES = 3


def to_unified(
    from_label: str,
    to_label: str,
    edits: Sequence[LineEdit],
    *,
    context: int = DEFAULT_CONTEXT_LINES,
) -> UnifiedDiff:
    """Group an edit script into unified diff hunks.

    Hunks whose context windows touch or overlap are merged.
    """
    before = [edit.text for edit in edits if edit.kind != "insert"]
    after = [edit.text for edit in edits if edit.kind != "delete"]
    hunks = tuple(
        _build_hunk(group, before, after)
        for group in _group_blocks(_edit_blocks(edits), context=context)
    )
    return UnifiedDiff(from_label=from_label, to_label=to_label, hunks=hunks)


def format_unified(diff: UnifiedDiff) -> str:
    if diff.identical:
        return ""

    lines = [f"--- {diff.from_label}", f"+++ {diff.to_label}"]
    for hunk in diff.hunks:
        lines.append(
            f"@@ -{_format_range(hunk.from_start, hunk.from_count)} "
            f"+{_format_range(hunk.to_start, hunk.to_count)} @@"
        )
        lines.extend(hunk.lines)
    return "\n".join(lines) + "\n"


def _edit_blocks(edits: Sequence[LineEdit]) -> list[EditBlock]:
    blocks: list[EditBlock] = []
    from_index = 0
    to_index = 0
    index = 0

    while index < len(edits):
        from_start = from_index
        to_start = to_index
        if edits[index].kind == "equal":
            while index < len(edits) and edits[index].kind == "equal":
                from_index += 1
                to_index += 1
                index += 1
            blocks.append(EditBlock("equal", from_start, from_index, to_start, to_index))
            continue

        while index < len(edits) and edits[index].kind != "equal":
            if edits[index].kind == "delete":
                from_index += 1
            else:
                to_index += 1
            index += 1
        blocks.append(EditBlock("change", from_start, from_index, to_start, to_index))

    return blocks


def _group_blocks(blocks: list[EditBlock], *, context: int) -> list[list[EditBlock]]:
    if not any(block.tag == "change" for block in blocks):
        return []

    trimmed = list(blocks)
    first = trimmed[0]
    if first.tag == "equal":
        trimmed[0] = EditBlock(
            "equal",
            max(first.from_start, first.from_stop - context),
            first.from_stop,
            max(first.to_start, first.to_stop - context),
            first.to_stop,
        )
    last = trimmed[-1]
    if last.tag == "equal":
        trimmed[-1] = EditBlock(
            "equal",
            last.from_start,
            min(last.from_stop, last.from_start + context),
            last.to_start,
            min(last.to_stop, last.to_start + context),
        )

    groups: list[list[EditBlock]] = []
    group: list[EditBlock] = []
    for block in trimmed:
        if block.tag == "equal" and block.from_stop - block.from_start > context * 2:
            group.append(
                EditBlock(
                    "equal",
                    block.from_start,
                    block.from_start + context,
                    block.to_start,
                    block.to_start + context,
                )
            )
            groups.append(group)
            group = []
            block = EditBlock(
                "equal",
                block.from_stop - context,
                block.from_stop,
                block.to_stop - context,
                block.to_stop,
            )
        group.append(block)

    if group and not (len(group) == 1 and group[0].tag == "equal"):
        groups.append(group)
    return [candidate for candidate in groups if any(block.tag == "change" for block in candidate)]


def _build_hunk(group: list[EditBlock], before: list[str], after: list[str]) -> Hunk:
    lines: list[str] = []
    for block in group:
        if block.tag == "equal":
            lines.extend(f" {line}" for line in before[block.from_start : block.from_stop])
            continue
        lines.extend(f"-{line}" for line in before[block.from_start : block.from_stop])
        lines.extend(f"+{line}" for line in after[block.to_start : block.to_stop])

    return Hunk(
        from_start=group[0].from_start,
        from_count=group[-1].from_stop - group[0].from_start,
        to_start=group[0].to_start,
        to_count=group[-1].to_stop - group[0].to_start,
        lines=tuple(lines),
    )


def _format_range(start: int, count: int) -> str:
    first_line = start + 1
    if count == 1:
        return str(first_line)
    if count == 0:
        return f"{start},0"
    return f"{first_line},{count}"
