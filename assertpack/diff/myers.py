"""Myers O(ND) shortest edit script over lines."""

from __future__ import annotations

from typing import Sequence

from assertpack.diff.models import LineEdit


def compute_edits(before: Sequence[str], after: Sequence[str]) -> list[LineEdit]:
    """Compute a minimal edit script turning ``before`` into ``after``.

    Runs in O((N+M)·D) time where D is the number of inserted plus deleted
    lines. Inside every changed region deletions come before insertions.
    """
    prefix = 0
    while prefix < len(before) and prefix < len(after) and before[prefix] == after[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < len(before) - prefix
        and suffix < len(after) - prefix
        and before[len(before) - 1 - suffix] == after[len(after) - 1 - suffix]
    ):
        suffix += 1

    middle_before = before[prefix : len(before) - suffix]
    middle_after = after[prefix : len(after) - suffix]

    edits = [LineEdit("equal", line) for line in before[:prefix]]
    edits.extend(_order_changes(_backtrack(middle_before, middle_after)))
    edits.extend(LineEdit("equal", line) for line in before[len(before) - suffix :])
    return edits


def _shortest_edit_trace(before: Sequence[str], after: Sequence[str]) -> list[list[int]]:
    n = len(before)
    m = len(after)
    max_d = n + m
    offset = max_d + 1
    frontier = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(frontier[:])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
                x = frontier[offset + k + 1]
            else:
                x = frontier[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and before[x] == after[y]:
                x += 1
                y += 1
            frontier[offset + k] = x
            if x >= n and y >= m:
                return trace
    return trace


def _backtrack(before: Sequence[str], after: Sequence[str]) -> list[LineEdit]:
    trace = _shortest_edit_trace(before, after)
    offset = len(before) + len(after) + 1
    x = len(before)
    y = len(after)
    reversed_edits: list[LineEdit] = []

    for d in range(len(trace) - 1, -1, -1):
        frontier = trace[d]
        k = x - y
        if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
            previous_k = k + 1
        else:
            previous_k = k - 1
        previous_x = frontier[offset + previous_k]
        previous_y = previous_x - previous_k

        while x > previous_x and y > previous_y:
            reversed_edits.append(LineEdit("equal", before[x - 1]))
            x -= 1
            y -= 1

        if d > 0:
            if x == previous_x:
                reversed_edits.append(LineEdit("insert", after[y - 1]))
            else:
                reversed_edits.append(LineEdit("delete", before[x - 1]))

        x = previous_x
        y = previous_y

    reversed_edits.reverse()
    return reversed_edits


def _order_changes(edits: list[LineEdit]) -> list[LineEdit]:
    ordered: list[LineEdit] = []
    deletes: list[LineEdit] = []
    inserts: list[LineEdit] = []

    for edit in edits:
        if edit.kind == "equal":
            ordered.extend(deletes)
            ordered.extend(inserts)
            deletes.clear()
            inserts.clear()
            ordered.append(edit)
        elif edit.kind == "delete":
            deletes.append(edit)
        else:
            inserts.append(edit)

    ordered.extend(deletes)
    ordered.extend(inserts)
    return ordered
