"""Diff subsystem for assertkit."""

from assertpack.diff.engine import diff, diff_lines, diff_text, render_documents, unified_diff
from assertpack.diff.formatting import format_unified, to_unified
from assertpack.diff.models import EditBlock, Hunk, LineEdit, UnifiedDiff
from assertpack.diff.myers import compute_edits
from assertpack.diff.needle import NeedlePosition, needle_position, quote_text

__all__ = [
    "LineEdit",
    "EditBlock",
    "Hunk",
    "UnifiedDiff",
    "compute_edits",
    "to_unified",
    "format_unified",
    "diff",
    "diff_lines",
    "diff_text",
    "render_documents",
    "unified_diff",
    "NeedlePosition",
    "needle_position",
    "quote_text",
]
