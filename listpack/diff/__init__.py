"""Diff subsystem for ListKit."""

from listpack.diff.apply import DiffVerification, apply_diff, verify_diff
from listpack.diff.engine import diff_sequences, normalize_subrange
from listpack.diff.exceptions import DiffApplicationError, ListKitError, SubrangeError
from listpack.diff.formatting import render_diff_summary, render_edit_script
from listpack.diff.models import DiffResult, IndexedElement, Move

__all__ = [
    "ListKitError",
    "SubrangeError",
    "DiffApplicationError",
    "IndexedElement",
    "Move",
    "DiffResult",
    "diff_sequences",
    "normalize_subrange",
    "apply_diff",
    "verify_diff",
    "DiffVerification",
    "render_diff_summary",
    "render_edit_script",
]
