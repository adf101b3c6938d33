"""CLI-friendly rendering for diff results."""

from __future__ import annotations

from listpack.diff.models import DiffResult


def render_diff_summary(diff: DiffResult) -> str:
    summary = diff.summary()
    return (
        f"inserts={summary['inserts']} deletes={summary['deletes']} "
        f"moves={summary['moves']}"
    )


def render_edit_script(diff: DiffResult, *, max_operations: int = 20) -> str:
    if diff.is_empty:
        return "no changes"

    lines: list[str] = []
    for move in diff.moves:
        lines.append(f"~ [{move.old_index}] -> [{move.new_index}]")
    for item in diff.deletes:
        lines.append(f"- [{item.index}] {item.element!r}")
    for item in diff.inserts:
        lines.append(f"+ [{item.index}] {item.element!r}")

    limit = max(1, max_operations)
    if len(lines) <= limit:
        return "\n".join(lines)

    omitted = len(lines) - limit
    return "\n".join(lines[:limit] + [f"... {omitted} additional operations omitted"])
