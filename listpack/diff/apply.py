"""Apply edit scripts and verify that they reproduce the target sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from listpack.core.equality import Equality, default_equality
from listpack.diff.exceptions import DiffApplicationError
from listpack.diff.models import DiffResult

_EMPTY = object()


def apply_diff(old: Sequence[Any], result: DiffResult) -> list[Any]:
    """Apply a full-range edit script to ``old`` with batch-update semantics.

    Deletes and move sources address ``old``; inserts and move destinations
    address the returned list. Slots not claimed by a move or insert are filled,
    in order, by the old elements that were neither deleted nor moved.
    """
    old_count = len(old)
    new_count = old_count - len(result.deletes) + len(result.inserts)
    if new_count < 0:
        raise DiffApplicationError(
            f"Diff deletes {len(result.deletes)} elements from a sequence of length {old_count}."
        )

    consumed: set[int] = set()
    for item in result.deletes:
        _claim_source(item.index, old_count, consumed, label="delete")

    slots: list[Any] = [_EMPTY] * new_count
    for move in result.moves:
        _claim_source(move.old_index, old_count, consumed, label="move source")
        _fill_slot(slots, move.new_index, old[move.old_index], label="move destination")

    for item in result.inserts:
        _fill_slot(slots, item.index, item.element, label="insert")

    remaining = iter([old[index] for index in range(old_count) if index not in consumed])
    for position, value in enumerate(slots):
        if value is not _EMPTY:
            continue
        try:
            slots[position] = next(remaining)
        except StopIteration:
            raise DiffApplicationError(
                f"No retained element left to fill position {position}."
            ) from None

    if next(remaining, _EMPTY) is not _EMPTY:
        raise DiffApplicationError("Retained elements exceed the open positions of the result.")
    return slots


def _claim_source(index: int, old_count: int, consumed: set[int], *, label: str) -> None:
    if not 0 <= index < old_count:
        raise DiffApplicationError(
            f"{label} index {index} is out of range for sequence of length {old_count}."
        )
    if index in consumed:
        raise DiffApplicationError(f"{label} index {index} is referenced more than once.")
    consumed.add(index)


def _fill_slot(slots: list[Any], index: int, value: Any, *, label: str) -> None:
    if not 0 <= index < len(slots):
        raise DiffApplicationError(
            f"{label} index {index} is out of range for result of length {len(slots)}."
        )
    if slots[index] is not _EMPTY:
        raise DiffApplicationError(f"{label} index {index} collides with another operation.")
    slots[index] = value


@dataclass(slots=True)
class DiffVerification:
    """Outcome of replaying an edit script against its source sequence."""

    diff: DiffResult
    passed: bool
    mismatch_index: int | None = None
    error: str | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.passed else "fail",
            "exit_code": self.exit_code,
            "summary": self.diff.summary(),
            "mismatch_index": self.mismatch_index,
            "error": self.error,
        }


def verify_diff(
    old: Sequence[Any],
    new: Sequence[Any],
    result: DiffResult,
    *,
    equals: Equality = default_equality,
) -> DiffVerification:
    """Check that applying ``result`` to ``old`` yields ``new``."""
    try:
        applied = apply_diff(old, result)
    except DiffApplicationError as error:
        return DiffVerification(diff=result, passed=False, error=str(error))

    for index in range(max(len(applied), len(new))):
        if index >= len(applied) or index >= len(new):
            return DiffVerification(
                diff=result,
                passed=False,
                mismatch_index=index,
                error=f"length mismatch: applied={len(applied)} expected={len(new)}",
            )
        if not equals(applied[index], new[index]):
            return DiffVerification(diff=result, passed=False, mismatch_index=index)

    return DiffVerification(diff=result, passed=True)
