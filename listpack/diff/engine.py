"""LCS-based sequence diff engine with move detection."""

from __future__ import annotations

from collections import defaultdict, deque
import logging
from typing import Any, Hashable, Iterable, Sequence

from listpack.core.equality import Equality, KeyedEquality, default_equality
from listpack.diff.exceptions import SubrangeError
from listpack.diff.models import DiffResult, IndexedElement, Move

_LOGGER = logging.getLogger(__name__)

Subrange = range | tuple[int, int]


def diff_sequences(
    old: Sequence[Any],
    new: Iterable[Any],
    *,
    subrange: Subrange | None = None,
    equals: Equality = default_equality,
) -> DiffResult:
    """Compute the edit script turning ``old[subrange]`` into ``new``.

    ``new`` is the full replacement for the subrange. Indices in the result are
    local: old indices are offsets from the subrange start and new indices are
    positions in ``new``. Use ``DiffResult.rebased`` to shift them.
    """
    start, stop = normalize_subrange(subrange, len(old))
    old_items = [old[index] for index in range(start, stop)]
    new_items = list(new)

    result = _diff_items(old_items, new_items, equals)

    _LOGGER.debug(
        "diff old=%d new=%d subrange=[%d, %d) -> %s",
        len(old),
        len(new_items),
        start,
        stop,
        result.summary(),
    )
    return result


def normalize_subrange(subrange: Subrange | None, length: int) -> tuple[int, int]:
    """Validate a subrange against a sequence length and return ``(start, stop)``."""
    if subrange is None:
        return 0, length

    if isinstance(subrange, range):
        if subrange.step != 1:
            raise SubrangeError(f"Subrange step must be 1, got {subrange.step}.")
        start, stop = subrange.start, subrange.stop
    else:
        try:
            start, stop = subrange
        except (TypeError, ValueError) as error:
            raise SubrangeError(f"Subrange must be a range or (start, stop): {subrange!r}") from error

    if not isinstance(start, int) or not isinstance(stop, int):
        raise SubrangeError(f"Subrange bounds must be integers: {subrange!r}")
    if not 0 <= start <= stop <= length:
        raise SubrangeError(
            f"Subrange [{start}, {stop}) is out of bounds for sequence of length {length}."
        )
    return start, stop


def _diff_items(old: list[Any], new: list[Any], equals: Equality) -> DiffResult:
    if not old:
        return DiffResult(inserts=[IndexedElement(index, item) for index, item in enumerate(new)])
    if not new:
        return DiffResult(deletes=[IndexedElement(index, item) for index, item in enumerate(old)])

    kept = _common_subsequence(old, new, equals)
    kept_old = {old_index for old_index, _ in kept}
    kept_new = {new_index for _, new_index in kept}

    moves = _pair_moves(
        old,
        new,
        [index for index in range(len(old)) if index not in kept_old],
        [index for index in range(len(new)) if index not in kept_new],
        equals,
    )
    moved_old = {move.old_index for move in moves}
    moved_new = {move.new_index for move in moves}

    deletes = [
        IndexedElement(index, item)
        for index, item in enumerate(old)
        if index not in kept_old and index not in moved_old
    ]
    inserts = [
        IndexedElement(index, item)
        for index, item in enumerate(new)
        if index not in kept_new and index not in moved_new
    ]
    return DiffResult(inserts=inserts, deletes=deletes, moves=moves)


def _common_subsequence(old: list[Any], new: list[Any], equals: Equality) -> list[tuple[int, int]]:
    """Return LCS pairs, preferring the earliest old then earliest new index on ties."""
    limit = min(len(old), len(new))
    prefix = 0
    while prefix < limit and equals(old[prefix], new[prefix]):
        prefix += 1
    pairs = [(index, index) for index in range(prefix)]

    rest_old = old[prefix:]
    rest_new = new[prefix:]
    rows = len(rest_old)
    cols = len(rest_new)
    if rows == 0 or cols == 0:
        return pairs

    matches = [[bool(equals(left, right)) for right in rest_new] for left in rest_old]

    # lengths[i][j] is the LCS length of rest_old[i:] and rest_new[j:].
    lengths = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row = lengths[i]
        below = lengths[i + 1]
        match_row = matches[i]
        for j in range(cols - 1, -1, -1):
            if match_row[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    i = j = 0
    while i < rows and j < cols:
        if matches[i][j]:
            pairs.append((prefix + i, prefix + j))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _pair_moves(
    old: list[Any],
    new: list[Any],
    unmatched_old: list[int],
    unmatched_new: list[int],
    equals: Equality,
) -> list[Move]:
    """Pair leftover old positions with the earliest equal leftover new position."""
    if not unmatched_old or not unmatched_new:
        return []

    moves: list[Move] = []
    if isinstance(equals, KeyedEquality):
        buckets: defaultdict[Hashable, deque[int]] = defaultdict(deque)
        for new_index in unmatched_new:
            buckets[equals.key(new[new_index])].append(new_index)
        for old_index in unmatched_old:
            candidates = buckets.get(equals.key(old[old_index]))
            if candidates:
                moves.append(Move(old_index, candidates.popleft()))
        return moves

    available = list(unmatched_new)
    for old_index in unmatched_old:
        for position, new_index in enumerate(available):
            if equals(old[old_index], new[new_index]):
                moves.append(Move(old_index, new_index))
                del available[position]
                break
    return moves
