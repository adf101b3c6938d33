"""Stable public API surface for ListKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from listpack.core.equality import (
    Equality,
    KeyedEquality,
    canonical_equality,
    default_equality,
    never_equal,
)
from listpack.diff import (
    DiffResult,
    IndexedElement,
    Move,
    apply_diff,
    diff_sequences,
)
from listpack.diff.engine import Subrange
from listpack.observable import (
    BeginUpdates,
    ChangeEvent,
    ChangeHandler,
    Deletes,
    EndUpdates,
    Inserts,
    ListMirror,
    Moves,
    ObservableList,
    Updates,
)

__version__ = "0.1.0"


def diff(
    old: Sequence[Any],
    new: Iterable[Any],
    *,
    subrange: Subrange | None = None,
    equals: Equality = default_equality,
) -> DiffResult:
    """Compute the edit script from ``old`` (or ``old[subrange]``) to ``new``.

    Indices are relative to the subrange start; see ``DiffResult.rebased``.
    """
    return diff_sequences(old, new, subrange=subrange, equals=equals)


def observe(
    items: Iterable[Any] = (),
    *,
    subscriber: ChangeHandler | None = None,
    equals: Equality = default_equality,
) -> ObservableList[Any]:
    """Create an ``ObservableList`` with an optional subscriber already attached."""
    return ObservableList(items, equals=equals, subscriber=subscriber)


__all__ = [
    "__version__",
    "Equality",
    "KeyedEquality",
    "default_equality",
    "never_equal",
    "canonical_equality",
    "IndexedElement",
    "Move",
    "DiffResult",
    "ChangeEvent",
    "BeginUpdates",
    "Moves",
    "Deletes",
    "Inserts",
    "Updates",
    "EndUpdates",
    "ObservableList",
    "ListMirror",
    "diff",
    "apply_diff",
    "observe",
]
