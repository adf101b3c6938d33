"""Consumer-side mirror that replays change transactions onto its own list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from listpack.diff.apply import apply_diff
from listpack.diff.models import DiffResult, IndexedElement
from listpack.observable.array import ObservableList
from listpack.observable.events import (
    BeginUpdates,
    ChangeEvent,
    Deletes,
    EndUpdates,
    Inserts,
    Moves,
    Updates,
)
from listpack.observable.exceptions import TransactionError


@dataclass(slots=True)
class ListMirror:
    """Keeps ``items`` in sync with an observed list.

    Body events are buffered and applied together when ``EndUpdates`` arrives,
    the way a list view applies a batch update.
    """

    items: list[Any] = field(default_factory=list)
    transactions: int = 0
    _pending: DiffResult | None = field(default=None, init=False, repr=False)

    @classmethod
    def attach(cls, observable: ObservableList[Any]) -> "ListMirror":
        """Create a mirror seeded with the current content and subscribe it."""
        mirror = cls(items=observable.to_list())
        observable.subscribe(mirror)
        return mirror

    @property
    def in_transaction(self) -> bool:
        return self._pending is not None

    def __call__(self, event: ChangeEvent) -> None:
        if isinstance(event, BeginUpdates):
            if self._pending is not None:
                raise TransactionError("BeginUpdates received inside an open transaction.")
            self._pending = DiffResult()
            return

        pending = self._pending
        if pending is None:
            raise TransactionError(f"{event.kind} received outside a transaction.")

        if isinstance(event, Moves):
            pending.moves.extend(event.moves)
        elif isinstance(event, Deletes):
            pending.deletes.extend(
                IndexedElement(index, element)
                for index, element in zip(event.indices, event.elements)
            )
        elif isinstance(event, Inserts):
            pending.inserts.extend(
                IndexedElement(index, element)
                for index, element in zip(event.indices, event.elements)
            )
        elif isinstance(event, Updates):
            pending.updates.extend(event.indices)
        elif isinstance(event, EndUpdates):
            self._pending = None
            self.items = apply_diff(self.items, pending)
            self.transactions += 1
        else:
            raise TransactionError(f"Unsupported change event: {event!r}")
