"""Change events delivered to list subscribers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

from listpack.diff.models import DiffResult, Move

ChangeKind = Literal["begin_updates", "moves", "deletes", "inserts", "updates", "end_updates"]


@dataclass(frozen=True, slots=True)
class BeginUpdates:
    kind: ClassVar[ChangeKind] = "begin_updates"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True, slots=True)
class Moves:
    moves: tuple[Move, ...]
    kind: ClassVar[ChangeKind] = "moves"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "moves": [move.to_dict() for move in self.moves]}


@dataclass(frozen=True, slots=True)
class Deletes:
    indices: tuple[int, ...]
    elements: tuple[Any, ...]
    kind: ClassVar[ChangeKind] = "deletes"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "indices": list(self.indices), "elements": list(self.elements)}


@dataclass(frozen=True, slots=True)
class Inserts:
    indices: tuple[int, ...]
    elements: tuple[Any, ...]
    kind: ClassVar[ChangeKind] = "inserts"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "indices": list(self.indices), "elements": list(self.elements)}


@dataclass(frozen=True, slots=True)
class Updates:
    """Reserved for content-level changes; never emitted by ``ObservableList``."""

    indices: tuple[int, ...]
    kind: ClassVar[ChangeKind] = "updates"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "indices": list(self.indices)}


@dataclass(frozen=True, slots=True)
class EndUpdates:
    kind: ClassVar[ChangeKind] = "end_updates"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


ChangeEvent = Union[BeginUpdates, Moves, Deletes, Inserts, Updates, EndUpdates]


def transaction_events(diff: DiffResult) -> list[ChangeEvent]:
    """Build one bracketed transaction: moves, then deletes, then inserts.

    Empty body events are left out; the begin/end markers are always present.
    """
    events: list[ChangeEvent] = [BeginUpdates()]
    if diff.moves:
        events.append(Moves(moves=tuple(diff.moves)))
    if diff.deletes:
        events.append(
            Deletes(indices=tuple(diff.delete_indices), elements=tuple(diff.delete_elements))
        )
    if diff.inserts:
        events.append(
            Inserts(indices=tuple(diff.insert_indices), elements=tuple(diff.insert_elements))
        )
    events.append(EndUpdates())
    return events
