"""Data models for sequence edit scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class IndexedElement:
    """An element tagged with its position in the old or new sequence."""

    index: int
    element: Any

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "element": self.element}


@dataclass(frozen=True, slots=True)
class Move:
    """A matched element whose order relative to other matches changed."""

    old_index: int
    new_index: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.old_index, self.new_index)

    def to_dict(self) -> dict[str, int]:
        return {"old_index": self.old_index, "new_index": self.new_index}


@dataclass(slots=True)
class DiffResult:
    """Edit script between an old and a new sequence.

    Delete indices and move sources refer to the old sequence. Insert indices
    and move destinations refer to the new sequence. ``updates`` is reserved
    for content-level changes and is never populated by the engine.
    """

    inserts: list[IndexedElement] = field(default_factory=list)
    deletes: list[IndexedElement] = field(default_factory=list)
    moves: list[Move] = field(default_factory=list)
    updates: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.inserts or self.deletes or self.moves or self.updates)

    @property
    def insert_indices(self) -> list[int]:
        return [item.index for item in self.inserts]

    @property
    def insert_elements(self) -> list[Any]:
        return [item.element for item in self.inserts]

    @property
    def delete_indices(self) -> list[int]:
        return [item.index for item in self.deletes]

    @property
    def delete_elements(self) -> list[Any]:
        return [item.element for item in self.deletes]

    @property
    def move_pairs(self) -> list[tuple[int, int]]:
        return [move.as_tuple() for move in self.moves]

    def rebased(self, offset: int) -> "DiffResult":
        """Return a copy with every old and new index shifted by ``offset``."""
        if offset == 0:
            return DiffResult(
                inserts=list(self.inserts),
                deletes=list(self.deletes),
                moves=list(self.moves),
                updates=list(self.updates),
            )
        return DiffResult(
            inserts=[IndexedElement(item.index + offset, item.element) for item in self.inserts],
            deletes=[IndexedElement(item.index + offset, item.element) for item in self.deletes],
            moves=[Move(move.old_index + offset, move.new_index + offset) for move in self.moves],
            updates=[index + offset for index in self.updates],
        )

    def summary(self) -> dict[str, int]:
        return {
            "inserts": len(self.inserts),
            "deletes": len(self.deletes),
            "moves": len(self.moves),
            "updates": len(self.updates),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "empty": self.is_empty,
            "summary": self.summary(),
            "inserts": [item.to_dict() for item in self.inserts],
            "deletes": [item.to_dict() for item in self.deletes],
            "moves": [move.to_dict() for move in self.moves],
            "updates": list(self.updates),
        }
