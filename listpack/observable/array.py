"""Observable list that reports structural changes as bracketed transactions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
from typing import Any, Generic, TypeVar, overload

from listpack.core.equality import Equality, default_equality
from listpack.diff.engine import diff_sequences, normalize_subrange
from listpack.diff.models import DiffResult, IndexedElement
from listpack.observable.events import transaction_events
from listpack.observable.exceptions import TransactionError
from listpack.observable.slot import ChangeHandler, SubscriberDiagnostic, SubscriberSlot

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ObservableList(Sequence, Generic[T]):
    """An ordered, index-addressable list that notifies one subscriber of changes.

    Every notifying mutation delivers exactly one transaction:
    ``BeginUpdates``, then non-empty ``Moves``, ``Deletes`` and ``Inserts`` in
    that order, then ``EndUpdates``.

    Positional assignment (``lst[i] = value``) and ``set_silently`` are the
    exception: they write storage without diffing and without notifying.
    """

    __slots__ = ("_items", "_equals", "_slot", "_notifying")

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        equals: Equality = default_equality,
        subscriber: ChangeHandler | None = None,
    ) -> None:
        self._items: list[T] = list(items)
        self._equals = equals
        self._slot = SubscriberSlot(handler=subscriber)
        self._notifying = False

    @classmethod
    def of(cls, *elements: T, equals: Equality = default_equality) -> "ObservableList[T]":
        return cls(elements, equals=equals)

    # Subscription

    @property
    def subscriber(self) -> ChangeHandler | None:
        return self._slot.handler

    @property
    def equals(self) -> Equality:
        return self._equals

    @property
    def diagnostics(self) -> list[SubscriberDiagnostic]:
        return self._slot.diagnostics

    def subscribe(self, handler: ChangeHandler) -> None:
        """Set the change handler, replacing any previous one."""
        self._slot.set(handler)

    def unsubscribe(self) -> None:
        self._slot.clear()

    def clear_diagnostics(self) -> None:
        self._slot.clear_diagnostics()

    # Read access

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"

    def to_list(self) -> list[T]:
        return list(self._items)

    # Silent writes

    def __setitem__(self, index: int | slice, value: Any) -> None:
        if isinstance(index, slice):
            start, stop = _slice_bounds(index, len(self._items))
            self.replace_subrange(start, stop, value)
            return
        self._items[index] = value

    def set_silently(self, index: int, value: T) -> None:
        """Write ``value`` at ``index`` without diffing or notifying."""
        self._items[index] = value

    # Diffing mutations

    def replace(self, new_items: Iterable[T], *, perform_diff: bool = True) -> None:
        """Replace the whole content.

        With ``perform_diff=False`` storage is swapped and nothing is emitted.
        """
        replacement = list(new_items)
        if not perform_diff:
            self._items = replacement
            return

        self._check_not_notifying("replace")
        diff = diff_sequences(self._items, replacement, equals=self._equals)
        self._items = replacement
        self._notify("replace", diff)

    def replace_subrange(self, start: int, stop: int, new_elements: Iterable[T]) -> None:
        """Replace ``self[start:stop]`` with ``new_elements``, diffing only that range."""
        self._check_not_notifying("replace_subrange")
        start, stop = normalize_subrange((start, stop), len(self._items))
        replacement = list(new_elements)
        diff = diff_sequences(
            self._items,
            replacement,
            subrange=(start, stop),
            equals=self._equals,
        )
        self._items[start:stop] = replacement
        self._notify("replace_subrange", diff.rebased(start))

    def __delitem__(self, index: int | slice) -> None:
        if isinstance(index, slice):
            start, stop = _slice_bounds(index, len(self._items))
        else:
            start = _checked_index(index, len(self._items))
            stop = start + 1
        self.replace_subrange(start, stop, ())

    # Pure inserts and deletes

    def insert_contents(self, index: int, new_elements: Iterable[T]) -> None:
        """Insert ``new_elements`` before ``index`` and report them as inserts."""
        self._check_not_notifying("insert")
        if not 0 <= index <= len(self._items):
            raise IndexError(
                f"insert index {index} out of range for list of length {len(self._items)}"
            )
        inserted = list(new_elements)
        self._items[index:index] = inserted
        diff = DiffResult(
            inserts=[IndexedElement(index + offset, item) for offset, item in enumerate(inserted)]
        )
        self._notify("insert", diff)

    def extend(self, new_elements: Iterable[T]) -> None:
        self.insert_contents(len(self._items), new_elements)

    def append(self, element: T) -> None:
        self.extend((element,))

    def remove_all(self) -> None:
        """Remove every element and report each old index as deleted."""
        self._check_not_notifying("remove_all")
        removed = self._items
        self._items = []
        diff = DiffResult(deletes=[IndexedElement(index, item) for index, item in enumerate(removed)])
        self._notify("remove_all", diff)

    clear = remove_all

    def _check_not_notifying(self, operation: str) -> None:
        # Transactions never nest; a handler may not mutate the list it observes.
        if self._notifying:
            raise TransactionError(
                f"{operation} attempted while a transaction is being delivered."
            )

    def _notify(self, operation: str, diff: DiffResult) -> None:
        self._notifying = True
        try:
            delivered = self._slot.deliver(transaction_events(diff))
        finally:
            self._notifying = False
        _LOGGER.debug(
            "%s transaction length=%d delivered=%s %s",
            operation,
            len(self._items),
            delivered,
            diff.summary(),
        )


def _checked_index(index: int, length: int) -> int:
    resolved = index + length if index < 0 else index
    if not 0 <= resolved < length:
        raise IndexError(f"index {index} out of range for list of length {length}")
    return resolved


def _slice_bounds(index: slice, length: int) -> tuple[int, int]:
    start, stop, step = index.indices(length)
    if step != 1:
        raise ValueError("extended slices are not supported by ObservableList")
    return start, max(start, stop)
