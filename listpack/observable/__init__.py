"""Observable list subsystem for ListKit."""

from listpack.observable.array import ObservableList
from listpack.observable.events import (
    BeginUpdates,
    ChangeEvent,
    ChangeKind,
    Deletes,
    EndUpdates,
    Inserts,
    Moves,
    Updates,
    transaction_events,
)
from listpack.observable.exceptions import TransactionError
from listpack.observable.mirror import ListMirror
from listpack.observable.slot import ChangeHandler, SubscriberDiagnostic, SubscriberSlot

__all__ = [
    "ObservableList",
    "ListMirror",
    "ChangeEvent",
    "ChangeKind",
    "ChangeHandler",
    "BeginUpdates",
    "Moves",
    "Deletes",
    "Inserts",
    "Updates",
    "EndUpdates",
    "transaction_events",
    "SubscriberSlot",
    "SubscriberDiagnostic",
    "TransactionError",
]
