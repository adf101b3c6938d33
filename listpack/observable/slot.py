"""Single-subscriber slot with fault-isolated event delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Iterable
import warnings

from listpack.observable.events import ChangeEvent

_LOGGER = logging.getLogger(__name__)

ChangeHandler = Callable[[ChangeEvent], None]


@dataclass(frozen=True, slots=True)
class SubscriberDiagnostic:
    subscriber_name: str
    event_kind: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "subscriber_name": self.subscriber_name,
            "event_kind": self.event_kind,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class SubscriberSlot:
    """Holds at most one change handler.

    A handler failure is recorded and warned about, and delivery continues with
    the next event so the transaction always reaches its end marker. This
    includes ``ListKitError`` subclasses such as the ``TransactionError`` a
    desynchronized ``ListMirror`` raises; they surface as diagnostics.
    """

    handler: ChangeHandler | None = None
    diagnostics: list[SubscriberDiagnostic] = field(default_factory=list)

    def set(self, handler: ChangeHandler | None) -> None:
        self.handler = handler

    def clear(self) -> None:
        self.handler = None

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def deliver(self, events: Iterable[ChangeEvent]) -> bool:
        handler = self.handler
        if handler is None:
            return False
        for event in events:
            self._dispatch(handler, event)
        return True

    def _dispatch(self, handler: ChangeHandler, event: ChangeEvent) -> None:
        try:
            handler(event)
        except Exception as error:
            diagnostic = SubscriberDiagnostic(
                subscriber_name=_handler_name(handler),
                event_kind=event.kind,
                error_type=error.__class__.__name__,
                message=str(error),
            )
            self.diagnostics.append(diagnostic)
            _LOGGER.debug("subscriber failed on %s", event.kind, exc_info=error)
            warnings.warn(
                (
                    f"ListKit subscriber failure: subscriber={diagnostic.subscriber_name} "
                    f"event={diagnostic.event_kind} "
                    f"error={diagnostic.error_type}: {diagnostic.message}"
                ),
                RuntimeWarning,
                stacklevel=3,
            )


def _handler_name(handler: ChangeHandler) -> str:
    name = getattr(handler, "__qualname__", None) or handler.__class__.__name__
    return str(name)
