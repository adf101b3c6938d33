"""Explicit equality capabilities used to match elements across sequences."""

from __future__ import annotations

from dataclasses import dataclass
import operator
from typing import Any, Callable, Hashable

from listpack.core.canonical import canonical_json

Equality = Callable[[Any, Any], bool]

default_equality: Equality = operator.eq


def never_equal(left: Any, right: Any) -> bool:
    """Treat every pair as distinct.

    Diffs computed with this predicate degrade to delete-all + insert-all.
    """
    return False


@dataclass(frozen=True, slots=True)
class KeyedEquality:
    """Equality by a hashable key.

    The diff engine buckets candidates by ``key`` when it sees this type, so
    move pairing runs in linear time.
    """

    key: Callable[[Any], Hashable]

    def __call__(self, left: Any, right: Any) -> bool:
        return self.key(left) == self.key(right)


canonical_equality = KeyedEquality(key=canonical_json)

_NAMED_EQUALITIES: dict[str, Equality] = {
    "eq": default_equality,
    "canonical": canonical_equality,
    "never": never_equal,
}

EQUALITY_NAMES: tuple[str, ...] = tuple(_NAMED_EQUALITIES)


def resolve_equality(name: str) -> Equality:
    normalized = name.strip().lower()
    try:
        return _NAMED_EQUALITIES[normalized]
    except KeyError:
        raise ValueError(
            f"Unsupported equality {name!r}; expected one of: {', '.join(EQUALITY_NAMES)}"
        ) from None
