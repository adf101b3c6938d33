"""Equality capabilities and canonical value helpers for ListKit."""

from listpack.core.canonical import canonical_json, canonicalize
from listpack.core.equality import (
    EQUALITY_NAMES,
    Equality,
    KeyedEquality,
    canonical_equality,
    default_equality,
    never_equal,
    resolve_equality,
)

__all__ = [
    "Equality",
    "KeyedEquality",
    "EQUALITY_NAMES",
    "default_equality",
    "never_equal",
    "canonical_equality",
    "resolve_equality",
    "canonicalize",
    "canonical_json",
]
