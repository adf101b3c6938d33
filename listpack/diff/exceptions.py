"""Diff subsystem exceptions."""


class ListKitError(Exception):
    """Base class for ListKit errors."""


class SubrangeError(ListKitError, ValueError):
    """Subrange is not a valid step-1 range into the old sequence."""


class DiffApplicationError(ListKitError):
    """Diff result does not fit the sequence it is applied to."""
