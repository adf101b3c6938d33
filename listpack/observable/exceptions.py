"""Observable subsystem exceptions."""

from listpack.diff.exceptions import ListKitError


class TransactionError(ListKitError):
    """Change events arrived outside a begin/end bracket or nested inside one."""
