"""Errors raised when a compensable unit is used against its lifecycle."""

from typing import Any


__all__ = (
    'InvalidOperationError',
    'AlreadyConsumedError',
    'BorrowError',
    'CompensationError',
)


class InvalidOperationError(Exception):
    """Raised when an operation is invalid for the current state."""
    pass


class AlreadyConsumedError(InvalidOperationError):
    """Raised when undo/cancel is requested on a unit that has already fired or been cancelled."""
    pass


class BorrowError(InvalidOperationError):
    """Raised when a shared resource is accessed while it is exclusively borrowed.

    Signals a re-entrant sub-operation, i.e. a broken invariant in caller
    logic. It is not meant to be caught and retried.
    """
    pass


class CompensationError(Exception):
    """Raised by Stack.undo() when one or more members failed to compensate.

    Every member is attempted before this is raised.
    """

    def __init__(self, errors: list[Exception], results: list[Any]):
        """Initialize compensation error.

        Args:
            errors: Exceptions raised by member compensations, in unwind order.
            results: Results of the members that compensated successfully.
        """
        super().__init__("%d compensation(s) failed: %s" % (len(errors), "; ".join(map(repr, errors))))
        self.errors: list[Exception] = errors
        self.results: list[Any] = results
