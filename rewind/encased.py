"""Encased - shared handle granting checked, exclusive access to one resource."""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, TypeVar

from rewind.errors import BorrowError
from rewind.side_effect import SideEffect


__all__ = (
    'Encased',
)


S = TypeVar('S')

logger = logging.getLogger(__name__)


class _Cell(Generic[S]):
    """State shared by every handle of one resource."""

    def __init__(self, resource: S, strict: bool):
        self.resource: S = resource
        self.strict: bool = strict
        self.borrowed: bool = False
        self.pending: int = 0


class Encased(Generic[S]):
    """Attachment point for a sequence of compensable sub-operations.

    Handles are cheap: share() returns another handle on the same resource,
    never a copy of it. The resource is borrowed exclusively while a
    sub-operation, a compensation or a borrow() block runs; touching it
    again from inside that window raises BorrowError.

    In strict mode a new sub-operation is also refused while any
    SideEffect of the resource is still pending, so each one must be
    committed or undone before the next begins.

    Example:
        items = Encased([1, 2, 3])
        with items.perform(lambda i: i.pop(), lambda i, v: i.append(v)) as popped:
            assert popped.value == 3
        # items.value == [1, 2, 3]
    """

    def __init__(self, resource: S, strict: bool = False):
        """Initialize encased resource.

        Args:
            resource: The long-lived object sub-operations will mutate.
            strict: Allow at most one pending SideEffect at a time.
        """
        self._cell: _Cell[S] = _Cell(resource, strict)

    @classmethod
    def _from_cell(cls, cell: _Cell[S]) -> 'Encased[S]':
        handle = cls.__new__(cls)
        handle._cell = cell
        return handle

    def share(self) -> 'Encased[S]':
        """Return another handle on the same resource."""
        return self._from_cell(self._cell)

    @property
    def value(self) -> S:
        """The resource itself.

        Raises:
            BorrowError: If the resource is currently borrowed.
        """
        if self._cell.borrowed:
            raise BorrowError("Resource is borrowed by a running sub-operation")
        return self._cell.resource

    @property
    def strict(self) -> bool:
        return self._cell.strict

    @property
    def is_borrowed(self) -> bool:
        """True while an action, compensation or borrow() block is running."""
        return self._cell.borrowed

    @property
    def pending(self) -> int:
        """Number of SideEffects of this resource that are still active."""
        return self._cell.pending

    @contextmanager
    def borrow(self) -> Iterator[S]:
        """Exclusively borrow the resource for the duration of the block.

        Raises:
            BorrowError: If the resource is already borrowed.
        """
        cell = self._cell
        if cell.borrowed:
            raise BorrowError("Resource is already borrowed")
        cell.borrowed = True
        logger.debug("Borrowed %r", cell.resource)
        try:
            yield cell.resource
        finally:
            cell.borrowed = False
            logger.debug("Released %r", cell.resource)

    def perform(
            self,
            action: Callable[[S], Any],
            compensate: Callable[[S, Any], Any],
    ) -> SideEffect[S, Any, Any]:
        """Run a sub-operation on the resource and return it as a SideEffect.

        Args:
            action: Mutates the resource; its return value becomes the
                SideEffect's value.
            compensate: Called as ``compensate(resource, value)`` to reverse
                the sub-operation.

        Returns:
            An active SideEffect. If action raises, nothing is created and
            the error propagates.

        Raises:
            BorrowError: If called from inside another sub-operation on the
                same resource, or, in strict mode, while a SideEffect is
                still pending.
        """
        cell = self._cell
        if cell.strict and cell.pending:
            raise BorrowError(
                "%d side effect(s) still pending; commit or undo them before the next sub-operation" % cell.pending
            )
        with self.borrow() as resource:
            value = action(resource)
        return SideEffect(self, value, compensate)

    def _enlist(self) -> None:
        """Called by every SideEffect of this resource when it is created."""
        self._cell.pending += 1
        logger.debug("Sub-operation recorded, %d pending", self._cell.pending)

    def _settle(self) -> None:
        """Called by a SideEffect of this resource once it is consumed."""
        self._cell.pending -= 1

    def __repr__(self) -> str:
        return "%s(%r)" % (type(self).__name__, self._cell.resource)
