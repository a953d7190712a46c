"""Abstract Compensable - base class for every unit carrying a compensation."""

import logging
from abc import ABCMeta, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from rewind.stack import Stack


__all__ = (
    'Compensable',
)


T = TypeVar('T')
R = TypeVar('R')

logger = logging.getLogger(__name__)


class Compensable(Generic[T, R], metaclass=ABCMeta):
    """Abstract base class for compensable units.

    A unit is Active until exactly one of the following happens:
    - undo(): the compensation fires, its result R is returned
    - cancel(): the compensation is discarded, the payload T is returned
    - abandon(): the compensation fires, its result is discarded

    Abandonment is bound to the context-manager protocol, so a unit used
    as ``with unit: ...`` is compensated on every exit path unless it was
    committed (cancelled) inside the block.
    """

    @abstractmethod
    def undo(self) -> R:
        """Fire the compensation and return its result.

        Raises:
            AlreadyConsumedError: If the unit is no longer active.
        """
        ...

    @abstractmethod
    def cancel(self) -> T:
        """Commit: discard the compensation without running it.

        Raises:
            AlreadyConsumedError: If the unit is no longer active.
        """
        ...

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True until the unit has been undone, cancelled or abandoned."""
        ...

    def decay(self) -> T:
        """Alias of cancel()."""
        return self.cancel()

    def abandon(self) -> None:
        """Undo the unit if it is still active, discarding the result."""
        if self.is_active:
            logger.debug("Abandoning %r", self)
            self.undo()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.abandon()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.abandon()

    def __add__(self, other: 'Compensable') -> 'Stack':
        from rewind.stack import Stack
        return Stack.chain(self, other)
