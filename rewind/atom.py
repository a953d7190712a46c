"""Atom - a value carried together with the action that compensates it."""

import logging
from typing import Callable, TypeVar

from rewind.compensable import Compensable
from rewind.errors import AlreadyConsumedError


__all__ = (
    'Atom',
)


T = TypeVar('T')
R = TypeVar('R')

logger = logging.getLogger(__name__)


class Atom(Compensable[T, R]):
    """A value paired with a one-shot compensating action.

    The compensation receives the value and fires at most once: either on
    undo(), or when the atom is abandoned by leaving its ``with`` block.
    cancel() commits the atom, handing the value back untouched.

    Example:
        journal = []
        with Atom("row-1", journal.append) as atom:
            do_something_that_may_fail()
            atom.cancel()
        # journal == ["row-1"] only if do_something_that_may_fail() raised
    """

    def __init__(self, value: T, compensate: Callable[[T], R]):
        """Initialize atom.

        Args:
            value: The value handed to the compensation (or back by cancel()).
            compensate: Action reversing whatever produced the value.
        """
        self._value: T | None = value
        self._compensate: Callable[[T], R] | None = compensate

    @property
    def is_active(self) -> bool:
        return self._compensate is not None

    @property
    def value(self) -> T:
        """The carried value.

        Raises:
            AlreadyConsumedError: If the atom has been consumed.
        """
        if not self.is_active:
            raise AlreadyConsumedError("Atom has already been consumed")
        return self._value

    def undo(self) -> R:
        value, compensate = self._take()
        logger.debug("Compensating atom with %r", value)
        return compensate(value)

    def cancel(self) -> T:
        value, _ = self._take()
        logger.debug("Atom committed with %r", value)
        return value

    def _take(self) -> tuple[T, Callable[[T], R]]:
        """Empty both slots so the compensation cannot fire twice."""
        if not self.is_active:
            raise AlreadyConsumedError("Atom has already been consumed")
        value, compensate = self._value, self._compensate
        self._value = None
        self._compensate = None
        return value, compensate

    def __repr__(self) -> str:
        if self.is_active:
            return "%s(%r)" % (type(self).__name__, self._value)
        return "%s(<consumed>)" % type(self).__name__
