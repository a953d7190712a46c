"""Owning atom - keeps a live, mutable copy apart from the compensation snapshot."""

import copy
import logging
from typing import Callable, TypeVar

from rewind.atom import Atom
from rewind.compensable import Compensable
from rewind.errors import AlreadyConsumedError


__all__ = (
    'Owning',
)


T = TypeVar('T')

logger = logging.getLogger(__name__)


class Owning(Compensable[T, T]):
    """Atom variant that owns the value it protects.

    At creation the value is copied once: the copy is the snapshot held for
    compensation, the original becomes the live copy that the caller keeps
    mutating through ``value``. Mutations never reach the snapshot.

    - undo() fires the compensation with the snapshot and returns its result
    - cancel() discards the compensation and returns the untouched snapshot
    - into_inner() discards the compensation and returns the live copy
    """

    def __init__(
            self,
            value: T,
            compensate: Callable[[T], T],
            copier: Callable[[T], T] = copy.deepcopy,
    ):
        """Initialize owning atom.

        Args:
            value: The value to protect; it becomes the live copy.
            compensate: Maps the snapshot to the value restored on undo.
            copier: Produces the independent snapshot (deep copy by default).
        """
        self._atom: Atom[T, T] = Atom(copier(value), compensate)
        self._live: T | None = value

    @property
    def is_active(self) -> bool:
        return self._atom.is_active

    @property
    def value(self) -> T:
        """The live copy, free to mutate or replace while the atom is active."""
        self._check_active()
        return self._live

    @value.setter
    def value(self, value: T) -> None:
        self._check_active()
        self._live = value

    def get(self) -> T:
        return self.value

    @property
    def snapshot(self) -> T:
        """The copy taken at creation, as it will be handed to the compensation."""
        return self._atom.value

    def undo(self) -> T:
        result = self._atom.undo()
        self._live = None
        return result

    def cancel(self) -> T:
        self._live = None
        return self._atom.cancel()

    def into_inner(self) -> T:
        """Commit and return the live, possibly mutated, copy.

        Raises:
            AlreadyConsumedError: If the atom has been consumed.
        """
        self._atom.cancel()
        live, self._live = self._live, None
        logger.debug("Owning atom released live value %r", live)
        return live

    def _check_active(self) -> None:
        if not self.is_active:
            raise AlreadyConsumedError("Owning atom has already been consumed")

    def __repr__(self) -> str:
        if self.is_active:
            return "%s(%r)" % (type(self).__name__, self._live)
        return "%s(<consumed>)" % type(self).__name__
