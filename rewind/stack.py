"""Stack - ordered group of compensable units unwound last-in, first-out."""

import logging
from typing import Any, Iterable

from rewind.compensable import Compensable
from rewind.errors import AlreadyConsumedError, CompensationError


__all__ = (
    'Stack',
)


logger = logging.getLogger(__name__)


class Stack(Compensable[list[Any], list[Any]]):
    """Composite of heterogeneous compensable units.

    Undoing, cancelling or abandoning the stack does the same to every
    member in reverse push order: the unit pushed last is compensated
    first, since it may rely on the state left by the ones before it.

    Example:
        with Stack() as stack:
            stack.push(reserve_car())
            stack.push(reserve_hotel())
            stack.push(reserve_flight())
            stack.cancel()  # commit all three
    """

    def __init__(self, units: Iterable[Compensable] | None = None):
        """Initialize stack.

        Args:
            units: Optional units to push, in order.
        """
        self._units: list[Compensable] | None = []

        if units:
            for unit in units:
                self.push(unit)

    @classmethod
    def chain(cls, first: Compensable, second: Compensable) -> 'Stack':
        """Build a two-element stack; second is undone before first."""
        return cls([first, second])

    @property
    def is_active(self) -> bool:
        return self._units is not None

    @property
    def units(self) -> tuple[Compensable, ...]:
        """Members in push order (for inspection/testing)."""
        return tuple(self._active_units())

    def push(self, unit: Compensable) -> 'Stack':
        """Append a unit; it will be unwound before everything pushed earlier.

        Raises:
            TypeError: If unit is not compensable.
            AlreadyConsumedError: If the stack has been consumed.
        """
        if not isinstance(unit, Compensable):
            raise TypeError("Expected a Compensable, got %r" % (unit,))
        self._active_units().append(unit)
        return self

    def pop(self) -> Compensable | None:
        """Remove the most recently pushed unit without firing it.

        The caller takes over responsibility for the returned unit.
        """
        units = self._active_units()
        return units.pop() if units else None

    def undo(self) -> list[Any]:
        """Undo every member in reverse push order.

        Every member is attempted even if one of them fails.

        Returns:
            The members' undo results, in unwind order.

        Raises:
            CompensationError: If any member compensation raised.
        """
        results: list[Any] = []
        errors: list[Exception] = []
        for unit in self._take():
            if not unit.is_active:
                logger.debug("Skipping already consumed %r", unit)
                continue
            try:
                results.append(unit.undo())
            except Exception as e:
                logger.warning("Compensation of %r failed: %s", unit, e)
                errors.append(e)
        if errors:
            raise CompensationError(errors, results) from errors[0]
        return results

    def cancel(self) -> list[Any]:
        """Commit every member in reverse push order.

        Returns:
            The members' cancellation payloads, in unwind order.
        """
        return [unit.cancel() for unit in self._take() if unit.is_active]

    def _take(self) -> list[Compensable]:
        units = self._active_units()
        self._units = None
        logger.debug("Unwinding stack of %d unit(s)", len(units))
        return units[::-1]

    def _active_units(self) -> list[Compensable]:
        if self._units is None:
            raise AlreadyConsumedError("Stack has already been consumed")
        return self._units

    def __iadd__(self, unit: Compensable) -> 'Stack':
        return self.push(unit)

    def __len__(self) -> int:
        return len(self._active_units())

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        if self.is_active:
            return "%s(%r)" % (type(self).__name__, self._units)
        return "%s(<consumed>)" % type(self).__name__
