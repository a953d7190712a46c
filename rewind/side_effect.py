"""SideEffect - one undoable sub-operation performed against an Encased resource."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from rewind.compensable import Compensable
from rewind.errors import AlreadyConsumedError

if TYPE_CHECKING:
    from rewind.encased import Encased


__all__ = (
    'SideEffect',
)


S = TypeVar('S')
T = TypeVar('T')
R = TypeVar('R')

logger = logging.getLogger(__name__)


class SideEffect(Compensable[T, R], Generic[S, T, R]):
    """Result of a sub-operation together with the action that reverses it.

    The compensation is called as ``compensate(resource, value)`` with the
    shared resource exclusively borrowed, so it mutates the resource in
    place instead of producing a replacement.

    Each SideEffect compensates only its own sub-operation. Undoing a later
    link never unwinds earlier ones; group links in a Stack for that.
    """

    def __init__(
            self,
            parent: 'Encased[S]',
            value: T,
            compensate: Callable[[S, T], R],
    ):
        """Initialize side effect.

        Usually created by Encased.perform() rather than directly. A side
        effect built here counts as pending on its parent until consumed.

        Args:
            parent: Handle of the resource the sub-operation mutated.
            value: The sub-operation's own result.
            compensate: Reverses the sub-operation given the resource and value.
        """
        self._parent: 'Encased[S]' = parent
        self._value: T | None = value
        self._compensate: Callable[[S, T], R] | None = compensate
        parent._enlist()

    @property
    def is_active(self) -> bool:
        return self._compensate is not None

    @property
    def value(self) -> T:
        """The sub-operation's result.

        Raises:
            AlreadyConsumedError: If the side effect has been consumed.
        """
        if not self.is_active:
            raise AlreadyConsumedError("SideEffect has already been consumed")
        return self._value

    @property
    def parent(self) -> 'Encased[S]':
        """Handle of the shared resource this side effect mutates on undo."""
        return self._parent

    def chain(
            self,
            action: Callable[[S], Any],
            compensate: Callable[[S, Any], Any],
    ) -> 'SideEffect[S, Any, Any]':
        """Perform the next sub-operation on the same resource.

        Equivalent to ``self.parent.perform(action, compensate)``.
        """
        return self._parent.perform(action, compensate)

    def undo(self) -> R:
        if not self.is_active:
            raise AlreadyConsumedError("SideEffect has already been consumed")
        with self._parent.borrow() as resource:
            value, compensate = self._take()
            logger.debug("Compensating side effect with %r", value)
            return compensate(resource, value)

    def cancel(self) -> T:
        value, _ = self._take()
        logger.debug("Side effect committed with %r", value)
        return value

    def _take(self) -> tuple[T, Callable[[S, T], R]]:
        if not self.is_active:
            raise AlreadyConsumedError("SideEffect has already been consumed")
        value, compensate = self._value, self._compensate
        self._value = None
        self._compensate = None
        self._parent._settle()
        return value, compensate

    def __repr__(self) -> str:
        if self.is_active:
            return "%s(%r)" % (type(self).__name__, self._value)
        return "%s(<consumed>)" % type(self).__name__
