"""Compensating actions: values and sub-operations that undo themselves.

An operation that mutates a value or a shared resource is paired, when it
is created, with the action that reverses it. The reversal fires when the
unit is abandoned (its ``with`` block exits) without being committed, so
compensation happens on every exit path: normal return, early return or
exception.

Key Components:
- Atom: a value plus its compensation (see simple())
- Owning: an Atom that keeps a mutable live copy apart from its snapshot (see own())
- Encased: shared handle to a long-lived resource (see encase())
- SideEffect: one undoable sub-operation performed through an Encased
- Stack: group of units unwound in reverse push order (see chain())
- isomorphic: decorator pairing a mutating method with its inverse

Every unit supports:
- undo(): fire the compensation, return its result
- cancel() / decay(): commit, return the payload without compensating
- abandon() / leaving ``with``: undo unless already consumed

Example:
    import rewind

    def take_two(items: rewind.Encased[list]) -> None:
        with rewind.chain(
            items.perform(lambda i: i.pop(), lambda i, v: i.append(v)),
            items.perform(lambda i: i.pop(), lambda i, v: i.append(v)),
        ) as stack:
            check_stock()  # if this raises, both pops are pushed back
            stack.cancel()
"""

from typing import Callable, TypeVar

from rewind.atom import Atom
from rewind.compensable import Compensable
from rewind.encased import Encased
from rewind.errors import (
    AlreadyConsumedError, BorrowError, CompensationError, InvalidOperationError
)
from rewind.isomorphic import IsomorphicMethod, isomorphic
from rewind.owning import Owning
from rewind.side_effect import SideEffect
from rewind.stack import Stack


__all__ = (
    'AlreadyConsumedError',
    'Atom',
    'BorrowError',
    'Compensable',
    'CompensationError',
    'Encased',
    'InvalidOperationError',
    'IsomorphicMethod',
    'Owning',
    'SideEffect',
    'Stack',
    'chain',
    'encase',
    'isomorphic',
    'own',
    'own_id',
    'simple',
)


T = TypeVar('T')
R = TypeVar('R')
S = TypeVar('S')


def simple(value: T, compensate: Callable[[T], R]) -> Atom[T, R]:
    """Carry value together with the action compensating it."""
    return Atom(value, compensate)


def own(value: T, compensate: Callable[[T], T]) -> Owning[T]:
    """Protect value, letting the caller keep mutating it in place.

    Example:
        items = rewind.own(["a", "b"], lambda snapshot: snapshot)
        items.value.clear()
        assert items.undo() == ["a", "b"]
    """
    return Owning(value, compensate)


def own_id(value: T) -> Owning[T]:
    """Protect value; undo restores the snapshot taken now."""
    return Owning(value, lambda snapshot: snapshot)


def encase(resource: S, strict: bool = False) -> Encased[S]:
    """Wrap a long-lived resource for a sequence of undoable sub-operations."""
    return Encased(resource, strict=strict)


def chain(first: Compensable, second: Compensable) -> Stack:
    """Group two units; second is undone before first."""
    return Stack.chain(first, second)
