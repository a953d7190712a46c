"""Turn an ordinary mutating method into one producing a compensable sub-operation."""

import functools
from typing import Any, Callable, Generic, TypeVar

from rewind.encased import Encased
from rewind.side_effect import SideEffect


__all__ = (
    'isomorphic',
    'IsomorphicMethod',
)


S = TypeVar('S')


class IsomorphicMethod(Generic[S]):
    """Method descriptor pairing a mutating method with its inverse.

    Looked up on an instance, or called on the class with a plain
    instance, it behaves like the plain method. Called on the class with
    an Encased handle in place of ``self`` it runs the
    method as a sub-operation of the encased resource and returns the
    SideEffect, whose compensation invokes the inverse method by name.
    """

    def __init__(self, method: Callable[..., Any], to: str, reuse_args: bool = False):
        """Initialize isomorphic method.

        Args:
            method: The mutating method, taking the resource as first argument.
            to: Name of the resource method that reverses it.
            reuse_args: Pass the original extra arguments to the inverse too.
        """
        self._method: Callable[..., Any] = method
        self._to: str = to
        self._reuse_args: bool = reuse_args
        functools.update_wrapper(self, method)

    @property
    def to(self) -> str:
        return self._to

    def __get__(self, instance: Any, owner: type | None = None):
        if instance is None:
            return self
        return self._method.__get__(instance, owner)

    def __call__(self, encased: Encased[S] | S, *args: Any, **kwargs: Any) -> Any:
        method, to = self._method, self._to
        if not isinstance(encased, Encased):
            return method(encased, *args, **kwargs)
        inverse_args, inverse_kwargs = (args, kwargs) if self._reuse_args else ((), {})

        def action(resource: S) -> Any:
            return method(resource, *args, **kwargs)

        def compensate(resource: S, _: Any) -> None:
            getattr(resource, to)(*inverse_args, **inverse_kwargs)

        return encased.perform(action, compensate)


def isomorphic(to: str, reuse_args: bool = False) -> Callable[[Callable[..., Any]], IsomorphicMethod]:
    """Declare the method that reverses the decorated one.

    Example:
        class Counter:
            def __init__(self):
                self.count = 0

            @isomorphic(to="decrement")
            def increment(self):
                self.count += 1

            def decrement(self):
                self.count -= 1

        counter = Encased(Counter())
        with Counter.increment(counter):
            assert counter.value.count == 1
        # counter.value.count == 0
    """
    def decorator(method: Callable[..., Any]) -> IsomorphicMethod:
        return IsomorphicMethod(method, to, reuse_args)
    return decorator
