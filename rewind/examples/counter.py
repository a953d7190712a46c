"""Counter - example class made compensable with @isomorphic."""

from rewind.isomorphic import isomorphic


__all__ = (
    'Counter',
)


class Counter:
    """A counter whose mutating methods know their inverses.

    Used directly, the methods just mutate. Called through the class with
    an Encased counter, they return SideEffects:

        counter = Encased(Counter())
        step = Counter.increment(counter)
        step.undo()  # count is back to 0
    """

    def __init__(self, count: int = 0):
        self.count = count

    @isomorphic(to="decrement")
    def increment(self) -> int:
        self.count += 1
        return self.count

    @isomorphic(to="increment")
    def decrement(self) -> int:
        self.count -= 1
        return self.count

    @isomorphic(to="subtract", reuse_args=True)
    def add(self, amount: int) -> int:
        self.count += amount
        return self.count

    def subtract(self, amount: int) -> int:
        self.count -= amount
        return self.count
