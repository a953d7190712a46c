"""Worked examples of compensable operations.

- Counter: mutating methods paired with their inverses via @isomorphic
- Account / transfer(): two side effects grouped into a Stack, committed
  only when both the withdrawal and the deposit succeed
"""

from rewind.examples.account import (
    Account,
    InsufficientFundsError,
    deposit,
    transfer,
    withdraw,
)
from rewind.examples.counter import Counter


__all__ = (
    'Account',
    'Counter',
    'InsufficientFundsError',
    'deposit',
    'transfer',
    'withdraw',
)
