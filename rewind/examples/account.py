"""Account transfer - example of grouping side effects into a Stack."""

from rewind.encased import Encased
from rewind.side_effect import SideEffect
from rewind.stack import Stack


__all__ = (
    'Account',
    'InsufficientFundsError',
    'withdraw',
    'deposit',
    'transfer',
)


class InsufficientFundsError(Exception):
    """Raised when a withdrawal exceeds the available balance."""
    pass


class Account:
    """Bank account with a balance and a frozen flag."""

    def __init__(self, name: str, balance: int = 0, frozen: bool = False):
        self.name = name
        self.balance = balance
        self.frozen = frozen

    def __repr__(self) -> str:
        return "Account(%r, %r)" % (self.name, self.balance)


def _withdraw(account: Account, amount: int) -> int:
    if account.balance < amount:
        raise InsufficientFundsError(
            "%s has %d, cannot withdraw %d" % (account.name, account.balance, amount)
        )
    account.balance -= amount
    return amount


def _deposit(account: Account, amount: int) -> int:
    if account.frozen:
        raise PermissionError("%s is frozen" % account.name)
    account.balance += amount
    return amount


def _refund(account: Account, amount: int) -> None:
    account.balance += amount


def _claw_back(account: Account, amount: int) -> None:
    account.balance -= amount


def withdraw(account: Encased[Account], amount: int) -> SideEffect[Account, int, None]:
    """Take amount out of account; undo puts it back."""
    return account.perform(lambda a: _withdraw(a, amount), _refund)


def deposit(account: Encased[Account], amount: int) -> SideEffect[Account, int, None]:
    """Put amount into account; undo takes it out again."""
    return account.perform(lambda a: _deposit(a, amount), _claw_back)


def transfer(source: Encased[Account], target: Encased[Account], amount: int) -> int:
    """Move amount between accounts, all or nothing.

    The withdrawal is pushed before the deposit is attempted, so a failed
    deposit (or any later error) leaves the stack un-committed and both
    steps are unwound on the way out.

    Returns:
        The amount transferred.
    """
    with Stack() as steps:
        steps.push(withdraw(source, amount))
        steps.push(deposit(target, amount))
        deposited, _ = steps.cancel()
        return deposited
