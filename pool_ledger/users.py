"""
User Balance Module

A ledger user holds a net deposit balance, a lifetime withdrawal counter and a
flag allowing other users to borrow against that balance. Deposits and
withdrawals are mirrored into the Treasury within the same call; borrowing
moves balance between two users and leaves the Treasury untouched.

Each operation computes every new value before assigning any of them, so a
rejected operation leaves both the user and the treasury unchanged.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, TYPE_CHECKING

from .amounts import bps_of, checked_add, checked_sub, validate_amount
from .config import get_config
from .errors import (
    BorrowingDisabled, InsufficientBalance, InsufficientFunds,
    LimitExceeded, SelfBorrow
)

if TYPE_CHECKING:
    from .treasury import Treasury


def calculate_entry_fee(amount: int) -> int:
    """Entry fee for a deposit (2% by default)"""
    validate_amount(amount)
    return bps_of(amount, get_config().entry_fee_bps)


def calculate_exit_fee(amount: int) -> int:
    """Exit fee for a withdrawal (4% by default)"""
    validate_amount(amount)
    return bps_of(amount, get_config().exit_fee_bps)


def max_borrowable(lender: 'User') -> int:
    """
    Largest amount that may be borrowed from a lender

    The product is formed with Python integers before dividing, so large
    deposits cannot wrap the limit.
    """
    return lender.total_deposited * get_config().borrow_percentage // 100


@dataclass
class User:
    """Ledger user account"""
    id: int
    name: str
    total_deposited: int = 0
    total_withdrawn: int = 0
    has_deposited: bool = False
    borrowable: bool = False

    calculate_entry_fee = staticmethod(calculate_entry_fee)
    calculate_exit_fee = staticmethod(calculate_exit_fee)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def deposit(self, amount: int, treasury: 'Treasury', is_borrowable: bool) -> None:
        """
        Credit amount to this user and to the treasury

        Sets has_deposited and overwrites borrowable with is_borrowable.

        Raises:
            InvalidAmount: If amount is not a representable unsigned integer
            ArithmeticOverflow: If either balance would exceed the integer width
        """
        validate_amount(amount)
        new_total = checked_add(self.total_deposited, amount, "total_deposited")
        new_sum = checked_add(treasury.sum_deposited, amount, "sum_deposited")

        self.total_deposited = new_total
        self.has_deposited = True
        self.borrowable = bool(is_borrowable)
        treasury.sum_deposited = new_sum

    def withdraw(self, amount: int, treasury: 'Treasury') -> int:
        """
        Debit amount from this user and from the treasury

        The withdrawal is accepted only while the lifetime withdrawals plus
        amount stay within the current deposit balance.

        Returns:
            The user's updated total_withdrawn

        Raises:
            InsufficientBalance: If the balance check fails
            ArithmeticOverflow: If a counter leaves the integer range
        """
        validate_amount(amount)
        if self.total_withdrawn + amount > self.total_deposited:
            raise InsufficientBalance(amount, self.total_deposited - self.total_withdrawn)

        new_deposited = checked_sub(self.total_deposited, amount, "total_deposited")
        new_withdrawn = checked_add(self.total_withdrawn, amount, "total_withdrawn")
        new_sum_deposited = checked_sub(treasury.sum_deposited, amount, "sum_deposited")
        new_sum_withdrawn = checked_add(treasury.sum_withdrawn, amount, "sum_withdrawn")

        self.total_deposited = new_deposited
        self.total_withdrawn = new_withdrawn
        treasury.sum_deposited = new_sum_deposited
        treasury.sum_withdrawn = new_sum_withdrawn
        return self.total_withdrawn

    def deposit_with_fee(self, amount: int, treasury: 'Treasury', is_borrowable: bool) -> int:
        """
        Deposit amount less the entry fee

        The fee is not credited anywhere.

        Returns:
            The net amount credited
        """
        fee = calculate_entry_fee(amount)
        net_amount = checked_sub(amount, fee, "entry fee")
        self.deposit(net_amount, treasury, is_borrowable)
        return net_amount

    def withdraw_with_fee(self, amount: int, treasury: 'Treasury') -> int:
        """
        Withdraw amount plus the exit fee

        Returns:
            The user's updated total_withdrawn
        """
        fee = calculate_exit_fee(amount)
        total = checked_add(amount, fee, "exit fee")
        return self.withdraw(total, treasury)

    def borrow(self, lender: 'User', amount: int) -> int:
        """
        Move amount from lender's deposit to this user's deposit

        Checks, in order: the lender allows borrowing, amount is within the
        lender's borrowing limit, and the lender holds at least amount.

        Returns:
            The amount borrowed
        """
        validate_amount(amount)
        if lender is self:
            raise SelfBorrow(self.id)
        if not lender.borrowable:
            raise BorrowingDisabled(lender.id)

        limit = max_borrowable(lender)
        if amount > limit:
            raise LimitExceeded(amount, limit, get_config().borrow_percentage)

        if lender.total_deposited < amount:
            raise InsufficientFunds(amount, lender.total_deposited)

        new_lender_total = checked_sub(lender.total_deposited, amount, "total_deposited")
        new_borrower_total = checked_add(self.total_deposited, amount, "total_deposited")

        lender.total_deposited = new_lender_total
        self.total_deposited = new_borrower_total
        return amount
