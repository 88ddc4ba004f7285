"""
Ledger Error Taxonomy

Every recoverable failure raised by the ledger is a LedgerError carrying an
ErrorKind, so callers branch on kind rather than on message text.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Kinds of ledger failures"""
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    BORROWING_DISABLED = "borrowing_disabled"
    LIMIT_EXCEEDED = "limit_exceeded"
    SELF_BORROW = "self_borrow"
    INVALID_TREASURY_STATE = "invalid_treasury_state"
    OVERFLOW = "overflow"
    UNKNOWN_USER = "unknown_user"
    DUPLICATE_USER = "duplicate_user"
    INVARIANT_VIOLATION = "invariant_violation"


class LedgerError(Exception):
    """Base class for ledger errors"""

    kind: ErrorKind

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, **self.context}


class InvalidAmount(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, amount: Any, maximum: int):
        super().__init__(
            f"Amount must be an integer between 0 and {maximum}, got {amount!r}",
            amount=amount, maximum=maximum
        )


class InsufficientBalance(LedgerError):
    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, requested: int, available: int):
        super().__init__("Insufficient balance", requested=requested, available=available)


class InsufficientFunds(LedgerError):
    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, requested: int, available: int):
        super().__init__(
            "Insufficient funds in lender's account",
            requested=requested, available=available
        )


class BorrowingDisabled(LedgerError):
    kind = ErrorKind.BORROWING_DISABLED

    def __init__(self, lender_id: int):
        super().__init__("Lender has not enabled borrowing", lender_id=lender_id)


class LimitExceeded(LedgerError):
    kind = ErrorKind.LIMIT_EXCEEDED

    def __init__(self, requested: int, maximum: int, percentage: int):
        super().__init__(
            f"Cannot borrow more than {percentage}% of lender's deposit. Maximum: {maximum}",
            requested=requested, maximum=maximum, percentage=percentage
        )
        self.requested = requested
        self.maximum = maximum


class SelfBorrow(LedgerError):
    kind = ErrorKind.SELF_BORROW

    def __init__(self, user_id: int):
        super().__init__("A user cannot borrow from itself", user_id=user_id)


class InvalidTreasuryState(LedgerError):
    kind = ErrorKind.INVALID_TREASURY_STATE

    def __init__(self, sum_deposited: int, sum_withdrawn: int):
        super().__init__(
            "Invalid treasury state",
            sum_deposited=sum_deposited, sum_withdrawn=sum_withdrawn
        )


class ArithmeticOverflow(LedgerError):
    kind = ErrorKind.OVERFLOW

    def __init__(self, operation: str, left: int, right: int, maximum: int,
                 field: Optional[str] = None):
        where = f" on {field}" if field else ""
        super().__init__(
            f"Arithmetic overflow{where}: {left} {operation} {right} is outside 0..{maximum}",
            operation=operation, left=left, right=right, maximum=maximum, field=field
        )


class UnknownUser(LedgerError):
    kind = ErrorKind.UNKNOWN_USER

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found", user_id=user_id)


class DuplicateUser(LedgerError):
    kind = ErrorKind.DUPLICATE_USER

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} already registered", user_id=user_id)


class InvariantViolation(LedgerError):
    kind = ErrorKind.INVARIANT_VIOLATION

    def __init__(self, sum_deposited: int, users_total: int):
        super().__init__(
            f"Treasury holds {sum_deposited} but user balances total {users_total}",
            sum_deposited=sum_deposited, users_total=users_total
        )
