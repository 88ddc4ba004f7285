"""
Ledger Module

Owns the users of a pool, addressed by integer id, together with the single
Treasury they deposit into. All operations go through here so that each one
resolves its users, mutates state, writes an audit event and a structured log
line as one unit. Operations on a ledger are serialized by a reentrant lock.
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .audit import AuditTrail, AuditEventType
from .config import get_config
from .errors import DuplicateUser, InvariantViolation, LedgerError, UnknownUser
from .logging_config import get_logger, log_action
from .treasury import Treasury
from .users import User, calculate_entry_fee, calculate_exit_fee


class Ledger:
    """
    Collection of users plus their shared treasury

    The treasury always starts zeroed so that it mirrors the empty user set.
    """

    def __init__(
        self,
        audit_trail: Optional[AuditTrail] = None
    ):
        self.treasury = Treasury()
        self._users: Dict[int, User] = {}
        self._lock = threading.RLock()
        self.logger = get_logger("pool_ledger.ledger")

        if audit_trail is None and get_config().enable_audit_logging:
            audit_trail = AuditTrail()
        self.audit_trail = audit_trail

    def _audit(self, event_type: AuditEventType, entity_type: str, entity_id: Any,
               metadata: Dict[str, Any]) -> None:
        if self.audit_trail is not None:
            self.audit_trail.log_event(event_type, entity_type, str(entity_id), metadata)

    @contextmanager
    def _operation(self, action: str, user_id: int, **details: Any):
        """Run one ledger operation under the lock, recording rejections"""
        with self._lock:
            try:
                yield
            except LedgerError as e:
                log_action(
                    self.logger, "warning", f"{action} rejected: {e.message}",
                    user_id=user_id, action=action, resource=f"user:{user_id}",
                    error_kind=e.kind.value, extra=details
                )
                self._audit(
                    AuditEventType.OPERATION_REJECTED, "user", user_id,
                    {"action": action, **details, "error": e.to_dict()}
                )
                raise

    def _record(self, event_type: AuditEventType, action: str, user: User,
                message: str, **details: Any) -> None:
        log_action(
            self.logger, "info", message,
            user_id=user.id, action=action, resource=f"user:{user.id}",
            extra={**details, "total_deposited": user.total_deposited,
                   "sum_deposited": self.treasury.sum_deposited}
        )
        self._audit(event_type, "user", user.id, {
            **details,
            "total_deposited": user.total_deposited,
            "total_withdrawn": user.total_withdrawn,
            "sum_deposited": self.treasury.sum_deposited,
            "sum_withdrawn": self.treasury.sum_withdrawn,
        })

    # User registry

    def register_user(self, user_id: int, name: str) -> User:
        """
        Add a zeroed user to the ledger

        Raises:
            DuplicateUser: If user_id is already registered
        """
        with self._operation("register_user", user_id, name=name):
            if user_id in self._users:
                raise DuplicateUser(user_id)
            user = User(id=user_id, name=name)
            self._users[user_id] = user
            log_action(
                self.logger, "info", f"User registered: {name}",
                user_id=user_id, action="register_user", resource=f"user:{user_id}"
            )
            self._audit(AuditEventType.USER_REGISTERED, "user", user_id, {"name": name})
            return user

    def get_user(self, user_id: int) -> User:
        """
        Get a user by id

        Raises:
            UnknownUser: If no user has that id
        """
        user = self._users.get(user_id)
        if user is None:
            raise UnknownUser(user_id)
        return user

    def list_users(self) -> List[User]:
        """All users, in registration order"""
        return list(self._users.values())

    # Balance operations

    def deposit(self, user_id: int, amount: int, is_borrowable: bool) -> int:
        """Deposit amount for a user; returns the amount credited"""
        with self._operation("deposit", user_id, amount=amount):
            user = self.get_user(user_id)
            user.deposit(amount, self.treasury, is_borrowable)
            self._record(
                AuditEventType.DEPOSIT_MADE, "deposit", user,
                f"Deposit of {amount} credited",
                amount=amount, net_amount=amount, fee=0, borrowable=user.borrowable
            )
            return amount

    def deposit_with_fee(self, user_id: int, amount: int, is_borrowable: bool) -> int:
        """Deposit amount less the entry fee; returns the net amount credited"""
        with self._operation("deposit_with_fee", user_id, amount=amount):
            user = self.get_user(user_id)
            net_amount = user.deposit_with_fee(amount, self.treasury, is_borrowable)
            self._record(
                AuditEventType.DEPOSIT_MADE, "deposit_with_fee", user,
                f"Deposit of {amount} credited as {net_amount} after entry fee",
                amount=amount, net_amount=net_amount,
                fee=calculate_entry_fee(amount), borrowable=user.borrowable
            )
            return net_amount

    def withdraw(self, user_id: int, amount: int) -> int:
        """Withdraw amount for a user; returns the user's total_withdrawn"""
        with self._operation("withdraw", user_id, amount=amount):
            user = self.get_user(user_id)
            total_withdrawn = user.withdraw(amount, self.treasury)
            self._record(
                AuditEventType.WITHDRAWAL_MADE, "withdraw", user,
                f"Withdrawal of {amount} debited",
                amount=amount, debited=amount, fee=0
            )
            return total_withdrawn

    def withdraw_with_fee(self, user_id: int, amount: int) -> int:
        """Withdraw amount plus the exit fee; returns the user's total_withdrawn"""
        with self._operation("withdraw_with_fee", user_id, amount=amount):
            user = self.get_user(user_id)
            total_withdrawn = user.withdraw_with_fee(amount, self.treasury)
            fee = calculate_exit_fee(amount)
            self._record(
                AuditEventType.WITHDRAWAL_MADE, "withdraw_with_fee", user,
                f"Withdrawal of {amount} debited as {amount + fee} including exit fee",
                amount=amount, debited=amount + fee, fee=fee
            )
            return total_withdrawn

    def borrow(self, borrower_id: int, lender_id: int, amount: int) -> int:
        """
        Move amount from the lender's deposit to the borrower's

        Both users are resolved inside the same locked operation. The
        treasury is not touched.

        Returns:
            The amount borrowed
        """
        with self._operation("borrow", borrower_id, lender_id=lender_id, amount=amount):
            borrower = self.get_user(borrower_id)
            lender = self.get_user(lender_id)
            borrowed = borrower.borrow(lender, amount)
            self._record(
                AuditEventType.FUNDS_BORROWED, "borrow", borrower,
                f"User {borrower_id} borrowed {borrowed} from user {lender_id}",
                amount=borrowed, lender_id=lender_id,
                lender_total_deposited=lender.total_deposited
            )
            return borrowed

    def apply_interest(self, user_id: int) -> int:
        """Credit treasury interest to a user; returns the interest applied"""
        with self._operation("apply_interest", user_id):
            user = self.get_user(user_id)
            interest = self.treasury.apply_interest(user)
            self._record(
                AuditEventType.INTEREST_APPLIED, "apply_interest", user,
                f"Interest of {interest} applied",
                interest=interest
            )
            return interest

    # Integrity

    def check_invariants(self) -> None:
        """
        Verify that the treasury mirrors the users' deposit balances

        Raises:
            InvariantViolation: If sum_deposited differs from the users' total
        """
        with self._lock:
            users_total = sum(user.total_deposited for user in self._users.values())
            if users_total != self.treasury.sum_deposited:
                raise InvariantViolation(self.treasury.sum_deposited, users_total)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the treasury and all users"""
        with self._lock:
            return {
                "treasury": self.treasury.to_dict(),
                "users": [user.to_dict() for user in self._users.values()],
            }
