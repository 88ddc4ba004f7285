"""
Treasury Module

System-wide aggregate of net deposits and lifetime withdrawals, and the
interest distribution computed from them.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from .amounts import checked_add, saturating_mul
from .errors import InvalidTreasuryState
from .users import User


@dataclass
class Treasury:
    """Aggregate ledger mirroring all user balances"""
    sum_deposited: int = 0
    sum_withdrawn: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def calculate_interest_rate(treasury: 'Treasury', user: User) -> int:
        """
        Interest owed to a user:
        (sum_deposited * user.total_deposited) / sum_withdrawn

        Interest is undefined until the treasury holds deposits and has seen
        at least one withdrawal.

        Raises:
            InvalidTreasuryState: If either treasury sum is zero
        """
        if treasury.sum_deposited > 0 and treasury.sum_withdrawn > 0:
            numerator = saturating_mul(treasury.sum_deposited, user.total_deposited)
            return numerator // treasury.sum_withdrawn
        raise InvalidTreasuryState(treasury.sum_deposited, treasury.sum_withdrawn)

    def apply_interest(self, user: User) -> int:
        """Credit interest to the user and the treasury; returns the interest"""
        interest = self.calculate_interest_rate(self, user)
        new_user_total = checked_add(user.total_deposited, interest, "total_deposited")
        new_sum = checked_add(self.sum_deposited, interest, "sum_deposited")

        user.total_deposited = new_user_total
        self.sum_deposited = new_sum
        return interest
