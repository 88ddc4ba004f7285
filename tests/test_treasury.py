"""
Test suite for treasury interest
"""

import pytest

from pool_ledger.errors import ArithmeticOverflow, ErrorKind, InvalidTreasuryState
from pool_ledger.treasury import Treasury


MAX = 2**32 - 1


class TestCalculateInterestRate:
    """Test interest calculation"""

    def test_requires_a_withdrawal(self, alice, treasury):
        alice.deposit(5000, treasury, False)

        with pytest.raises(InvalidTreasuryState) as exc_info:
            Treasury.calculate_interest_rate(treasury, alice)

        error = exc_info.value
        assert error.kind == ErrorKind.INVALID_TREASURY_STATE
        assert str(error) == "Invalid treasury state"
        assert error.context == {"sum_deposited": 5000, "sum_withdrawn": 0}

    def test_requires_deposits(self, alice):
        treasury = Treasury(sum_deposited=0, sum_withdrawn=10)
        with pytest.raises(InvalidTreasuryState):
            Treasury.calculate_interest_rate(treasury, alice)

    def test_formula(self, alice, bob, treasury):
        alice.deposit(1000, treasury, False)
        bob.deposit(1000, treasury, False)
        alice.withdraw(500, treasury)

        # (1500 * 500) / 500
        assert Treasury.calculate_interest_rate(treasury, alice) == 1500
        # (1500 * 1000) / 500
        assert Treasury.calculate_interest_rate(treasury, bob) == 3000

    def test_truncates_toward_zero(self, alice):
        alice.total_deposited = 7
        treasury = Treasury(sum_deposited=10, sum_withdrawn=3)
        assert Treasury.calculate_interest_rate(treasury, alice) == 23

    def test_numerator_saturates(self, alice):
        alice.total_deposited = MAX
        treasury = Treasury(sum_deposited=MAX, sum_withdrawn=MAX)
        assert Treasury.calculate_interest_rate(treasury, alice) == 1


class TestApplyInterest:
    """Test interest application"""

    def test_credits_user_and_treasury(self, alice, bob, treasury):
        alice.deposit(1000, treasury, False)
        bob.deposit(1000, treasury, False)
        alice.withdraw(500, treasury)

        interest = treasury.apply_interest(alice)

        assert interest == 1500
        assert alice.total_deposited == 2000
        assert treasury.sum_deposited == 3000
        assert treasury.sum_deposited == alice.total_deposited + bob.total_deposited

    def test_fails_before_any_withdrawal(self, alice, treasury):
        alice.deposit_with_fee(1000, treasury, True)

        with pytest.raises(InvalidTreasuryState):
            treasury.apply_interest(alice)

        assert alice.total_deposited == 980
        assert treasury.sum_deposited == 980

    def test_overflow_is_recoverable(self, alice):
        alice.total_deposited = MAX - 1
        treasury = Treasury(sum_deposited=MAX - 1, sum_withdrawn=1)

        with pytest.raises(ArithmeticOverflow):
            treasury.apply_interest(alice)

        assert alice.total_deposited == MAX - 1
        assert treasury.sum_deposited == MAX - 1
