"""
Bounded Integer Amounts Module

Balances are unsigned integers of a configured width. Every operation on a
balance goes through these helpers so that results outside the representable
range raise ArithmeticOverflow instead of wrapping.
"""

from typing import Any, Optional

from .config import get_config
from .errors import ArithmeticOverflow, InvalidAmount


def max_amount() -> int:
    """Largest representable balance for the configured integer width"""
    return (1 << get_config().integer_bits) - 1


def validate_amount(amount: Any) -> int:
    """
    Check that an operation amount is a representable unsigned integer

    Raises:
        InvalidAmount: If amount is not an int in 0..max_amount()
    """
    maximum = max_amount()
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(amount, maximum)
    if amount < 0 or amount > maximum:
        raise InvalidAmount(amount, maximum)
    return amount


def checked_add(left: int, right: int, field: Optional[str] = None) -> int:
    maximum = max_amount()
    result = left + right
    if result > maximum:
        raise ArithmeticOverflow("+", left, right, maximum, field)
    return result


def checked_sub(left: int, right: int, field: Optional[str] = None) -> int:
    result = left - right
    if result < 0:
        raise ArithmeticOverflow("-", left, right, max_amount(), field)
    return result


def saturating_mul(left: int, right: int) -> int:
    """Multiply, clamping the product at max_amount()"""
    return min(left * right, max_amount())


def bps_of(amount: int, bps: int) -> int:
    """
    Basis-point share of an amount, truncated toward zero

    The intermediate product saturates at the integer width, matching
    fixed-width fee arithmetic.
    """
    return saturating_mul(amount, bps) // get_config().max_bps
