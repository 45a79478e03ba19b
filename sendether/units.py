"""Exact conversion of human amounts into wei."""

from decimal import Decimal, InvalidOperation
from typing import Union

from .exceptions import InvalidAmountError

# Common denomination exponents
WEI_BASE = 0
GWEI_BASE = 9
ETHER_BASE = 18

# Largest value an EVM transaction can carry
MAX_UINT256 = 2**256 - 1
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))

Amount = Union[int, str, Decimal, float]


def _as_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, bool):
        raise InvalidAmountError(f"amount must be numeric, got {amount!r}", field="amount")
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, int):
        return Decimal(amount)
    if isinstance(amount, float):
        # Go through the shortest repr so 0.1 means 0.1, not its binary expansion.
        return Decimal(repr(amount))
    if isinstance(amount, str):
        try:
            return Decimal(amount.strip().replace("_", ""))
        except InvalidOperation as exc:
            raise InvalidAmountError(
                f"amount is not a decimal number: {amount!r}", field="amount"
            ) from exc
    raise InvalidAmountError(
        f"amount must be int, str, Decimal or float, got {type(amount).__name__}",
        field="amount",
    )


def to_smallest_unit(amount: Amount, base: int = WEI_BASE) -> int:
    """
    Convert ``amount * 10**base`` to an exact integer number of wei.

    Args:
        amount: Decimal amount as int, decimal string, Decimal or float
        base: Power-of-ten exponent of the denomination (0 = wei, 18 = ether)

    Returns:
        Non-negative integer amount in wei

    Raises:
        InvalidAmountError: If the amount is negative, not a finite number,
            does not scale to a whole number of wei, or exceeds 2**256 - 1
    """
    if isinstance(base, bool) or not isinstance(base, int) or base < 0:
        raise InvalidAmountError(f"base must be an integer >= 0, got {base!r}", field="base")

    value = _as_decimal(amount)
    if not value.is_finite():
        raise InvalidAmountError(f"amount must be finite, got {amount!r}", field="amount")
    if value.is_signed() and value != 0:
        raise InvalidAmountError(f"amount must be >= 0, got {amount!r}", field="amount")

    # Scale on the integer coefficient so no context precision or rounding applies.
    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(str(d) for d in digits)) if digits else 0
    shift = exponent + base
    if coefficient == 0:
        return 0
    # Bound the exponent before building the integer
    if len(str(coefficient)) + shift > _MAX_UINT256_DIGITS:
        raise _too_large(amount, base)
    if shift >= 0:
        result = coefficient * 10**shift
    else:
        if -shift > len(str(coefficient)):
            raise _not_whole(amount, base)
        divisor = 10 ** (-shift)
        if coefficient % divisor:
            raise _not_whole(amount, base)
        result = coefficient // divisor
    if result > MAX_UINT256:
        raise _too_large(amount, base)
    return result


def _not_whole(amount, base):
    return InvalidAmountError(
        f"{amount} with base {base} is not a whole number of wei", field="amount"
    )


def _too_large(amount, base):
    return InvalidAmountError(
        f"{amount} with base {base} exceeds 2**256 - 1 wei", field="amount"
    )
