"""Round-up calculation: spare change up to the next multiple of a denomination"""

from decimal import Decimal, ROUND_CEILING
from typing import Tuple, Union

from roundup_gateway.domain.exceptions import InvalidAmountError

DEFAULT_DENOMINATION = Decimal("5")
CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a JSON/DB number to Decimal without binary float drift"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_up(amount: Number, denomination: Number = DEFAULT_DENOMINATION) -> Decimal:
    """
    Spare change needed to reach the next multiple of `denomination`.

    Rules:
    - Always rounds up, never to nearest
    - An exact multiple yields the full denomination, never zero
    - Amounts must be whole cents

    Examples:
        199.50 -> 0.50
        203    -> 2
        205    -> 5

    Raises:
        InvalidAmountError: amount is zero, negative or has more than 2 decimal places
    """
    amount = to_decimal(amount)
    denomination = to_decimal(denomination)

    if amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    if amount != amount.quantize(CENT):
        raise InvalidAmountError(f"Amount must be in whole cents, got {amount}")

    nearest = (amount / denomination).to_integral_value(rounding=ROUND_CEILING) * denomination
    delta = nearest - amount

    return denomination if delta == 0 else delta


def apply_round_up(
    amount: Number,
    transaction_type: str,
    denomination: Number = DEFAULT_DENOMINATION,
) -> Tuple[Decimal, bool]:
    """
    Round-up fields stored with a new transaction.

    Only expenses generate spare change; every other type stores (0, False).
    """
    if transaction_type != "expense":
        return Decimal("0"), False
    return round_up(amount, denomination), True
