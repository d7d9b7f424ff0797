"""
Money helpers.

Amounts are stored as exact base-10 strings and converted to Decimal
only for arithmetic. Rounding happens at display time and nowhere else.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Iterable, Union

from dailyspend.errors import ValidationError


CURRENCIES = {
    "USD": "$",
    "INR": "₹",
}

_CENT = Decimal("0.01")

# Largest single amount; totals of such amounts fit the default
# 28-digit context exactly.
MAX_AMOUNT = Decimal("1000000000000")


def parse_amount(raw: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse user-entered amount text.

    This is the entry-path check: empty, non-numeric, non-finite,
    non-positive and over-MAX_AMOUNT values are rejected here.
    """
    if raw is None:
        raise ValidationError("Amount is required", field="amount")

    text = str(raw).strip().replace(",", "")
    if not text:
        raise ValidationError("Amount is required", field="amount")

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValidationError("Please enter a valid amount", field="amount")

    if not value.is_finite():
        raise ValidationError("Please enter a valid amount", field="amount")
    if value <= 0:
        raise ValidationError("Amount must be greater than zero", field="amount")
    if value > MAX_AMOUNT:
        raise ValidationError(
            f"Amount must not exceed {MAX_AMOUNT:,}",
            field="amount",
        )

    return value


def normalize_amount(value: Decimal) -> str:
    """
    Canonical at-rest string for an amount.

    Values with at most two decimal places are padded to cents
    ("12.5" -> "12.50"); finer values are kept exact.
    """
    if value.as_tuple().exponent >= -2:
        with localcontext() as ctx:
            # quantize needs every integer digit plus two decimals
            ctx.prec = max(ctx.prec, value.adjusted() + 3)
            value = value.quantize(_CENT)
    return format(value, "f")


def to_decimal(amount: str) -> Decimal:
    """Convert an at-rest amount string to Decimal for summation."""
    return Decimal(amount)


def sum_amounts(amounts: Iterable[str]) -> Decimal:
    """Exact sum of amount strings. The sum of nothing is 0."""
    return sum((to_decimal(a) for a in amounts), Decimal("0"))


def format_amount_display(
    value: Union[Decimal, int, float],
    currency: str = "USD",
) -> str:
    """
    Display form with 0-2 fractional digits, e.g. '$1,234.5' or '₹3'.
    """
    rounded = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    text = f"{rounded:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    symbol = CURRENCIES.get(currency, "")
    return f"{symbol}{text}"
