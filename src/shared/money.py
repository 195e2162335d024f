"""Monetary amounts.

The storefront trades in a single currency, so money is a plain ``Decimal``
rounded to cents. Floats are converted through their shortest string form,
so ``2.5`` becomes ``Decimal("2.50")`` and not the binary expansion.

Column limits: prices are ``Numeric(10, 2)`` and order totals
``Numeric(12, 2)``; ``MAX_PRICE`` and ``MAX_TOTAL`` are the largest values
those columns hold.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from shared.exceptions import ValidationError

CENTS = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")
MAX_TOTAL = Decimal("9999999999.99")


def _quantize(amount: Decimal, field: str) -> Decimal:
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError({field: ["Amount is too large"]}) from None


def to_money(value, field: str = "amount") -> Decimal:
    if isinstance(value, bool):
        raise ValidationError({field: ["Amount must be a number"]})
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError({field: ["Amount must be a number"]}) from None

    if not amount.is_finite():
        raise ValidationError({field: ["Amount must be finite"]})
    return _quantize(amount, field)


def has_whole_cents(value) -> bool:
    """True when ``value`` needs no more than two decimal places."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return False
    return amount.is_finite() and amount.normalize().as_tuple().exponent >= -2


def line_total(price: Decimal, quantity: int, field: str = "total") -> Decimal:
    return _quantize(price * quantity, field)
