"""Document totals for the invoice assemblers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def quantum(precision: int) -> Decimal:
    return Decimal(1).scaleb(-precision)


@dataclass(frozen=True, slots=True)
class Totals:
    """All figures shown in an invoice's totals rows."""

    subtotal: Decimal
    discount: Decimal
    freight: Decimal
    insurance: Decimal
    tax: Decimal
    raw_total: Decimal
    grand_total: Decimal
    rounding_adjustment: Decimal
    precision: int = 2

    @property
    def has_adjustment(self) -> bool:
        return self.rounding_adjustment != 0


def compute_totals(
    line_amounts: Iterable[Number],
    discount: Number = 0,
    freight: Number = 0,
    insurance: Number = 0,
    tax: Number = 0,
    precision: int = 2,
) -> Totals:
    """

    subtotal = sum of line amounts
    raw total = subtotal - discount + freight + insurance + tax
    grand total = raw total rounded half up to ``precision`` decimals

    The difference between grand and raw total is reported as the
    rounding adjustment, so the printed lines always add up.

    """
    subtotal = sum((to_decimal(amount) for amount in line_amounts), ZERO)
    discount_d = to_decimal(discount)
    freight_d = to_decimal(freight)
    insurance_d = to_decimal(insurance)
    tax_d = to_decimal(tax)
    raw = subtotal - discount_d + freight_d + insurance_d + tax_d
    grand = raw.quantize(quantum(precision), rounding=ROUND_HALF_UP)
    return Totals(
        subtotal=subtotal,
        discount=discount_d,
        freight=freight_d,
        insurance=insurance_d,
        tax=tax_d,
        raw_total=raw,
        grand_total=grand,
        rounding_adjustment=grand - raw,
        precision=precision,
    )


def format_amount(value: Number, precision: int = 2) -> str:
    """Fixed-point string with thousands separators, e.g. ``12,500.00``."""
    amount = to_decimal(value).quantize(quantum(precision), rounding=ROUND_HALF_UP)
    if amount == 0:
        amount = abs(amount)
    return f"{amount:,.{precision}f}"
