"""Monetary amounts written out in words, the way they appear on invoices.

    >>> amount_to_words(1, "USD")
    'USD ONE DOLLAR ONLY'
    >>> amount_to_words(1250.5, "INR")
    'INR ONE THOUSAND TWO HUNDRED FIFTY RUPEES AND FIFTY PAISA ONLY'
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, List, Union

Amount = Union[Decimal, int, float, str]

UNITS = (
    "ZERO", "ONE", "TWO", "THREE", "FOUR", "FIVE", "SIX", "SEVEN", "EIGHT", "NINE",
    "TEN", "ELEVEN", "TWELVE", "THIRTEEN", "FOURTEEN", "FIFTEEN", "SIXTEEN",
    "SEVENTEEN", "EIGHTEEN", "NINETEEN",
)
TENS = ("", "", "TWENTY", "THIRTY", "FORTY", "FIFTY", "SIXTY", "SEVENTY", "EIGHTY", "NINETY")
SCALES = ("", "THOUSAND", "MILLION", "BILLION")

LIMIT = Decimal(1000) ** len(SCALES)
CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class CurrencyUnits:
    major: str
    major_plural: str
    minor: str
    minor_plural: str

    def major_name(self, value: int) -> str:
        return self.major if value == 1 else self.major_plural

    def minor_name(self, value: int) -> str:
        return self.minor if value == 1 else self.minor_plural


CURRENCIES: Dict[str, CurrencyUnits] = {
    "USD": CurrencyUnits("DOLLAR", "DOLLARS", "CENT", "CENTS"),
    "INR": CurrencyUnits("RUPEE", "RUPEES", "PAISA", "PAISA"),
    "EUR": CurrencyUnits("EURO", "EUROS", "CENT", "CENTS"),
}
ALIASES = {"EURO": "EUR", "RS": "INR", "$": "USD"}


def normalize_currency(currency: str) -> str:
    code = str(currency or "").strip().upper()
    code = ALIASES.get(code, code)
    if code not in CURRENCIES:
        raise ValueError(f"Unknown currency code: {currency!r}")
    return code


def _chunk_words(number: int) -> List[str]:
    """Words for 0 < number < 1000."""
    words: List[str] = []
    hundreds, rest = divmod(number, 100)
    if hundreds:
        words += [UNITS[hundreds], "HUNDRED"]
    if rest >= 20:
        tens, units = divmod(rest, 10)
        words.append(TENS[tens])
        if units:
            words.append(UNITS[units])
    elif rest:
        words.append(UNITS[rest])
    return words


def integer_to_words(number: int) -> str:
    """Spell out a non-negative integer below one trillion."""
    if number == 0:
        return UNITS[0]
    parts: List[List[str]] = []
    index = 0
    while number > 0:
        number, chunk = divmod(number, 1000)
        if chunk:
            words = _chunk_words(chunk)
            if SCALES[index]:
                words.append(SCALES[index])
            parts.append(words)
        index += 1
    return " ".join(word for chunk in reversed(parts) for word in chunk)


def split_amount(amount: Amount) -> tuple:
    """Integer and two-digit fractional part, rounded half up.

    A fraction that rounds to 100 carries into the integer part.
    """
    try:
        value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Not a finite amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must not be negative: {amount!r}")
    cents = int(value.quantize(CENTS, rounding=ROUND_HALF_UP) * 100)
    whole, fraction = divmod(cents, 100)
    if whole >= LIMIT:
        raise ValueError(f"Amount too large to write out: {amount!r}")
    return whole, fraction


def currency_prefix(currency: str) -> str:
    """The currency as written, upper-cased; symbols print as their code."""
    written = str(currency or "").strip().upper()
    return written if written.isalpha() else normalize_currency(currency)


def amount_to_words(amount: Amount, currency: str) -> str:
    """Uppercase words for ``amount`` in ``currency``, ending in ONLY."""
    units = CURRENCIES[normalize_currency(currency)]
    code = currency_prefix(currency)
    whole, fraction = split_amount(amount)
    if whole == 0 and fraction == 0:
        return f"{code} ZERO ONLY"

    words = f"{integer_to_words(whole)} {units.major_name(whole)}"
    if fraction:
        words += f" AND {integer_to_words(fraction)} {units.minor_name(fraction)}"
    return f"{code} {words} ONLY"
