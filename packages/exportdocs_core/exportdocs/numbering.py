"""Financial-year document numbering.

Numbers look like ``HEM/PO/25-26/007``: a document-type prefix, the
financial-year window label and a sequence number. The next number is
derived from the numbers already issued, never from a stored counter.

Not safe under concurrent issuance: two callers scanning the same set of
documents at the same time compute the same next number. Callers that
issue numbers from several writers must serialise issuance themselves.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

# April is the first month of the Indian financial year.
FY_START_MONTH = 4

PURCHASE_ORDER_PREFIX = "HEM/PO/"
PROFORMA_INVOICE_PREFIX = "HEM/PI/"
PURCHASE_ORDER_PAD = 3

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def financial_year_label(when: Optional[Union[date, datetime]] = None) -> str:
    """Label of the April-March window containing ``when``, e.g. ``"25-26"``."""
    when = when or date.today()
    start_year = when.year if when.month >= FY_START_MONTH else when.year - 1
    return f"{start_year % 100:02d}-{(start_year + 1) % 100:02d}"


@dataclass(slots=True)
class SequenceCounter:
    """Last issued number for one prefix and financial-year window."""

    prefix: str
    year_window: str
    last_issued: int = 0
    pad: int = 0

    @property
    def stem(self) -> str:
        return f"{self.prefix}{self.year_window}/"

    @classmethod
    def from_existing(
        cls,
        existing: Iterable[str],
        prefix: str,
        year_window: str,
        pad: int = 0,
    ) -> "SequenceCounter":
        counter = cls(prefix=prefix, year_window=year_window, pad=pad)
        stem = counter.stem
        for number in existing:
            if not number or not number.startswith(stem):
                continue
            match = _LEADING_DIGITS.match(number[len(stem):])
            if match is None:
                logger.debug(f"Ignoring document number without numeric suffix: {number!r}")
                continue
            counter.last_issued = max(counter.last_issued, int(match.group(1)))
        return counter

    def format(self, value: int) -> str:
        suffix = str(value).zfill(self.pad) if self.pad else str(value)
        return f"{self.stem}{suffix}"

    def peek(self) -> str:
        """The number that would be issued next."""
        return self.format(self.last_issued + 1)


def next_document_number(
    existing: Iterable[str],
    prefix: str,
    window: Optional[str] = None,
    pad: int = 0,
) -> str:
    """Next number after the highest one issued under ``prefix`` + ``window``.

    ``window`` defaults to the current financial year. Numbers from other
    windows or prefixes are ignored; with no match the sequence starts at 1.
    """
    window = window or financial_year_label()
    return SequenceCounter.from_existing(existing, prefix, window, pad).peek()


def next_purchase_order_number(existing: Iterable[str], window: Optional[str] = None) -> str:
    return next_document_number(existing, PURCHASE_ORDER_PREFIX, window, PURCHASE_ORDER_PAD)


def next_proforma_invoice_number(existing: Iterable[str], window: Optional[str] = None) -> str:
    return next_document_number(existing, PROFORMA_INVOICE_PREFIX, window)
