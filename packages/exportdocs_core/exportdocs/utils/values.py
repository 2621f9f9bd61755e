"""

Lenient value parsing for incoming document records.

Records arrive as JSON-shaped dicts written by forms, so dates and numbers
are sometimes missing or malformed. In lenient mode such a value is
replaced by a fallback (today for dates that must exist, ``None`` for
optional dates, zero for numbers) and a warning is logged. In strict mode
the same situation raises MalformedValueError.

"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..exceptions import MalformedValueError

logger = logging.getLogger(__name__)

MISSING = "N/A"

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%d.%m.%Y")
DATETIME_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%d/%m/%Y %H:%M:%S", "%Y-%m-%dT%H:%M")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def text_or(value: Any, default: str = MISSING) -> str:
    """``value`` as text, or ``default`` when it is blank."""
    if is_blank(value):
        return default
    return str(value)


def format_date(value: Optional[date], pattern: str = "%d/%m/%Y", missing: str = MISSING) -> str:
    if value is None:
        return missing
    return value.strftime(pattern)


def _parse_iso_datetime(value: str) -> datetime:
    # JSON dates written by browsers end in "Z".
    cleaned = value.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    return datetime.fromisoformat(cleaned)


class ValueParser:
    """Parses dates and numbers, recovering or raising depending on ``strict``."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def _recover(self, field: str, value: Any, fallback: Any, details: str) -> Any:
        if self.strict:
            raise MalformedValueError(field, value, details)
        logger.warning(f"Malformed value for '{field}': {value!r} ({details}); using {fallback!r}")
        return fallback

    def parse_datetime(self, field: str, value: Any, required: bool = False) -> Optional[datetime]:
        """Parse a timestamp. Blank optional values give ``None`` silently."""
        fallback = datetime.now().replace(microsecond=0) if required else None
        if is_blank(value):
            if required:
                return self._recover(field, value, fallback, "missing")
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str):
            try:
                parsed = _parse_iso_datetime(value)
                return parsed.replace(tzinfo=None)
            except ValueError:
                pass
            for pattern in DATETIME_FORMATS + DATE_FORMATS:
                try:
                    return datetime.strptime(value.strip(), pattern)
                except ValueError:
                    continue
        return self._recover(field, value, fallback, "not a recognised date")

    def parse_date(self, field: str, value: Any, required: bool = False) -> Optional[date]:
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        parsed = self.parse_datetime(field, value, required)
        return parsed.date() if parsed is not None else None

    def parse_decimal(self, field: str, value: Any, default: Decimal = Decimal("0")) -> Decimal:
        if is_blank(value):
            return default
        if isinstance(value, Decimal):
            return value
        if isinstance(value, bool):
            return self._recover(field, value, default, "boolean is not a number")
        try:
            result = Decimal(str(value).strip().replace(",", ""))
        except InvalidOperation:
            return self._recover(field, value, default, "not a number")
        if not result.is_finite():
            return self._recover(field, value, default, "not a finite number")
        return result

    def parse_int(self, field: str, value: Any, default: int = 0) -> int:
        number = self.parse_decimal(field, value, Decimal(default))
        if number != number.to_integral_value():
            return self._recover(field, value, int(number), "not a whole number")
        return int(number)
