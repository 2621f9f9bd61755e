"""
Utils module: logging setup and lenient value parsing.
"""

from .logger import configure_logging, get_logger
from .values import MISSING, ValueParser, format_date, is_blank, text_or

__all__ = [
    "MISSING",
    "ValueParser",
    "configure_logging",
    "format_date",
    "get_logger",
    "is_blank",
    "text_or",
]
