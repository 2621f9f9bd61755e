"""

TextMetricsEngine - calculating actual text width and height.

Uses ReportLab font metrics of the base-14 Helvetica family and calculates:
- text width
- line height (font size times line spacing)
- baseline offset inside a line box

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from reportlab.pdfbase import pdfmetrics

from .layout_primitives import TextStyle

logger = logging.getLogger(__name__)

FONT_VARIANTS = {
    "Helvetica": {False: "Helvetica", True: "Helvetica-Bold"},
}


def resolve_font_variant(family: str, bold: bool) -> str:
    """Return the ReportLab font name for ``family`` with the given weight."""
    variants = FONT_VARIANTS.get(family)
    if variants is None:
        logger.debug(f"Unknown font family {family!r}, falling back to Helvetica")
        variants = FONT_VARIANTS["Helvetica"]
    return variants[bool(bold)]


@dataclass(slots=True)
class TextLayout:
    """Result structure for wrapped text."""

    lines: List[str] = field(default_factory=list)
    widths: List[float] = field(default_factory=list)
    font_size: float = 9.0
    line_height: float = 10.8

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def width(self) -> float:
        return max(self.widths, default=0.0)

    @property
    def height(self) -> float:
        return self.line_count * self.line_height


class TextMetricsEngine:
    """

    Engine for calculating text metrics.

    Stateless apart from the font family it was created for, so each render
    call can own one without any cross-render interference.

    """

    def __init__(self, font_family: str = "Helvetica"):
        self.font_family = font_family

    def font_name(self, style: TextStyle) -> str:
        return resolve_font_variant(self.font_family, style.bold)

    def string_width(self, text: str, style: TextStyle) -> float:
        """Width of ``text`` on a single line, in points."""
        if not text:
            return 0.0
        return pdfmetrics.stringWidth(text, self.font_name(style), style.font_size)

    def line_height(self, style: TextStyle) -> float:
        return style.font_size * style.line_spacing

    def baseline_offset(self, style: TextStyle) -> float:
        """Distance from the top of a line box to the text baseline."""
        ascent = pdfmetrics.getAscent(self.font_name(style), style.font_size)
        leading = self.line_height(style) - style.font_size
        return leading / 2.0 + ascent

    def layout_text(self, text: Optional[str], style: TextStyle, max_width: float) -> TextLayout:
        """Wrap ``text`` to ``max_width`` and measure every resulting line."""
        # Imported here to keep line_breaker free to import this module.
        from .line_breaker import LineBreaker

        lines = LineBreaker(self).break_text(text or "", max_width, style)
        return TextLayout(
            lines=lines,
            widths=[self.string_width(line, style) for line in lines],
            font_size=style.font_size,
            line_height=self.line_height(style),
        )
