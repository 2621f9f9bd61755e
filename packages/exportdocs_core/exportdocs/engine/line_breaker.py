"""Greedy word-wrap used by every text-bearing block."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .layout_primitives import TextStyle
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)


class LineBreaker:
    """Simple greedy line breaker.

    Breaks only at whitespace. A word wider than the available width is
    placed alone on its own line and allowed to overflow.
    """

    def __init__(self, metrics_engine: TextMetricsEngine) -> None:
        self.metrics_engine = metrics_engine

    def break_text(self, text: str, max_width: float, style: TextStyle) -> List[str]:
        if not text:
            return [""]

        lines: List[str] = []
        # Explicit newlines always start a new line; blank ones are kept.
        for paragraph in text.replace("\r\n", "\n").split("\n"):
            lines.extend(self._break_paragraph(paragraph, max_width, style))
        return lines

    def _break_paragraph(self, paragraph: str, max_width: float, style: TextStyle) -> List[str]:
        words = paragraph.split()
        if not words:
            return [""]

        lines: List[str] = []
        current_line = ""

        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if self.metrics_engine.string_width(candidate, style) <= max_width:
                current_line = candidate
                continue

            if current_line:
                lines.append(current_line)
            current_line = word

            if self.metrics_engine.string_width(word, style) > max_width:
                logger.debug(f"Word {word[:30]!r} wider than {max_width:.2f}pt, placed on its own line")
                lines.append(word)
                current_line = ""

        if current_line:
            lines.append(current_line)

        return lines


def wrap(
    text: str,
    max_width: float,
    font_size: float,
    bold: bool = False,
    font_family: str = "Helvetica",
) -> List[str]:
    """Wrap ``text`` into lines no wider than ``max_width`` at ``font_size``."""
    style = TextStyle(font_size=font_size, bold=bold)
    return LineBreaker(TextMetricsEngine(font_family)).break_text(text, max_width, style)


def text_height(lines: Sequence[str], font_size: float, line_spacing: float = 1.2) -> float:
    """Total height of ``lines`` set at ``font_size`` with ``line_spacing``."""
    return len(lines) * font_size * line_spacing
