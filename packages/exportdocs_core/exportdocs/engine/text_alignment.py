"""

TextAlignmentEngine - calculating X position for text relative to column width.

Supports:
- left: left alignment (default)
- center: centering
- right: right alignment

Positions are computed per line: wrapped lines have different widths, so a
centred paragraph needs a different X for each of them.

"""

from typing import List, Sequence

from .geometry import Rect


class TextAlignmentEngine:
    """Calculates X positions of text lines inside a box."""

    @staticmethod
    def calculate_x(
        rect: Rect,
        text_width: float,
        alignment: str = "left"
    ) -> float:
        """

        Calculates X position for text based on alignment.

        Args:
        rect: Rect of text area
        text_width: Text width in points
        alignment: Alignment ("left", "center", "right")

        Returns:
        X position for text

        """
        alignment = TextAlignmentEngine.normalize(alignment)

        if alignment == "center":
            x = rect.x + (rect.width - text_width) / 2
            return max(rect.x, x)  # Don't go beyond left edge

        if alignment == "right":
            x = rect.x + rect.width - text_width
            return max(rect.x, x)  # Don't go beyond left edge

        return rect.x

    @staticmethod
    def line_positions(rect: Rect, line_widths: Sequence[float], alignment: str = "left") -> List[float]:
        """X position of every line of a wrapped paragraph."""
        return [TextAlignmentEngine.calculate_x(rect, width, alignment) for width in line_widths]

    @staticmethod
    def normalize(alignment: str) -> str:
        alignment = str(alignment or "left").lower()
        if alignment in ("center", "centre", "middle", "c"):
            return "center"
        if alignment in ("right", "end", "r"):
            return "right"
        return "left"
