"""Geometry primitives and helpers for layout calculations.

All values are PDF points. Vertical positions used by the layout engine
are measured downwards from the top edge of the page; only the drawing
surface converts them to PDF's bottom-up coordinate system.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


POINTS_PER_INCH = 72.0
POINTS_PER_MM = POINTS_PER_INCH / 25.4

# ISO A4 in points, the only paper size the templates are drawn for.
A4_WIDTH = 595.28
A4_HEIGHT = 841.89


@dataclass(slots=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_tuple(cls, value: Iterable[float]) -> "Size":
        width, height = value
        return cls(float(width), float(height))


@dataclass(slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Ensure non-negative dimensions."""
        if self.width < 0:
            self.width = abs(self.width)
        if self.height < 0:
            self.height = abs(self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, padding: float) -> "Rect":
        """Return the rectangle shrunk by ``padding`` on every side."""
        return Rect(
            x=self.x + padding,
            y=self.y + padding,
            width=max(0.0, self.width - 2 * padding),
            height=max(0.0, self.height - 2 * padding),
        )


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @classmethod
    def symmetric(cls, vertical: float, horizontal: float) -> "Margins":
        return cls(top=vertical, bottom=vertical, left=horizontal, right=horizontal)


def mm_to_points(value: float) -> float:
    return float(value) * POINTS_PER_MM
