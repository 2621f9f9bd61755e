"""

Style primitives shared by blocks, tables and the drawing surfaces.

Every block carries its own style; nothing is inherited from a global
"current font" the way an immediate-mode canvas would do it.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Optional, Tuple

Alignment = Literal["left", "center", "right"]


###############################################################################
# Colours
###############################################################################


@dataclass(frozen=True, slots=True)
class ColorSpec:
    """RGB colour in the 0-1 range."""

    r: float
    g: float
    b: float

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "ColorSpec":
        return cls(r / 255.0, g / 255.0, b / 255.0)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)


BLACK = ColorSpec(0.0, 0.0, 0.0)
WHITE = ColorSpec(1.0, 1.0, 1.0)
# Light blue band used for captions on invoices and purchase orders.
CAPTION_BLUE = ColorSpec.from_rgb255(217, 234, 247)
# Strong blue used by the custom invoice header bands.
HEADER_BLUE = ColorSpec.from_rgb255(41, 171, 226)


###############################################################################
# Text and box styles
###############################################################################


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font and paragraph settings for a run of text."""

    font_size: float = 9.0
    bold: bool = False
    color: ColorSpec = BLACK
    alignment: Alignment = "left"
    line_spacing: float = 1.2
    underline: bool = False

    @property
    def line_height(self) -> float:
        return self.font_size * self.line_spacing

    def with_(self, **changes) -> "TextStyle":
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class BoxStyle:
    """Border, fill and padding of a rectangle."""

    border_width: float = 0.5
    border_color: ColorSpec = BLACK
    fill: Optional[ColorSpec] = None
    padding: float = 3.0

    def with_(self, **changes) -> "BoxStyle":
        return replace(self, **changes)
