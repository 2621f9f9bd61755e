"""

Blocks: the renderable units an assembler hands to the Flow Cursor.

Each block knows how tall it is for a given width (``measure``) and how to
draw itself at the cursor position (``render``, returning the Y just below
what it drew). Only TextBlock and Spacer are splittable here; tables live
in ``table_renderer``.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from ..exceptions import AssetError, LayoutError
from .geometry import Rect
from .layout_primitives import BLACK, BoxStyle, ColorSpec, TextStyle
from .pagination_manager import FlowCursor
from .text_alignment import TextAlignmentEngine
from .text_metrics import TextLayout, TextMetricsEngine

logger = logging.getLogger(__name__)

Paragraph = Union[str, Tuple[str, TextStyle]]


def draw_layout(
    surface,
    metrics: TextMetricsEngine,
    layout: TextLayout,
    style: TextStyle,
    x: float,
    width: float,
    top: float,
) -> float:
    """Draw every line of ``layout`` starting at ``top``; return the Y below it."""
    rect = Rect(x, top, width, layout.height)
    positions = TextAlignmentEngine.line_positions(rect, layout.widths, style.alignment)
    baseline = top + metrics.baseline_offset(style)
    for line, line_x in zip(layout.lines, positions):
        surface.draw_text(line_x, baseline, line, style)
        baseline += layout.line_height
    return top + layout.height


def _paragraph_parts(paragraphs: Sequence[Paragraph], default: TextStyle) -> List[Tuple[str, TextStyle]]:
    parts = []
    for item in paragraphs:
        if isinstance(item, tuple):
            parts.append(item)
        else:
            parts.append((item, default))
    return parts


def layout_paragraphs(
    metrics: TextMetricsEngine,
    paragraphs: Sequence[Paragraph],
    default: TextStyle,
    width: float,
) -> List[Tuple[TextLayout, TextStyle]]:
    return [
        (metrics.layout_text(text, style, width), style)
        for text, style in _paragraph_parts(paragraphs, default)
    ]


@dataclass
class TextBlock:
    """Wrapped paragraph. Breaks between lines, never inside one."""

    text: str
    style: TextStyle = field(default_factory=TextStyle)
    indent: float = 0.0
    metrics: Optional[TextMetricsEngine] = None
    name: str = "text"
    splittable: bool = True

    def __post_init__(self):
        if self.metrics is None:
            self.metrics = TextMetricsEngine()

    def layout(self, width: float) -> TextLayout:
        return self.metrics.layout_text(self.text, self.style, max(0.0, width - self.indent))

    def measure(self, width: float) -> float:
        return self.layout(width).height

    def render(self, cursor: FlowCursor) -> float:
        layout = self.layout(cursor.width)
        x = cursor.left + self.indent
        width = cursor.width - self.indent
        rect_positions = TextAlignmentEngine.line_positions(
            Rect(x, 0, width, 0), layout.widths, self.style.alignment
        )
        offset = self.metrics.baseline_offset(self.style)
        for line, line_x in zip(layout.lines, rect_positions):
            cursor.keep_together(layout.line_height, f"{self.name} line")
            cursor.surface.draw_text(line_x, cursor.y + offset, line, self.style)
            cursor.move(layout.line_height)
        return cursor.y


@dataclass
class Spacer:
    """Vertical gap. Swallowed at the end of a page rather than carried over."""

    height: float
    name: str = "spacer"
    splittable: bool = True

    def measure(self, width: float) -> float:
        return self.height

    def render(self, cursor: FlowCursor) -> float:
        return min(cursor.y + self.height, cursor.bottom)


@dataclass
class Rule:
    """Horizontal line across the content width."""

    thickness: float = 0.5
    space_before: float = 2.0
    space_after: float = 2.0
    color: ColorSpec = BLACK
    name: str = "rule"
    splittable: bool = False

    def measure(self, width: float) -> float:
        return self.space_before + self.thickness + self.space_after

    def render(self, cursor: FlowCursor) -> float:
        y = cursor.y + self.space_before + self.thickness / 2
        cursor.surface.draw_line(cursor.left, y, cursor.left + cursor.width, y, self.thickness, self.color)
        return cursor.y + self.measure(cursor.width)


@dataclass
class Banner:
    """Single title band: text centred (or aligned) inside an optionally filled box."""

    text: str
    style: TextStyle = field(default_factory=lambda: TextStyle(font_size=12, bold=True, alignment="center"))
    box: BoxStyle = field(default_factory=lambda: BoxStyle(border_width=0.0, padding=4.0))
    metrics: Optional[TextMetricsEngine] = None
    name: str = "banner"
    splittable: bool = False

    def __post_init__(self):
        if self.metrics is None:
            self.metrics = TextMetricsEngine()

    def measure(self, width: float) -> float:
        inner = max(0.0, width - 2 * self.box.padding)
        return self.metrics.layout_text(self.text, self.style, inner).height + 2 * self.box.padding

    def render(self, cursor: FlowCursor) -> float:
        height = self.measure(cursor.width)
        rect = Rect(cursor.left, cursor.y, cursor.width, height)
        cursor.surface.draw_rect(rect, self.box)
        inner = rect.inset(self.box.padding)
        layout = self.metrics.layout_text(self.text, self.style, inner.width)
        draw_layout(cursor.surface, self.metrics, layout, self.style, inner.x, inner.width, inner.y)
        return rect.bottom


@dataclass
class LabeledBox:
    """

    Caption band followed by a bordered rectangle holding wrapped text.

    ``body`` is a sequence of paragraphs; a plain string uses
    ``value_style``, a ``(text, style)`` pair overrides it. The box is
    never split across pages.

    """

    caption: Optional[str]
    body: Sequence[Paragraph] = ()
    caption_style: TextStyle = field(default_factory=lambda: TextStyle(font_size=8, bold=True))
    value_style: TextStyle = field(default_factory=lambda: TextStyle(font_size=8))
    caption_fill: Optional[ColorSpec] = None
    box: BoxStyle = field(default_factory=BoxStyle)
    min_height: float = 0.0
    metrics: Optional[TextMetricsEngine] = None
    name: str = "labeled box"
    splittable: bool = False

    def __post_init__(self):
        if self.metrics is None:
            self.metrics = TextMetricsEngine()
        if isinstance(self.body, str):
            self.body = (self.body,)

    def _inner(self, width: float) -> float:
        return max(0.0, width - 2 * self.box.padding)

    def caption_height(self, width: float) -> float:
        if not self.caption:
            return 0.0
        layout = self.metrics.layout_text(self.caption, self.caption_style, self._inner(width))
        return layout.height + 2 * self.box.padding

    def body_height(self, width: float) -> float:
        layouts = layout_paragraphs(self.metrics, self.body, self.value_style, self._inner(width))
        text_height = sum(layout.height for layout, _ in layouts)
        return max(text_height + 2 * self.box.padding, self.min_height)

    def measure(self, width: float) -> float:
        return self.caption_height(width) + self.body_height(width)

    def draw_at(self, surface, x: float, y: float, width: float, height: Optional[float] = None) -> float:
        """Draw the box at an explicit position, stretched to ``height`` if given."""
        total = max(height or 0.0, self.measure(width))
        padding = self.box.padding
        caption_h = self.caption_height(width)
        if caption_h:
            band = Rect(x, y, width, caption_h)
            surface.draw_rect(band, self.box.with_(fill=self.caption_fill))
            layout = self.metrics.layout_text(self.caption, self.caption_style, self._inner(width))
            draw_layout(surface, self.metrics, layout, self.caption_style, x + padding, self._inner(width), y + padding)
        body_rect = Rect(x, y + caption_h, width, total - caption_h)
        surface.draw_rect(body_rect, self.box.with_(fill=None))
        top = body_rect.y + padding
        for layout, style in layout_paragraphs(self.metrics, self.body, self.value_style, self._inner(width)):
            top = draw_layout(surface, self.metrics, layout, style, x + padding, self._inner(width), top)
        return y + total

    def render(self, cursor: FlowCursor) -> float:
        return self.draw_at(cursor.surface, cursor.left, cursor.y, cursor.width)


@dataclass
class BoxRow:
    """Labeled boxes side by side at fixed fractions of the width, with one common height."""

    boxes: Sequence[LabeledBox]
    fractions: Optional[Sequence[float]] = None
    name: str = "box row"
    splittable: bool = False

    def __post_init__(self):
        if not self.boxes:
            raise LayoutError("BoxRow needs at least one box")
        if self.fractions is None:
            self.fractions = tuple(1.0 / len(self.boxes) for _ in self.boxes)
        if len(self.fractions) != len(self.boxes):
            raise LayoutError(
                "BoxRow fractions do not match boxes",
                f"{len(self.fractions)} fractions for {len(self.boxes)} boxes",
            )
        if abs(sum(self.fractions) - 1.0) > 1e-6:
            raise LayoutError("BoxRow fractions must sum to 1", f"got {sum(self.fractions):.4f}")

    def widths(self, width: float) -> List[float]:
        return [width * fraction for fraction in self.fractions]

    def measure(self, width: float) -> float:
        return max(box.measure(w) for box, w in zip(self.boxes, self.widths(width)))

    def render(self, cursor: FlowCursor) -> float:
        height = self.measure(cursor.width)
        x = cursor.left
        for box, width in zip(self.boxes, self.widths(cursor.width)):
            box.draw_at(cursor.surface, x, cursor.y, width, height)
            x += width
        return cursor.y + height


@dataclass
class SignatureBlock:
    """

    Closing signature area: lines above the signature, an optional
    signature image and the lines under it. Kept on one page.

    """

    lines_above: Sequence[str] = ()
    lines_below: Sequence[str] = ()
    image: Optional[bytes] = None
    image_size: Tuple[float, float] = (80.0, 40.0)
    gap: float = 30.0
    width: float = 200.0
    align: str = "right"
    style: TextStyle = field(default_factory=lambda: TextStyle(font_size=9, bold=True))
    metrics: Optional[TextMetricsEngine] = None
    name: str = "signature"
    splittable: bool = False

    def __post_init__(self):
        if self.metrics is None:
            self.metrics = TextMetricsEngine()

    def _middle(self) -> float:
        return max(self.gap, self.image_size[1] + 4.0) if self.image else self.gap

    def measure(self, width: float) -> float:
        width = min(self.width, width)
        text = sum(
            self.metrics.layout_text(line, self.style, width).height
            for line in (*self.lines_above, *self.lines_below)
        )
        return text + self._middle()

    def render(self, cursor: FlowCursor) -> float:
        width = min(self.width, cursor.width)
        if self.align == "right":
            x = cursor.left + cursor.width - width
        else:
            x = cursor.left
        style = self.style.with_(alignment="center" if self.align == "right" else "left")
        y = cursor.y
        for line in self.lines_above:
            layout = self.metrics.layout_text(line, style, width)
            y = draw_layout(cursor.surface, self.metrics, layout, style, x, width, y)
        middle = self._middle()
        if self.image:
            image_w, image_h = self.image_size
            image_x = x + (width - image_w) / 2 if style.alignment == "center" else x
            try:
                cursor.surface.draw_image(self.image, Rect(image_x, y + 2.0, image_w, image_h), "signature")
            except AssetError as exc:
                logger.warning(f"Skipping signature image: {exc}")
        y += middle
        for line in self.lines_below:
            layout = self.metrics.layout_text(line, style, width)
            y = draw_layout(cursor.surface, self.metrics, layout, style, x, width, y)
        return y


@dataclass
class BlockGroup:
    """Several blocks that must land on the same page."""

    blocks: Sequence[object]
    name: str = "group"
    splittable: bool = False

    def measure(self, width: float) -> float:
        return sum(block.measure(width) for block in self.blocks)

    def render(self, cursor: FlowCursor) -> float:
        for block in self.blocks:
            cursor.move_to(block.render(cursor))
        return cursor.y

