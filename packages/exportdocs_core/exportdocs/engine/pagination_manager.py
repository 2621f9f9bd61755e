"""

Pagination manager for the document flow.

Handles:
- the Flow Cursor: vertical position, page breaks, keep-together requests
- persistent page decorations (letterhead header/footer images and the
  running title of continuation pages), redrawn on every new page

Blocks are laid out strictly top to bottom. The cursor looks at one block
at a time and never reorders or looks ahead.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from ..exceptions import AssetError, LayoutError, LayoutOverflowError
from .geometry import Rect
from .layout_primitives import TextStyle
from .page_engine import PageConfig, PageContext
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)

EPSILON = 0.01

WITHIN_PAGE = "within_page"
AT_PAGE_BOUNDARY = "at_page_boundary"

RUNNING_TITLE_BAND = 16.0


class Block(Protocol):
    """Renderable unit driven by the Flow Cursor."""

    name: str
    splittable: bool

    def measure(self, width: float) -> float:
        ...

    def render(self, cursor: "FlowCursor") -> float:
        ...


@dataclass(slots=True)
class PageDecorations:
    """

    Decorations repeated on every page.

    Handles different page variants:
    - every page: letterhead header and footer images
    - continuation pages (page 2 onwards): running title

    An image that fails to draw is dropped for the rest of the document
    with a warning; rendering continues without it.

    """

    header_image: Optional[bytes] = None
    footer_image: Optional[bytes] = None
    header_height: float = 0.0
    footer_height: float = 0.0
    running_title: Optional[str] = None
    title_style: TextStyle = field(default_factory=lambda: TextStyle(font_size=9, bold=True, alignment="center"))

    def page_config(self, base: PageConfig) -> PageConfig:
        """Reserve room for the decorations on top of ``base``."""
        header = self.header_height if self.header_image else 0.0
        footer = self.footer_height if self.footer_image else 0.0
        continuation = header + (RUNNING_TITLE_BAND if self.running_title else 0.0)
        return PageConfig(
            page_size=base.page_size,
            base_margins=base.base_margins,
            header_height=continuation,
            footer_height=footer,
            header_height_first=header,
        )

    def draw(self, surface, metrics: TextMetricsEngine, context: PageContext) -> None:
        width = context.page_width
        if self.header_image:
            try:
                surface.draw_image(self.header_image, Rect(0, 0, width, self.header_height), "header")
            except AssetError as exc:
                logger.warning(f"Skipping letterhead header: {exc}")
                self.header_image = None
        if self.footer_image:
            try:
                surface.draw_image(
                    self.footer_image,
                    Rect(0, context.page_height - self.footer_height, width, self.footer_height),
                    "footer",
                )
            except AssetError as exc:
                logger.warning(f"Skipping letterhead footer: {exc}")
                self.footer_image = None
        if self.running_title and context.page_index > 0:
            self._draw_running_title(surface, metrics, context)

    def _draw_running_title(self, surface, metrics: TextMetricsEngine, context: PageContext) -> None:
        band_top = context.content_top - RUNNING_TITLE_BAND
        text = f"{self.running_title} (continued)"
        text_width = metrics.string_width(text, self.title_style)
        x = context.content_left + (context.content_width - text_width) / 2
        baseline = band_top + metrics.baseline_offset(self.title_style)
        surface.draw_text(max(context.content_left, x), baseline, text, self.title_style)
        page_label = f"Page {context.page_number}"
        label_style = self.title_style.with_(bold=False, font_size=7)
        label_x = context.content_left + context.content_width - metrics.string_width(page_label, label_style)
        surface.draw_text(label_x, baseline, page_label, label_style)


class FlowCursor:
    """

    Tracks the vertical position of the document flow and breaks pages.

    States are ``at_page_boundary`` (nothing drawn yet on the current page)
    and ``within_page``. Every render owns exactly one cursor, one surface
    and one PageContext.

    """

    def __init__(
        self,
        surface,
        page_config: PageConfig,
        metrics: Optional[TextMetricsEngine] = None,
        decorations: Optional[PageDecorations] = None,
    ):
        self.surface = surface
        self.metrics = metrics or TextMetricsEngine()
        self.decorations = decorations or PageDecorations()
        self.context = PageContext(config=self.decorations.page_config(page_config))
        self.state = AT_PAGE_BOUNDARY
        self._started = False
        self._finished = False

    # ------------------------------------------------------------------ #
    # Position
    # ------------------------------------------------------------------ #

    @property
    def y(self) -> float:
        return self.context.cursor_y

    @property
    def left(self) -> float:
        return self.context.content_left

    @property
    def width(self) -> float:
        return self.context.content_width

    @property
    def bottom(self) -> float:
        return self.context.content_bottom

    @property
    def remaining(self) -> float:
        return self.context.remaining

    @property
    def page_count(self) -> int:
        return self.context.page_index + 1 if self._started else 0

    def fits(self, height: float) -> bool:
        return self.context.cursor_y + height <= self.context.content_bottom + EPSILON

    def move_to(self, y: float) -> None:
        self.context.cursor_y = y
        self.state = WITHIN_PAGE

    def move(self, dy: float) -> None:
        self.move_to(self.context.cursor_y + dy)

    # ------------------------------------------------------------------ #
    # Flow
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        if self._started:
            raise LayoutError("Flow already started")
        self._started = True
        self._open_page()

    def advance(self, block: Block) -> float:
        """Place ``block`` at the current position, breaking the page if needed."""
        if not self._started:
            self.start()
        if not block.splittable:
            self.keep_together(block.measure(self.width), block.name)
        new_y = block.render(self)
        self.move_to(new_y)
        return new_y

    def keep_together(self, height: float, name: str = "group") -> None:
        """Make sure ``height`` points are free on the current page.

        Breaks the page when they are not. Raises LayoutOverflowError when
        even an empty continuation page could not hold them.
        """
        if self.fits(height):
            return
        available = self.fresh_page_height()
        if height > available + EPSILON:
            raise LayoutOverflowError(name, height, available)
        self.page_break()

    def fresh_page_height(self) -> float:
        """Content height offered by the next page."""
        return self.context.config.get_content_height(self.context.page_number + 1)

    def page_break(self) -> None:
        logger.debug(
            f"Page break after page {self.context.page_number} at y={self.context.cursor_y:.2f}"
        )
        self.surface.end_page()
        self.context.page_index += 1
        self._open_page()

    def finish(self) -> int:
        """Close the last page and return the number of pages produced."""
        if not self._started:
            self.start()
        if self._finished:
            return self.page_count
        self.surface.end_page()
        self._finished = True
        return self.page_count

    def _open_page(self) -> None:
        self.surface.begin_page(self.context.page_index)
        self.context.cursor_y = self.context.content_top
        self.decorations.draw(self.surface, self.metrics, self.context)
        self.state = AT_PAGE_BOUNDARY
