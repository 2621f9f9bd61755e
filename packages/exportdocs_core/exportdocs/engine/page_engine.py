"""Page engine: page geometry with pre-calculated header/footer reservations.

This module handles:
- Pre-calculation of the content area once letterhead bands are reserved
- A different header reservation for the first page (running titles
  only appear on continuation pages)
- The mutable PageContext owned by a single Flow Cursor

Vertical positions are top-down: ``content_top`` is the first usable Y
below the header band and ``content_bottom`` the last usable Y above the
footer band.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .geometry import Margins, Size


@dataclass(slots=True)
class PageConfig:
    """Configuration for page creation."""
    page_size: Size
    base_margins: Margins
    header_height: float = 0.0
    footer_height: float = 0.0
    header_height_first: Optional[float] = None  # Different header for first page

    def get_header_height(self, page_number: int) -> float:
        """Header reservation for a 1-based ``page_number``."""
        if page_number == 1 and self.header_height_first is not None:
            return self.header_height_first
        return self.header_height

    def get_footer_height(self, page_number: int) -> float:
        return self.footer_height

    def get_content_top(self, page_number: int) -> float:
        return self.base_margins.top + self.get_header_height(page_number)

    def get_content_bottom(self, page_number: int) -> float:
        return self.page_size.height - self.base_margins.bottom - self.get_footer_height(page_number)

    def get_content_height(self, page_number: int) -> float:
        return self.get_content_bottom(page_number) - self.get_content_top(page_number)

    @property
    def content_left(self) -> float:
        return self.base_margins.left

    @property
    def content_width(self) -> float:
        return self.page_size.width - self.base_margins.left - self.base_margins.right


@dataclass(slots=True)
class PageContext:
    """Where the flow currently is.

    Only the Flow Cursor writes to this object. Blocks read it to learn the
    content column and the remaining height on the current page.
    """

    config: PageConfig
    page_index: int = 0
    cursor_y: float = 0.0

    @property
    def page_number(self) -> int:
        return self.page_index + 1

    @property
    def page_width(self) -> float:
        return self.config.page_size.width

    @property
    def page_height(self) -> float:
        return self.config.page_size.height

    @property
    def content_left(self) -> float:
        return self.config.content_left

    @property
    def content_width(self) -> float:
        return self.config.content_width

    @property
    def content_top(self) -> float:
        return self.config.get_content_top(self.page_number)

    @property
    def content_bottom(self) -> float:
        return self.config.get_content_bottom(self.page_number)

    @property
    def remaining(self) -> float:
        return max(0.0, self.content_bottom - self.cursor_y)
