"""

Drawing surfaces used by the layout engine.

The engine positions everything in top-down page coordinates and hands
finished primitives (text at a baseline, rectangles, lines, images) to a
surface. Two implementations exist:

- ReportLabSurface writes a real PDF into an in-memory buffer.
- RecordingSurface only records the primitives per page. It is used for
  dry runs and by tests that inspect layout decisions.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Protocol

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..engine.geometry import Rect, Size
from ..engine.layout_primitives import BoxStyle, ColorSpec, TextStyle
from ..engine.text_metrics import TextMetricsEngine
from ..exceptions import AssetError, RenderingError

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """Minimal drawing protocol the layout engine relies on."""

    page_size: Size

    def begin_page(self, index: int) -> None:
        ...

    def end_page(self) -> None:
        ...

    def draw_text(self, x: float, baseline: float, text: str, style: TextStyle) -> None:
        ...

    def draw_rect(self, rect: Rect, box: BoxStyle, stroke: bool = True) -> None:
        ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, width: float = 0.5,
                  color: Optional[ColorSpec] = None) -> None:
        ...

    def draw_image(self, data: bytes, rect: Rect, name: str = "image") -> None:
        ...

    def finish(self) -> Optional[bytes]:
        ...


class ReportLabSurface:
    """Surface backed by a ReportLab canvas writing to memory."""

    def __init__(
        self,
        page_size: Size,
        metrics: TextMetricsEngine,
        title: Optional[str] = None,
        creator: str = "exportdocs",
    ):
        self.page_size = page_size
        self.metrics = metrics
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(page_size.width, page_size.height))
        self._canvas.setCreator(creator)
        if title:
            self._canvas.setTitle(title)
        self._pages = 0

    def _y(self, top_down: float) -> float:
        return self.page_size.height - top_down

    def begin_page(self, index: int) -> None:
        self._pages += 1

    def end_page(self) -> None:
        self._canvas.showPage()

    def draw_text(self, x: float, baseline: float, text: str, style: TextStyle) -> None:
        if not text:
            return
        c = self._canvas
        c.setFont(self.metrics.font_name(style), style.font_size)
        c.setFillColorRGB(*style.color.as_tuple())
        c.drawString(x, self._y(baseline), text)
        if style.underline:
            width = self.metrics.string_width(text, style)
            c.setStrokeColorRGB(*style.color.as_tuple())
            c.setLineWidth(0.5)
            c.line(x, self._y(baseline + 1.0), x + width, self._y(baseline + 1.0))

    def draw_rect(self, rect: Rect, box: BoxStyle, stroke: bool = True) -> None:
        c = self._canvas
        fill = box.fill is not None
        do_stroke = stroke and box.border_width > 0
        if not fill and not do_stroke:
            return
        c.saveState()
        if fill:
            c.setFillColorRGB(*box.fill.as_tuple())
        if do_stroke:
            c.setLineWidth(box.border_width)
            c.setStrokeColorRGB(*box.border_color.as_tuple())
        c.rect(rect.x, self._y(rect.bottom), rect.width, rect.height,
               stroke=1 if do_stroke else 0, fill=1 if fill else 0)
        c.restoreState()

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, width: float = 0.5,
                  color: Optional[ColorSpec] = None) -> None:
        c = self._canvas
        c.saveState()
        c.setLineWidth(width)
        if color is not None:
            c.setStrokeColorRGB(*color.as_tuple())
        c.line(x1, self._y(y1), x2, self._y(y2))
        c.restoreState()

    def draw_image(self, data: bytes, rect: Rect, name: str = "image") -> None:
        try:
            reader = ImageReader(BytesIO(data))
            self._canvas.drawImage(
                reader,
                rect.x,
                self._y(rect.bottom),
                width=rect.width,
                height=rect.height,
                mask="auto",
            )
        except (OSError, ValueError) as exc:
            raise AssetError(name, str(exc)) from exc

    def finish(self) -> bytes:
        try:
            self._canvas.save()
        except Exception as exc:
            logger.error(f"Failed to write PDF: {exc}")
            raise RenderingError("Failed to write PDF", str(exc)) from exc
        return self._buffer.getvalue()


@dataclass(slots=True)
class DrawOp:
    """One recorded drawing primitive."""

    kind: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    text: str = ""
    style: Optional[TextStyle] = None


class RecordingSurface:
    """Surface that keeps primitives in memory instead of producing a PDF.

    A dry run draws onto one of these, so it has no effect on any output
    buffer. Tests use it to see what landed on which page.
    """

    def __init__(self, page_size: Size):
        self.page_size = page_size
        self.pages: List[List[DrawOp]] = []
        self.finished = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def begin_page(self, index: int) -> None:
        self.pages.append([])

    def end_page(self) -> None:
        pass

    def _record(self, op: DrawOp) -> None:
        if not self.pages:
            raise RuntimeError("Drawing before begin_page()")
        self.pages[-1].append(op)

    def draw_text(self, x: float, baseline: float, text: str, style: TextStyle) -> None:
        if text:
            self._record(DrawOp("text", x, baseline, text=text, style=style))

    def draw_rect(self, rect: Rect, box: BoxStyle, stroke: bool = True) -> None:
        self._record(DrawOp("rect", rect.x, rect.y, rect.width, rect.height))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, width: float = 0.5,
                  color: Optional[ColorSpec] = None) -> None:
        self._record(DrawOp("line", x1, y1, x2 - x1, y2 - y1))

    def draw_image(self, data: bytes, rect: Rect, name: str = "image") -> None:
        self._record(DrawOp("image", rect.x, rect.y, rect.width, rect.height, text=name))

    def finish(self) -> None:
        self.finished = True
        return None

    def texts(self, page_index: int) -> List[str]:
        return [op.text for op in self.pages[page_index] if op.kind == "text"]

    def ops(self, page_index: int, kind: Optional[str] = None) -> List[DrawOp]:
        return [op for op in self.pages[page_index] if kind is None or op.kind == kind]
