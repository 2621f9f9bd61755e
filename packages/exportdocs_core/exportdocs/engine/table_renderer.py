"""

Table renderer.

Handles:
- column width resolution (explicit widths, "auto" columns sharing what
  is left) checked once when the TableSpec is built
- row heights from wrapped cell text, colspans and a minimum row height
- cell images drawn centred in their cell, capped at MAX_CELL_IMAGE
- splitting between rows only, closing the segment border on each page
  and re-emitting the header rows at the top of every continuation page

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from ..exceptions import AssetError, LayoutOverflowError, TableSpecError
from .geometry import Rect
from .layout_primitives import BLACK, BoxStyle, ColorSpec, TextStyle
from .pagination_manager import EPSILON, FlowCursor
from .text_alignment import TextAlignmentEngine
from .text_metrics import TextLayout, TextMetricsEngine

logger = logging.getLogger(__name__)

WIDTH_TOLERANCE = 0.01
MAX_CELL_IMAGE = 50.0
CELL_IMAGE_INSET = 4.0


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """One table column. ``width=None`` means auto."""

    header: str = ""
    width: Optional[float] = None
    align: str = "left"


@dataclass(frozen=True, slots=True)
class Cell:
    """Cell value with optional per-cell overrides."""

    text: str = ""
    colspan: int = 1
    bold: Optional[bool] = None
    align: Optional[str] = None
    fill: Optional[ColorSpec] = None
    font_size: Optional[float] = None
    color: Optional[ColorSpec] = None
    image: Optional[bytes] = None


CellValue = Union[Cell, str, int, float, None]
Row = Sequence[CellValue]


def _as_cell(value: CellValue) -> Cell:
    if isinstance(value, Cell):
        return value
    if value is None:
        return Cell("")
    return Cell(str(value))


@dataclass(slots=True)
class TableSpec:
    """

    Column definitions plus header and body rows.

    Resolved column widths sum to ``width`` exactly; a spec that cannot
    satisfy that raises TableSpecError when it is constructed, before any
    drawing happens.

    """

    columns: Sequence[ColumnSpec]
    width: float
    body: Sequence[Row] = ()
    header_rows: Optional[Sequence[Row]] = None
    cell_padding: float = 3.0
    min_row_height: float = 0.0
    font_size: float = 8.0
    header_fill: Optional[ColorSpec] = None
    header_bold: bool = True
    header_color: ColorSpec = BLACK
    border: BoxStyle = field(default_factory=lambda: BoxStyle(border_width=0.5, padding=0.0))
    column_widths: Tuple[float, ...] = ()

    def __post_init__(self):
        if not self.columns:
            raise TableSpecError("Table needs at least one column")
        self.column_widths = resolve_column_widths(self.columns, self.width)
        if self.header_rows is None:
            if any(column.header for column in self.columns):
                self.header_rows = ([column.header for column in self.columns],)
            else:
                self.header_rows = ()
        for row in list(self.header_rows) + list(self.body):
            span = sum(_as_cell(value).colspan for value in row)
            if span > len(self.columns):
                raise TableSpecError(
                    "Row spans more columns than the table has",
                    f"{span} > {len(self.columns)}",
                )


def resolve_column_widths(columns: Sequence[ColumnSpec], table_width: float) -> Tuple[float, ...]:
    """Explicit widths are kept; auto columns split the remainder equally."""
    fixed = sum(column.width for column in columns if column.width is not None)
    auto = [column for column in columns if column.width is None]
    if auto:
        remaining = table_width - fixed
        if remaining <= 0:
            raise TableSpecError(
                "No width left for auto columns",
                f"fixed columns take {fixed:.2f} of {table_width:.2f}",
            )
        share = remaining / len(auto)
        widths = tuple(column.width if column.width is not None else share for column in columns)
    else:
        widths = tuple(float(column.width) for column in columns)
    total = sum(widths)
    if abs(total - table_width) > WIDTH_TOLERANCE:
        raise TableSpecError(
            "Column widths do not add up to the table width",
            f"{total:.2f} != {table_width:.2f}",
        )
    return widths


@dataclass(slots=True)
class _PlacedCell:
    cell: Cell
    x: float
    width: float
    style: TextStyle
    layout: TextLayout


class TableBlock:
    """Renders a TableSpec through the Flow Cursor, splitting between rows."""

    splittable = True

    def __init__(self, spec: TableSpec, metrics: Optional[TextMetricsEngine] = None, name: str = "table"):
        self.spec = spec
        self.metrics = metrics or TextMetricsEngine()
        self.name = name

    # ------------------------------------------------------------------ #
    # Measurement
    # ------------------------------------------------------------------ #

    def _cell_style(self, cell: Cell, column: ColumnSpec, header: bool) -> TextStyle:
        bold = cell.bold if cell.bold is not None else (header and self.spec.header_bold)
        align = cell.align or ("center" if header else column.align)
        return TextStyle(
            font_size=cell.font_size or self.spec.font_size,
            bold=bold,
            alignment=TextAlignmentEngine.normalize(align),
            color=cell.color or (self.spec.header_color if header else BLACK),
        )

    def place_row(self, row: Row, x: float, header: bool = False) -> Tuple[List[_PlacedCell], float]:
        """Lay out one row starting at ``x``; return the cells and the row height."""
        padding = self.spec.cell_padding
        placed: List[_PlacedCell] = []
        column_index = 0
        cells = [_as_cell(value) for value in row]
        # Short rows are padded with empty cells up to the column count.
        span = sum(cell.colspan for cell in cells)
        cells.extend(Cell("") for _ in range(len(self.spec.columns) - span))
        for cell in cells:
            end = column_index + cell.colspan
            width = sum(self.spec.column_widths[column_index:end])
            style = self._cell_style(cell, self.spec.columns[column_index], header)
            layout = self.metrics.layout_text(cell.text, style, max(0.0, width - 2 * padding))
            placed.append(_PlacedCell(cell, x, width, style, layout))
            x += width
            column_index = end
        height = max(cell.layout.height for cell in placed) + 2 * padding
        return placed, max(height, self.spec.min_row_height)

    def row_height(self, row: Row, header: bool = False) -> float:
        return self.place_row(row, 0.0, header)[1]

    def header_height(self) -> float:
        return sum(self.row_height(row, header=True) for row in self.spec.header_rows)

    def measure(self, width: float) -> float:
        return self.header_height() + sum(self.row_height(row) for row in self.spec.body)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def _draw_row(self, surface, placed: List[_PlacedCell], y: float, height: float, header: bool) -> None:
        padding = self.spec.cell_padding
        for item in placed:
            fill = item.cell.fill or (self.spec.header_fill if header else None)
            rect = Rect(item.x, y, item.width, height)
            surface.draw_rect(rect, self.spec.border.with_(fill=fill))
            if item.cell.image:
                self._draw_cell_image(surface, item.cell.image, rect)
            inner = Rect(item.x + padding, y + padding, max(0.0, item.width - 2 * padding), item.layout.height)
            positions = TextAlignmentEngine.line_positions(inner, item.layout.widths, item.style.alignment)
            baseline = inner.y + self.metrics.baseline_offset(item.style)
            for line, line_x in zip(item.layout.lines, positions):
                surface.draw_text(line_x, baseline, line, item.style)
                baseline += item.layout.line_height

    def _draw_cell_image(self, surface, data: bytes, cell: Rect) -> None:
        size = min(cell.width - CELL_IMAGE_INSET, cell.height - CELL_IMAGE_INSET, MAX_CELL_IMAGE)
        if size <= 0:
            return
        target = Rect(cell.x + (cell.width - size) / 2, cell.y + (cell.height - size) / 2, size, size)
        try:
            surface.draw_image(data, target, "cell")
        except AssetError as exc:
            logger.warning(f"Table '{self.name}': leaving image cell blank: {exc}")

    def _draw_headers(self, cursor: FlowCursor, x: float, y: float) -> float:
        for row in self.spec.header_rows:
            placed, height = self.place_row(row, x, header=True)
            self._draw_row(cursor.surface, placed, y, height, header=True)
            y += height
        return y

    def _close_segment(self, cursor: FlowCursor, x: float, top: float, bottom: float) -> None:
        if bottom - top > EPSILON:
            frame = Rect(x, top, self.spec.width, bottom - top)
            cursor.surface.draw_rect(frame, self.spec.border.with_(fill=None))

    def render(self, cursor: FlowCursor) -> float:
        if self.spec.width > cursor.width + WIDTH_TOLERANCE:
            raise TableSpecError(
                f"Table '{self.name}' is wider than the content area",
                f"{self.spec.width:.2f} > {cursor.width:.2f}",
            )
        x = cursor.left
        header_height = self.header_height()
        available = cursor.fresh_page_height()

        # Header plus first body row travel together.
        first = header_height + (self.row_height(self.spec.body[0]) if self.spec.body else 0.0)
        cursor.keep_together(min(first, available), self.name)

        segment_top = cursor.y
        y = self._draw_headers(cursor, x, cursor.y)
        for index, row in enumerate(self.spec.body):
            placed, height = self.place_row(row, x)
            if header_height + height > available + EPSILON:
                raise LayoutOverflowError(f"{self.name} row {index + 1}", header_height + height, available)
            if y + height > cursor.bottom + EPSILON:
                self._close_segment(cursor, x, segment_top, y)
                cursor.move_to(y)
                cursor.page_break()
                logger.debug(f"Table '{self.name}' continues on page {cursor.context.page_number} at row {index + 1}")
                segment_top = cursor.y
                y = self._draw_headers(cursor, x, cursor.y)
            self._draw_row(cursor.surface, placed, y, height, header=False)
            y += height
        self._close_segment(cursor, x, segment_top, y)
        return y
