"""

Base class for document assemblers.

An assembler is a template: an ordered tuple of section names, each
backed by a ``section_<name>`` method that returns blocks. The base class
validates the record, builds the blocks and drives a fresh Flow Cursor
over a fresh surface for every pass, so a dry run and the committed render
never share layout state.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..assets import DocumentAssets
from ..config import RenderConfig
from ..engine.blocks import Banner, BoxRow, LabeledBox, Paragraph, Spacer, TextBlock
from ..engine.layout_primitives import BoxStyle, ColorSpec, TextStyle
from ..engine.page_engine import PageConfig
from ..engine.pagination_manager import FlowCursor, PageDecorations
from ..engine.table_renderer import ColumnSpec, Row, TableBlock, TableSpec
from ..engine.text_metrics import TextMetricsEngine
from ..exceptions import ExportDocsError, MalformedValueError, MissingEntityError
from ..pdf.surface import RecordingSurface, ReportLabSurface
from ..text.amount_words import normalize_currency

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def safe_filename_part(value: str) -> str:
    """Replace characters that are not allowed in file names with ``_``."""
    return UNSAFE_FILENAME_CHARS.sub("_", value or "")


@dataclass(frozen=True, slots=True)
class LayoutParams:
    """Formatting parameters chosen per render."""

    name: str = "generous"
    cell_padding: float = 5.0


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Outcome of a dry run."""

    params: LayoutParams
    page_count: int


@dataclass(slots=True)
class BuildContext:
    """Everything a section builder needs, and shortcuts for common blocks."""

    record: Any
    params: LayoutParams
    metrics: TextMetricsEngine
    config: RenderConfig
    assets: DocumentAssets

    @property
    def width(self) -> float:
        return self.config.content_width

    def style(self, size: float = 9.0, bold: bool = False, **changes) -> TextStyle:
        return TextStyle(font_size=size, bold=bold, line_spacing=self.config.line_spacing, **changes)

    def text(self, text: str, size: float = 9.0, bold: bool = False, name: str = "text", **changes) -> TextBlock:
        return TextBlock(text, self.style(size, bold, **changes), metrics=self.metrics, name=name)

    def banner(
        self,
        text: str,
        size: float = 12.0,
        fill: Optional[ColorSpec] = None,
        border: float = 0.0,
        **changes,
    ) -> Banner:
        changes.setdefault("alignment", "center")
        return Banner(
            text,
            self.style(size, True, **changes),
            BoxStyle(border_width=border, fill=fill, padding=self.params.cell_padding),
            metrics=self.metrics,
            name=f"banner '{text[:20]}'",
        )

    def box(
        self,
        caption: Optional[str],
        body: Sequence[Paragraph] = (),
        size: float = 8.0,
        caption_fill: Optional[ColorSpec] = None,
        caption_color: Optional[ColorSpec] = None,
        min_height: float = 0.0,
        name: str = "labeled box",
    ) -> LabeledBox:
        caption_style = self.style(size, True)
        if caption_color is not None:
            caption_style = caption_style.with_(color=caption_color)
        return LabeledBox(
            caption,
            tuple(body),
            caption_style=caption_style,
            value_style=self.style(size),
            caption_fill=caption_fill,
            box=BoxStyle(padding=self.params.cell_padding),
            min_height=min_height,
            metrics=self.metrics,
            name=name,
        )

    def row(self, boxes: Sequence[LabeledBox], fractions: Optional[Sequence[float]] = None, name: str = "box row") -> BoxRow:
        return BoxRow(tuple(boxes), tuple(fractions) if fractions else None, name=name)

    def table(
        self,
        columns: Sequence[ColumnSpec],
        body: Sequence[Row],
        name: str = "table",
        **options,
    ) -> TableBlock:
        options.setdefault("cell_padding", self.params.cell_padding)
        spec = TableSpec(columns=tuple(columns), width=options.pop("width", self.width), body=tuple(body), **options)
        return TableBlock(spec, self.metrics, name=name)

    def gap(self, height: float = 6.0) -> Spacer:
        return Spacer(height)


class DocumentAssembler:
    """

    Shared driver for every document template.

    Subclasses declare:
    - ``kind``: registry key, e.g. ``"annexure"``
    - ``title``: document title, also the running title on later pages
    - ``filename_prefix``: prefix of the generated file name
    - ``sections``: ordered section names
    - ``required_entities``: record attributes that must be present
    - ``priced``: whether amounts are printed, so the record currency
      must be one that can be written out in words

    """

    kind: str = ""
    title: str = ""
    filename_prefix: str = ""
    sections: Tuple[str, ...] = ()
    required_entities: Tuple[str, ...] = ()
    uses_letterhead: bool = False
    priced: bool = False

    def __init__(self, config: Optional[RenderConfig] = None, assets: Optional[DocumentAssets] = None):
        self.config = config or RenderConfig()
        self.assets = assets or DocumentAssets()

    # ------------------------------------------------------------------ #
    # Template
    # ------------------------------------------------------------------ #

    def validate(self, record: Any) -> None:
        """
        Check the record before anything is drawn.

        Raises MissingEntityError for the first absent required entity and,
        for priced documents, MalformedValueError for an unknown currency.
        """
        for entity in self.required_entities:
            if getattr(record, entity, None) is None:
                raise MissingEntityError(entity, self.kind)
        if self.priced:
            try:
                normalize_currency(record.currency)
            except ValueError as exc:
                raise MalformedValueError("currency", record.currency, str(exc)) from exc

    def default_params(self) -> LayoutParams:
        return LayoutParams("generous", self.config.generous_padding)

    def compact_params(self) -> LayoutParams:
        return LayoutParams("compact", self.config.compact_padding)

    def choose_params(self, record: Any) -> LayoutParams:
        return self.default_params()

    def build_blocks(self, record: Any, params: LayoutParams, metrics: TextMetricsEngine) -> List[Any]:
        context = BuildContext(record, params, metrics, self.config, self.assets)
        blocks: List[Any] = []
        for section in self.sections:
            builder = getattr(self, f"section_{section}", None)
            if builder is None:
                raise ExportDocsError(f"Template '{self.kind}' has no builder for section '{section}'")
            blocks.extend(builder(context))
        return blocks

    # ------------------------------------------------------------------ #
    # Passes
    # ------------------------------------------------------------------ #

    def page_config(self) -> PageConfig:
        return PageConfig(page_size=self.config.page_size, base_margins=self.config.margins)

    def decorations(self) -> PageDecorations:
        decorations = PageDecorations(running_title=self.title or None)
        if self.uses_letterhead:
            decorations.header_image = self.assets.header_image
            decorations.footer_image = self.assets.footer_image
            decorations.header_height = self.config.letterhead_header_height
            decorations.footer_height = self.config.letterhead_footer_height
        return decorations

    def compose(self, record: Any, params: LayoutParams, surface) -> int:
        """Lay the record out onto ``surface``; return the page count."""
        metrics = TextMetricsEngine(self.config.font_family)
        cursor = FlowCursor(surface, self.page_config(), metrics, self.decorations())
        cursor.start()
        for block in self.build_blocks(record, params, metrics):
            cursor.advance(block)
        return cursor.finish()

    def dry_run(self, record: Any, params: LayoutParams) -> RenderPlan:
        """Lay out onto a recording surface and report the page count."""
        surface = RecordingSurface(self.config.page_size)
        page_count = self.compose(record, params, surface)
        return RenderPlan(params, page_count)

    def render(self, record: Any) -> bytes:
        self.validate(record)
        params = self.choose_params(record)
        surface = ReportLabSurface(
            self.config.page_size,
            TextMetricsEngine(self.config.font_family),
            title=f"{self.title} {self.number(record)}".strip(),
            creator=self.config.producer,
        )
        page_count = self.compose(record, params, surface)
        data = surface.finish()
        logger.info(
            f"Rendered {self.kind} {self.number(record)!r}: {page_count} page(s), "
            f"{params.name} layout, {len(data)} bytes"
        )
        return data

    # ------------------------------------------------------------------ #
    # Naming
    # ------------------------------------------------------------------ #

    @staticmethod
    def number(record: Any) -> str:
        return getattr(record, "number", "") or ""

    def filename(self, record: Any) -> str:
        return f"{self.filename_prefix}{safe_filename_part(self.number(record))}.pdf"
