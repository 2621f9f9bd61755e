"""

Packing list for an export shipment.

Shares the header grids of the custom invoice but prints quantities and
weights instead of prices: products grouped across containers, free
samples in their own block, then one row per container.

"""

from __future__ import annotations

from typing import List, Tuple

from ..engine.layout_primitives import CAPTION_BLUE
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import ExportDocumentRecord
from ..totals import ZERO, format_amount
from ..utils.values import text_or
from .base import BuildContext
from .custom_invoice import DRAWBACK_LINE, CustomInvoiceAssembler, group_lines

MIN_BLANK_ROWS = 5
SAMPLES_CAPTION = "Free Of Cost Samples"
ORIGIN_LINE = "Certified That Goods Are Of Indian Origin"


class PackingListAssembler(CustomInvoiceAssembler):
    kind = "packing_list"
    title = "PACKING LIST"
    filename_prefix = "Packing_List_"
    sections = (
        "title",
        "exporter",
        "consignee",
        "shipment",
        "products",
        "containers",
        "statements",
        "declaration",
    )
    required_entities = ("exporter", "client")
    priced = False
    exporter_fractions = (0.4, 0.4, 0.2)

    def marks(self, record: ExportDocumentRecord) -> Tuple[str, str]:
        return "Marks & Nos.", f"{len(record.containers)} Container(s)"

    def section_title(self, ctx: BuildContext) -> List:
        return [ctx.text(self.title, 20, True, name="title", alignment="center"), ctx.gap(6)]

    def section_consignee(self, ctx: BuildContext) -> List:
        client = ctx.record.client
        party = [f"{client.company_name}\n{client.postal_lines}".strip()]
        return [
            ctx.row(
                [
                    self.blue_box(ctx, "Consignee:-", party, "consignee", min_height=35),
                    self.blue_box(ctx, "Buyer (If Not Consignee)", party, "buyer", min_height=35),
                ],
                name="consignee",
            )
        ]

    def section_products(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        lines = group_lines(record, by_rate=False)
        products = [line for line in lines if not line.is_sample]
        samples = [line for line in lines if line.is_sample]
        columns = [
            ColumnSpec("HSN Code", 70, "center"),
            ColumnSpec("Sr. No.", 40, "center"),
            ColumnSpec("Description Of Goods", None, "left"),
            ColumnSpec("Boxes", 50, "right"),
            ColumnSpec("Sq.Mtr", 60, "right"),
            ColumnSpec("Net Wt. (Kgs)", 65, "right"),
            ColumnSpec("Gross Wt. (Kgs)", 65, "right"),
        ]

        def row(index: int, line) -> list:
            return [
                line.hsn_code,
                str(index),
                line.description,
                str(line.boxes),
                format_amount(line.sqm),
                format_amount(line.net_weight),
                format_amount(line.gross_weight),
            ]

        body = [row(index, line) for index, line in enumerate(products, start=1)]
        if samples:
            body.append([Cell(SAMPLES_CAPTION, colspan=len(columns), bold=True, align="center")])
            body.extend(row(index, line) for index, line in enumerate(samples, start=len(products) + 1))
        body.extend([""] * len(columns) for _ in range(MIN_BLANK_ROWS))
        body.append(
            [
                Cell("TOTAL", colspan=3, bold=True, fill=CAPTION_BLUE),
                Cell(str(sum(line.boxes for line in lines)), bold=True),
                Cell(format_amount(sum((line.sqm for line in lines), ZERO)), bold=True),
                Cell(format_amount(sum((line.net_weight for line in lines), ZERO)), bold=True),
                Cell(format_amount(sum((line.gross_weight for line in lines), ZERO)), bold=True),
            ]
        )
        return [ctx.table(columns, body, name="products", font_size=8, header_fill=CAPTION_BLUE)]

    def section_containers(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        columns = [
            ColumnSpec("CONTAINER NO.", align="center"),
            ColumnSpec("Line Seal", align="center"),
            ColumnSpec("RFID SEAL", align="center"),
            ColumnSpec("SIZE", align="center"),
            ColumnSpec("BOXES", align="center"),
            ColumnSpec("Pallet No.", align="center"),
            ColumnSpec("Net Wt.", align="right"),
            ColumnSpec("Gross Wt.", align="right"),
        ]
        body = [
            [
                text_or(container.container_no),
                text_or(container.line_seal),
                text_or(container.rfid_seal),
                container.size,
                str(container.boxes),
                f"{text_or(container.start_pallet_no)} to {text_or(container.end_pallet_no)}",
                format_amount(container.net_weight),
                format_amount(container.gross_weight),
            ]
            for container in record.containers
        ]
        return [ctx.table(columns, body, name="containers", font_size=8)]

    def section_statements(self, ctx: BuildContext) -> List:
        return [
            ctx.table([ColumnSpec()], [[DRAWBACK_LINE]], name="drawback", font_size=8),
            ctx.table([ColumnSpec(align="center")], [[ORIGIN_LINE]], name="origin", font_size=8),
        ]
