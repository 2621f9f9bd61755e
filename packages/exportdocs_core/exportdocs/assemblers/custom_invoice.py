"""

Custom (commercial export) invoice.

Product and sample lines from every container are merged into one row
per (description, sample flag, rate); samples are marked as free of cost.
The FOB value is converted to INR with the record's conversion rate.

"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from ..engine.layout_primitives import HEADER_BLUE, WHITE
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import ExportDocumentRecord
from ..text.amount_words import amount_to_words
from ..totals import ZERO, format_amount
from ..utils.values import MISSING, format_date, text_or
from .base import BuildContext, DocumentAssembler

LUT_LINE = (
    '"Supply Meant For Export Under Bond & LUT - Letter Of Undertaking Without Payment Of Integrated Tax"'
)
DRAWBACK_LINE = "Export Under Duty Drawback Scheme, We shall claim the benefit as admissible under , RoDTEP , DBK"
DECLARATION = (
    "We declare that this Invoice shows the actual price of the goods described and that all "
    "particulars are true and correct."
)
SAMPLE_MARK = "FREE OF COST SAMPLE"
TO_THE_ORDER = "TO\nTHE\nORDER"


@dataclass(slots=True)
class GroupedLine:
    """One printed product row: the sum of matching lines across containers."""

    description: str
    hsn_code: str
    is_sample: bool
    rate: Decimal
    boxes: int = 0
    sqm: Decimal = ZERO
    amount: Decimal = ZERO
    net_weight: Decimal = ZERO
    gross_weight: Decimal = ZERO


def group_lines(record: ExportDocumentRecord, by_rate: bool = True) -> List[GroupedLine]:
    """
    Merge container lines into printed rows, in first-seen order.

    Lines are grouped by description and sample flag, and also by rate
    unless ``by_rate`` is false (the packing list prints no prices).
    """
    groups: Dict[Tuple[str, bool, Optional[Decimal]], GroupedLine] = {}
    for container in record.containers:
        for line in container.lines:
            key = (line.description, line.is_sample, line.rate if by_rate else None)
            group = groups.get(key)
            if group is None:
                group = groups[key] = GroupedLine(line.description, line.hsn_code, line.is_sample, line.rate)
            group.boxes += line.boxes
            group.sqm += line.sqm
            group.amount += line.amount
            group.net_weight += line.net_weight
            group.gross_weight += line.gross_weight
    return list(groups.values())


def label_cell(text: str, colspan: int = 1, align: str = "center") -> Cell:
    return Cell(text, colspan=colspan, bold=True, align=align, fill=HEADER_BLUE, color=WHITE)


class CustomInvoiceAssembler(DocumentAssembler):
    kind = "custom_invoice"
    title = "CUSTOM INVOICE"
    filename_prefix = "Custom_Invoice_"
    sections = (
        "title",
        "exporter",
        "consignee",
        "shipment",
        "products",
        "exchange",
        "amount_in_words",
        "supplier",
        "declaration",
    )
    required_entities = ("exporter", "manufacturer")
    priced = True
    exporter_fractions = (0.5, 0.25, 0.25)

    def marks(self, record: ExportDocumentRecord) -> Tuple[str, str]:
        """Caption and value of the free shipment-grid cell."""
        return "", ""

    def blue_box(self, ctx: BuildContext, caption: str, body, name: str, min_height: float = 0.0):
        return ctx.box(
            caption,
            body,
            size=9,
            caption_fill=HEADER_BLUE,
            caption_color=WHITE,
            min_height=min_height,
            name=name,
        )

    def section_title(self, ctx: BuildContext) -> List:
        return [
            ctx.text(self.title, 20, True, name="title", alignment="center"),
            ctx.text(LUT_LINE, 9, name="lut", alignment="center"),
            ctx.gap(6),
        ]

    def section_exporter(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        exporter = record.exporter
        return [
            ctx.row(
                [
                    self.blue_box(ctx, "Exporter", [f"{exporter.company_name}\n{exporter.address}"], "exporter"),
                    self.blue_box(
                        ctx,
                        "Export Invoice No & Date",
                        [record.export_invoice_number, format_date(record.export_invoice_date)],
                        "invoice number",
                    ),
                    self.blue_box(ctx, "Export Ref.", [f"IEC Code: {text_or(exporter.iec_number)}"], "export ref"),
                ],
                fractions=self.exporter_fractions,
                name="exporter",
            )
        ]

    def section_consignee(self, ctx: BuildContext) -> List:
        return [
            ctx.row(
                [
                    self.blue_box(ctx, "Consignee:-", [TO_THE_ORDER], "consignee"),
                    self.blue_box(ctx, "Buyer (If Not Consignee)", [TO_THE_ORDER], "buyer"),
                ],
                name="consignee",
            )
        ]

    def section_shipment(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        marks_caption, marks = self.marks(record)
        body = [
            [
                label_cell("Pre-Carriage By"),
                label_cell("Place Of Receipt By Pre-Carrier"),
                label_cell("Country Of Origin Of Good"),
                label_cell("Country Of Final Destination"),
            ],
            [
                "By Road",
                text_or(record.manufacturer.locality if record.manufacturer else None),
                record.country_of_origin,
                text_or(record.country_of_final_destination),
            ],
            [
                label_cell("Vessel / Flight No."),
                label_cell("Port Of Loading"),
                label_cell("Terms Of Delivery & Payments", 2),
            ],
            [
                text_or(record.vessel_flight_no),
                text_or(record.port_of_loading),
                Cell(text_or(record.terms_of_delivery_and_payment), colspan=2),
            ],
            [
                label_cell("Port Of Discharge"),
                label_cell("Final Destination"),
                label_cell(marks_caption, 2) if marks_caption else Cell("", colspan=2),
            ],
            [text_or(record.port_of_discharge), text_or(record.final_destination), Cell(marks, colspan=2)],
        ]
        columns = [ColumnSpec() for _ in range(4)]
        return [ctx.table(columns, body, name="shipment", font_size=9, min_row_height=15)]

    def section_products(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        currency = record.currency
        lines = group_lines(record)
        columns = [
            ColumnSpec(f"Marks & Nos.\n{record.container_summary}", 60, "center"),
            ColumnSpec("Sr. No", 40, "center"),
            ColumnSpec("Description Of Goods", None, "left"),
            ColumnSpec("Boxes", 50, "right"),
            ColumnSpec("Sq.Mtr", 50, "right"),
            ColumnSpec(f"Rate in {currency}", 50, "right"),
            ColumnSpec(f"Total Amount\nIn {currency}", 60, "right"),
        ]
        body = []
        for index, line in enumerate(lines, start=1):
            description = f"{line.description}\n{SAMPLE_MARK}" if line.is_sample else line.description
            body.append(
                [
                    line.hsn_code,
                    str(index),
                    description,
                    str(line.boxes),
                    format_amount(line.sqm),
                    format_amount(line.rate),
                    format_amount(line.amount),
                ]
            )
        total_amount = sum((line.amount for line in lines), ZERO)
        body.append(
            [
                Cell("TOTAL", colspan=3, bold=True, align="right"),
                str(sum(line.boxes for line in lines)),
                format_amount(sum((line.sqm for line in lines), ZERO)),
                "",
                Cell(format_amount(total_amount), bold=True),
            ]
        )
        return [
            ctx.table(
                columns,
                body,
                name="products",
                font_size=8,
                header_fill=HEADER_BLUE,
                header_color=WHITE,
            )
        ]

    def section_exchange(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        total_amount = sum((line.amount for line in group_lines(record)), ZERO)
        rate = record.conversion_rate
        columns = [ColumnSpec(width=120, align="center"), ColumnSpec(align="center"), ColumnSpec(align="center")]
        body = [
            [Cell("EXCHANGE RATE NOTIFICATION NUMBER AND DATE", bold=True), Cell("", colspan=2)],
            [
                Cell("FOB", bold=True),
                Cell("EXCHANGE RATE", bold=True),
                Cell(f"1 {record.currency} = {format_amount(rate)}", bold=True),
            ],
            ["", Cell("INR", bold=True), Cell(format_amount(total_amount * rate), bold=True)],
        ]
        return [ctx.table(columns, body, name="exchange rate", font_size=9, min_row_height=30)]

    def section_amount_in_words(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        lines = group_lines(record)
        total_amount = sum((line.amount for line in lines), ZERO)
        return [
            ctx.row(
                [
                    self.blue_box(ctx, "Total No. Of Pkgs.", [str(sum(line.boxes for line in lines))], "packages"),
                    self.blue_box(
                        ctx, "Amount In Words", [amount_to_words(total_amount, record.currency)], "amount in words"
                    ),
                ],
                fractions=(0.25, 0.75),
                name="amount in words",
            )
        ]

    def section_supplier(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        manufacturer = record.manufacturer
        invoice_date = format_date(record.manufacturer_invoice_date)
        details = [
            f"Name: {manufacturer.company_name}",
            f"GSTTIN No.: {text_or(manufacturer.gst_number)}",
            f"Tax Invoice No & Date : {text_or(record.manufacturer_invoice_number)} Dt.{invoice_date} "
            f"EPCG LIC NO : {MISSING}",
            "Export Under GST Circular No. 26/2017 Custom Dt. 01/07/2017",
            f"Letter Of Undertaking No. Acknowledgment For LUT Application Reference Number (ARN) {MISSING}",
        ]
        return [
            ctx.table([ColumnSpec()], [[label_cell(DRAWBACK_LINE)]], name="drawback", font_size=8),
            ctx.box(
                "Supplier No. 1",
                details,
                size=8,
                caption_fill=HEADER_BLUE,
                caption_color=WHITE,
                name="supplier",
            ),
        ]

    def section_declaration(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        bold = ctx.style(9, True)
        return [
            ctx.row(
                [
                    ctx.box("Declaration:", [DECLARATION], size=8, min_height=60, name="declaration"),
                    ctx.box(
                        f"Signature & Date: {format_date(record.export_invoice_date)}",
                        [
                            (f"FOR, {record.exporter.company_name}", bold),
                            "",
                            ("AUTHORISED SIGNATURE", bold.with_(alignment="right")),
                        ],
                        size=8,
                        min_height=60,
                        name="signature",
                    ),
                ],
                name="declaration and signature",
            )
        ]
