"""Proforma (trade) invoice."""

from __future__ import annotations

from typing import List

from ..engine.blocks import SignatureBlock
from ..engine.layout_primitives import CAPTION_BLUE
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import TradeInvoiceRecord
from ..text.amount_words import amount_to_words
from ..totals import Totals, compute_totals, format_amount
from ..utils.values import format_date, text_or
from .base import BuildContext, DocumentAssembler

MIN_ITEM_ROWS = 5

# Note lines starting with one of these are printed in bold.
NOTE_KEYWORDS = (
    "TRANSSHIPMENT",
    "PARTIAL SHIPMENT",
    "SHIPMENT",
    "QUANTITY AND VALUE",
    "NOT ACCEPTED",
    "ANY TRANSACTION",
)

DECLARATION = "CERTIFIED THAT THE PARTICULARS GIVEN ABOVE ARE TRUE AND CORRECT."


class TradeInvoiceAssembler(DocumentAssembler):
    kind = "trade_invoice"
    title = "PROFORMA INVOICE"
    filename_prefix = "Performa_Invoice_"
    sections = (
        "title",
        "exporter",
        "consignee",
        "shipment",
        "items",
        "amount_in_words",
        "note",
        "beneficiary",
        "declaration",
        "signature",
    )
    required_entities = ("exporter", "client")
    priced = True

    def totals(self, record: TradeInvoiceRecord) -> Totals:
        return compute_totals(
            (item.line_amount for item in record.items),
            discount=record.discount,
            freight=record.freight,
            insurance=record.insurance,
            tax=record.tax,
        )

    def section_title(self, ctx: BuildContext) -> List:
        return [ctx.banner(self.title, size=12), ctx.gap(2)]

    def section_exporter(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record
        exporter = record.exporter
        bold = ctx.style(8, True)
        details = [
            f"Invoice Date And Number: {record.invoice_number} / {format_date(record.invoice_date, '%d-%m-%Y')}",
            f"IEC. Code: {text_or(exporter.iec_number)}",
        ]
        return [
            ctx.row(
                [
                    ctx.box("EXPORTER:", [(exporter.company_name, bold), exporter.address], caption_fill=CAPTION_BLUE),
                    ctx.box("INVOICE DETAILS:", details, caption_fill=CAPTION_BLUE),
                ],
                name="exporter",
            )
        ]

    def section_consignee(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record
        client = record.client
        notify = [line for line in (record.notify_party_line1, record.notify_party_line2) if line]
        return [
            ctx.row(
                [
                    ctx.box(
                        "CONSIGNEE / BUYER:",
                        [(client.company_name, ctx.style(8, True)), client.postal_lines],
                        caption_fill=CAPTION_BLUE,
                    ),
                    ctx.box("NOTIFY PARTY:", notify or [""], caption_fill=CAPTION_BLUE),
                ],
                name="consignee",
            )
        ]

    def section_shipment(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record

        def label(text: str) -> Cell:
            return Cell(text, bold=True)

        columns = [ColumnSpec(width=100), ColumnSpec(), ColumnSpec(width=100), ColumnSpec()]
        body = [
            [label("Port of Loading:"), record.port_of_loading, label("Port of Discharge:"), text_or(record.final_destination)],
            [
                label("Container Size:"),
                f"{record.total_container} x {record.container_size}".strip(),
                label("Currency:"),
                record.currency,
            ],
            [label("Total Gross Weight:"), text_or(record.total_gross_weight), "", ""],
            [
                label("Terms and Conditions of Delivery And Payment:"),
                Cell(text_or(record.terms_and_conditions), colspan=3),
            ],
        ]
        return [ctx.table(columns, body, name="shipment", font_size=8, header_rows=()), ctx.gap(4)]

    def section_items(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record
        currency = record.currency
        columns = [
            ColumnSpec("S. No.", 30, "center"),
            ColumnSpec("Goods Description", None, "left"),
            ColumnSpec("HSN Code", 55, "center"),
            ColumnSpec("Qty Boxes", 50, "right"),
            ColumnSpec("Total SQMT", 60, "right"),
            ColumnSpec(f"Rate/{currency}", 60, "right"),
            ColumnSpec(f"Amount/{currency}", 70, "right"),
        ]
        body = [
            [
                str(index),
                item.description,
                item.hsn_code,
                str(item.boxes),
                format_amount(item.quantity_sqmt),
                format_amount(item.rate),
                format_amount(item.line_amount),
            ]
            for index, item in enumerate(record.items, start=1)
        ]
        body.extend([""] * len(columns) for _ in range(MIN_ITEM_ROWS - len(body)))

        totals = self.totals(record)
        for caption, value in (
            ("SUB TOTAL", totals.subtotal),
            ("LESS: DISCOUNT", totals.discount),
            ("FREIGHT CHARGES", totals.freight),
            ("INSURANCE", totals.insurance),
            ("TAX", totals.tax),
            ("ROUND OFF", totals.rounding_adjustment),
            ("GRAND TOTAL", totals.grand_total),
        ):
            body.append(
                [
                    Cell(caption, colspan=6, bold=True, align="right", fill=CAPTION_BLUE),
                    Cell(format_amount(value), bold=True, align="right", fill=CAPTION_BLUE),
                ]
            )
        return [
            ctx.table(
                columns,
                body,
                name="line items",
                font_size=7.5,
                header_fill=CAPTION_BLUE,
                min_row_height=12,
            ),
            ctx.gap(4),
        ]

    def section_amount_in_words(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record
        totals = self.totals(record)
        return [
            ctx.row(
                [
                    ctx.box("Total SQM", [format_amount(record.total_sqmt)], size=7, caption_fill=CAPTION_BLUE),
                    ctx.box(
                        "TOTAL INVOICE AMOUNT IN WORDS:",
                        [(amount_to_words(totals.grand_total, record.currency), ctx.style(7, True))],
                        size=7,
                        caption_fill=CAPTION_BLUE,
                    ),
                ],
                fractions=(0.25, 0.75),
                name="amount in words",
            ),
            ctx.gap(4),
        ]

    def section_note(self, ctx: BuildContext) -> List:
        record: TradeInvoiceRecord = ctx.record
        if not record.note:
            return []
        blocks = [ctx.text("Note:", 7, True)]
        for line in record.note.splitlines():
            bold = line.strip().upper().startswith(NOTE_KEYWORDS)
            blocks.append(ctx.text(line, 6.5, bold, name="note"))
        blocks.append(ctx.gap(4))
        return blocks

    def section_beneficiary(self, ctx: BuildContext) -> List:
        bank = ctx.record.bank
        if bank is None:
            return []
        return [
            ctx.text("BENEFICIARY DETAILS:", 7, True),
            ctx.text(f"BENEFICIARY NAME: {bank.bank_name.upper()}", 6.5),
            ctx.text(f"BENEFICIARY BANK ADDRESS: {bank.bank_address.upper()}", 6.5),
            ctx.text(
                f"BENEFICIARY A/C NO: {bank.account_number}, SWIFT CODE: {bank.swift_code.upper()}, "
                f"IFSC CODE: {bank.ifsc_code.upper()}",
                6.5,
            ),
            ctx.gap(4),
        ]

    def section_declaration(self, ctx: BuildContext) -> List:
        return [ctx.text("DECLARATION:", 7, True), ctx.text(DECLARATION, 6.5, True), ctx.gap(6)]

    def section_signature(self, ctx: BuildContext) -> List:
        exporter = ctx.record.exporter
        return [
            SignatureBlock(
                lines_above=[f"FOR, {exporter.company_name.upper()}"],
                lines_below=["AUTHORISED SIGNATURE"],
                style=ctx.style(7, True),
                metrics=ctx.metrics,
            )
        ]
