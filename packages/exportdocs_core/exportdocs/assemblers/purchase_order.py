"""Purchase order sent to a manufacturer, printed on the company letterhead."""

from __future__ import annotations

from typing import List

from ..engine.blocks import BlockGroup, SignatureBlock
from ..engine.layout_primitives import CAPTION_BLUE
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import PurchaseOrderRecord
from ..totals import format_amount
from ..utils.values import format_date, text_or
from .base import BuildContext, DocumentAssembler

ROW_HEIGHT = 24.0
IMAGE_ROW_HEIGHT = 60.0


class PurchaseOrderAssembler(DocumentAssembler):
    kind = "purchase_order"
    title = "PURCHASE ORDER"
    filename_prefix = "Purchase_Order_"
    sections = ("title", "parties", "items", "closing")
    required_entities = ("exporter", "manufacturer")
    uses_letterhead = True

    def section_title(self, ctx: BuildContext) -> List:
        return [ctx.banner(self.title, size=14, fill=CAPTION_BLUE, border=0.5), ctx.gap(5)]

    def section_parties(self, ctx: BuildContext) -> List:
        record: PurchaseOrderRecord = ctx.record
        manufacturer = record.manufacturer
        to_box = ctx.box(
            "TO",
            [
                (manufacturer.company_name.upper(), ctx.style(11, True, alignment="center")),
                manufacturer.address,
                f"GSTIN: {text_or(manufacturer.gst_number)}",
                f"PIN: {text_or(manufacturer.pin_code)}",
            ],
            size=8,
            caption_fill=CAPTION_BLUE,
            min_height=40,
            name="manufacturer",
        )
        details = [
            f"PO Number: {record.po_number}",
            f"PO Date: {format_date(record.po_date)}",
            f"Size: {text_or(record.size)}",
            f"HSN Code: {text_or(record.hsn_code)}",
            f"No. of Containers: {record.number_of_containers}",
        ]
        if record.source_pi_number:
            details.append(f"Ref. PI No.: {record.source_pi_number}")
        details_box = ctx.box("ORDER DETAILS", details, size=8, caption_fill=CAPTION_BLUE, name="order details")
        return [ctx.row([to_box, details_box], name="parties"), ctx.gap(5)]

    def section_items(self, ctx: BuildContext) -> List:
        """Item rows; a product image replaces the design text in its cell."""
        record: PurchaseOrderRecord = ctx.record
        columns = [
            ColumnSpec("SR", 30, "center"),
            ColumnSpec("DESCRIPTION OF GOODS", None, "left"),
            ColumnSpec("Image", 60, "center"),
            ColumnSpec("WEIGHT/BOX (Kg)", 70, "right"),
            ColumnSpec("BOXES", 50, "right"),
            ColumnSpec("THICKNESS", 70, "center"),
        ]
        body = [
            [
                str(index),
                f"{record.size if record.size != 'N/A' else ''} {item.description}".strip(),
                Cell(image=item.image) if item.image else item.design_image,
                format_amount(item.weight_per_box),
                str(item.boxes),
                item.thickness,
            ]
            for index, item in enumerate(record.items, start=1)
        ]
        body.append(
            [
                Cell("Total Box:", colspan=4, bold=True, align="right", fill=CAPTION_BLUE, font_size=10),
                Cell(str(record.total_boxes), align="center"),
                "",
            ]
        )
        return [
            ctx.table(
                columns,
                body,
                name="order items",
                font_size=8,
                header_fill=CAPTION_BLUE,
                min_row_height=IMAGE_ROW_HEIGHT if any(item.image for item in record.items) else ROW_HEIGHT,
            ),
            ctx.gap(5),
        ]

    def section_closing(self, ctx: BuildContext) -> List:
        """Terms and signature are kept on the same page."""
        record: PurchaseOrderRecord = ctx.record
        terms = ctx.box(
            "Terms & Conditions:",
            [text_or(record.terms_and_conditions, "")],
            caption_fill=CAPTION_BLUE,
            min_height=40,
            name="terms",
        )
        signature = SignatureBlock(
            lines_above=[f"FOR, {record.exporter.company_name.upper()}"],
            lines_below=["AUTHORISED SIGNATURE"],
            image=ctx.assets.signature_image,
            gap=40.0,
            width=ctx.width / 2,
            style=ctx.style(10, True),
            metrics=ctx.metrics,
        )
        return [BlockGroup([terms, ctx.gap(8), signature], name="terms and signature")]
