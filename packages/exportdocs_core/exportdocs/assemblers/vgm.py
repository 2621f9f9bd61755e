"""Verified gross mass (VGM) certificate."""

from __future__ import annotations

from typing import List

from ..engine.layout_primitives import BoxStyle
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import ExportDocumentRecord
from ..totals import format_amount
from ..utils.values import MISSING, format_date, text_or
from .base import BuildContext, DocumentAssembler

ATTACHED = "ATTACHED SHEET"
MAX_PERMISSIBLE_WEIGHT = "30480"
WEIGHING_FORMAT = "%d/%m/%Y %H:%M:%S"


class VgmAssembler(DocumentAssembler):
    kind = "vgm"
    title = "INFORMATION ABOUT VERIFIED GROSS MASS OF CONTAINER"
    filename_prefix = "VGM_"
    sections = ("title", "information", "container_weights")
    required_entities = ("exporter",)

    def section_title(self, ctx: BuildContext) -> List:
        return [ctx.text(self.title, 14, True, name="title", alignment="center"), ctx.gap(8)]

    def information(self, record: ExportDocumentRecord) -> List[List[str]]:
        """
        The 13 numbered rows. Per-container fields read ``ATTACHED SHEET``
        when the shipment has more than one container.
        """
        exporter = record.exporter
        manufacturer = record.manufacturer
        first = record.containers[0] if record.containers else None
        several = len(record.containers) > 1

        def per_container(value: str) -> str:
            return ATTACHED if several else value

        weighed_at = format_date(first.weighing_date_time, WEIGHING_FORMAT) if first else MISSING
        return [
            ["1*", "Name of the shipper", exporter.company_name],
            ["2*", "Shipper Registration/License no.( IEC No/CIN No)**", text_or(exporter.iec_number)],
            [
                "3*",
                "Name and designation of official of the shipper authorized to sign document",
                text_or(exporter.contact_person),
            ],
            ["4*", "24 x 7 contact details of authorized official of shipper", text_or(exporter.phone_number)],
            ["5*", "Container No.", per_container(text_or(first.container_no) if first else MISSING)],
            ["6*", "Container Size ( TEU/FEU/other)", per_container("20'")],
            ["7*", "Maximum permissible weight of container as per the CSC plate", MAX_PERMISSIBLE_WEIGHT],
            [
                "8*",
                "Weighbridge registration no. & Address of Weighbridge",
                text_or(manufacturer.address if manufacturer else None),
            ],
            ["9*", "Verified gross mass of container (method-1/method-2)", "METHOD-1"],
            ["10*", "Date and time of weighing", per_container(weighed_at)],
            ["11*", "Weighing slip no.", per_container(text_or(first.weighing_slip_no) if first else MISSING)],
            ["12", "Type (Normal/Reefer/Hazardous/others)", "NORMAL"],
            ["13", "If Hazardous UN NO.IMDG class", MISSING],
        ]

    def section_information(self, ctx: BuildContext) -> List:
        columns = [ColumnSpec(width=40, align="center"), ColumnSpec(), ColumnSpec()]
        body = [[Cell(number, bold=True), label, value] for number, label, value in self.information(ctx.record)]
        return [
            ctx.table(columns, body, name="vgm information", font_size=9, border=BoxStyle(border_width=1.0, padding=0.0)),
            ctx.gap(20),
        ]

    def section_container_weights(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        columns = [
            ColumnSpec(align="center"),
            ColumnSpec(align="center"),
            ColumnSpec(align="right"),
            ColumnSpec(width=20, align="center"),
            ColumnSpec(align="right"),
            ColumnSpec(width=20, align="center"),
            ColumnSpec(align="right"),
        ]
        header_rows = (
            [
                "BOOKING NO",
                "CONTAINER NUMBER",
                Cell("VGM (KGS)\n( CARGO+TARE WEIGHT )", colspan=5),
            ],
            ["", "", "CARGO\nWeight", "", "Tare\nWeight", "", "Total Weight"],
        )
        body = [
            [
                text_or(container.booking_no),
                text_or(container.container_no),
                format_amount(container.net_weight),
                "+",
                format_amount(container.tare_weight),
                "=",
                format_amount(container.verified_gross_mass),
            ]
            for container in record.containers
        ]
        return [
            ctx.table(
                columns,
                body,
                name="container weights",
                header_rows=header_rows,
                font_size=9,
                border=BoxStyle(border_width=1.0, padding=0.0),
            )
        ]
