"""

Customs annexure (self-sealing examination report).

The annexure must fit on one page whenever possible. ``choose_params``
does a dry run with generous cell padding and switches the committed
render to compact padding when that dry run needs more than one page.

"""

from __future__ import annotations

import logging
from typing import List

from ..engine.blocks import SignatureBlock
from ..engine.table_renderer import Cell, ColumnSpec
from ..records import ExportDocumentRecord
from ..totals import format_amount
from ..utils.values import MISSING, format_date, text_or
from .base import BuildContext, DocumentAssembler, LayoutParams

logger = logging.getLogger(__name__)

LABEL_SHARE = 0.45

SELF_SEALING = "SELF SEALNG"

HEADING_LINES = (
    ("ANNEXURE", 14.0),
    ("Office Of The Superintendent Of Central GST", 11.0),
    ("A.R.-IV MORBI. DIVISION - I-MORBI. COMMISSIONERATE - RAJKOT.", 11.0),
)

UNDERTAKING_LINES = (
    "Export Under GST Circular No. 26/2017 Customs DT.01/07/2017",
    '"Supply Goods Under Letter Of Undertaking, Subject To Such Conditions, Safeguards And Procedure '
    'As May Be Prescribed."',
    "Letter Of Undertaking No.Acknowledgement For Lut Application Reference Number (ARN) AD240324138081L",
)

SELF_SEALING_CIRCULAR = "EXPORT UNDER SELF SEALING UNDER Circular No.: 59/2010 Dated : 23.12.2010"

EXAMINATION_LINES = (
    "Examined the export goods covered under this invoice description of the goods with reference to "
    "DBK & MEIS Scheme Value cap p/kg.Net Weight of Ceramic Glazed Wall Tiles are as under",
    "Certified that the description and value of the goods covered by this invoice have been checked by me "
    "and the goods have been packed and sealed with lead seal one time lock seal checked by me and the goods "
    "have been packed and sealed with lead seal/ one time lock seal.",
)


class AnnexureAssembler(DocumentAssembler):
    kind = "annexure"
    title = "ANNEXURE"
    filename_prefix = "ANNEXURE_"
    sections = ("heading", "particulars", "containers", "weights", "statutory_text", "signature")
    required_entities = ("exporter", "manufacturer", "client")

    def choose_params(self, record: ExportDocumentRecord) -> LayoutParams:
        generous = self.default_params()
        plan = self.dry_run(record, generous)
        if plan.page_count <= 1:
            logger.info(f"Annexure {record.number!r} fits on one page with generous padding")
            return generous
        logger.info(
            f"Annexure {record.number!r} needs {plan.page_count} pages with generous padding, "
            f"using compact padding"
        )
        return self.compact_params()

    def section_heading(self, ctx: BuildContext) -> List:
        blocks = [ctx.text(text, size, True, name="heading", alignment="center") for text, size in HEADING_LINES]
        blocks.append(ctx.gap(8))
        return blocks

    def particulars(self, record: ExportDocumentRecord) -> List[List[str]]:
        """Numbered label/value rows of the examination report."""
        exporter = record.exporter
        manufacturer = record.manufacturer
        client = record.client
        permission = text_or(record.permission_number)
        return [
            ["1   Name Of Exporter:", f"{exporter.company_name}\n{exporter.address}"],
            ["2a  ICE No:", text_or(exporter.iec_number)],
            [" b  Branch Code:", MISSING],
            [" c  BIN No:", text_or(exporter.bin_number)],
            [
                "3   Name Of The Manufacturer (Stuffing Details):",
                f"STUFFING DETAIL - {manufacturer.company_name}\n{manufacturer.address}\nPERMISSION NO. - {permission}",
            ],
            ["4   Date Of Examination:", format_date(record.export_invoice_date)],
            ["5   Name of the Inspector of GST", SELF_SEALING],
            ["6   Name of the supdt. Of GST", SELF_SEALING],
            ["7a  Name Of The Commissionerate/ Division/Range", "RAJKOTI-MORBI / AR - IV, MORBI"],
            [" b  Location Code:", "WV0401"],
            [
                "8a  Particulars Of Export Invoice:\n b  Export Invoice No.:\n\n c  Total No.Of Packages:",
                f"\n{record.export_invoice_number}\n\n{record.total_boxes}",
            ],
            [" d  Name & Address Of The Conignee", f"{client.company_name}\n{client.postal_lines}".strip()],
            [
                "9a  Is The Discription Of The Good, The Quality & Their Value\n"
                "    As Per Particulars Furnished In The Export Invoice :",
                "Yes",
            ],
            [" b  Whether Sample Is Drawn For\n    Forwarded To Port Of Export:", "No"],
            [" c  If Yes The Number Of The Seal Of The Packge Containing\n    The Sample:", MISSING],
            [
                "10  Central GST/ CUSTOMS SEAL NOS.:\n  a For Non-Containerised Cargo No.Of Packages:\n"
                "  b For Containerised Cargo",
                f"\n{SELF_SEALING}\n{SELF_SEALING}",
            ],
        ]

    def section_particulars(self, ctx: BuildContext) -> List:
        columns = [ColumnSpec(width=ctx.width * LABEL_SHARE), ColumnSpec()]
        body = [[Cell(label, bold=True), value] for label, value in self.particulars(ctx.record)]
        return [ctx.table(columns, body, name="particulars", font_size=9)]

    def section_containers(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        columns = [
            ColumnSpec("CONTAINER NUMBER", align="center"),
            ColumnSpec("Line Seal No.", align="center"),
            ColumnSpec("RFID Seal No.", align="center"),
            ColumnSpec("Size", align="center"),
            ColumnSpec("Pallet", align="center"),
            ColumnSpec("Kinds Of Pkgs", align="center"),
        ]
        body = [
            [
                text_or(container.container_no),
                text_or(container.line_seal),
                text_or(container.rfid_seal),
                container.size,
                f"{text_or(container.start_pallet_no)} to {text_or(container.end_pallet_no)}",
                str(container.boxes),
            ]
            for container in record.containers
        ]
        return [ctx.table(columns, body, name="containers", font_size=9)]

    def section_weights(self, ctx: BuildContext) -> List:
        record: ExportDocumentRecord = ctx.record
        columns = [ColumnSpec(), ColumnSpec(), ColumnSpec(), ColumnSpec()]
        body = [
            [
                Cell("11  Total Net Weight (In Kgs):", bold=True),
                format_amount(record.total_net_weight),
                Cell("Total Gross Weight (In Kgs):", bold=True),
                format_amount(record.total_gross_weight),
            ],
            [
                Cell("12  Custome Permission Order File No.:", colspan=2, bold=True),
                Cell(f"PERMISSION NO. -{text_or(record.permission_number)}", colspan=2),
            ],
        ]
        return [ctx.table(columns, body, name="weights", font_size=9), ctx.gap(20)]

    def section_statutory_text(self, ctx: BuildContext) -> List:
        blocks = [ctx.text(line, 9, name="undertaking", alignment="center") for line in UNDERTAKING_LINES]
        blocks.append(ctx.text(SELF_SEALING_CIRCULAR, 9, name="circular", alignment="center", underline=True))
        blocks.extend(ctx.text(line, 9, name="examination", alignment="center") for line in EXAMINATION_LINES)
        blocks.append(ctx.gap(10))
        return blocks

    def section_signature(self, ctx: BuildContext) -> List:
        signature = SignatureBlock(
            lines_above=[f"For, {ctx.record.exporter.company_name}"],
            lines_below=["AUTHORISED SIGN", "SIGNATURE OF EXPORTER"],
            gap=24.0,
            width=ctx.width / 2,
            align="left",
            style=ctx.style(9, True),
            metrics=ctx.metrics,
        )
        return [signature]
