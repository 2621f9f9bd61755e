"""
exportdocs - document composition engine for an export trade back office.

Turns resolved business records into fixed-format PDF documents:
- Proforma (trade) invoice
- Purchase order on the company letterhead
- Customs annexure, fitted to one page when possible
- Verified gross mass (VGM) certificate
- Custom (commercial export) invoice
- Packing list

Quick Start:
    from exportdocs import render_document, document_filename

    pdf = render_document("vgm", record_dict)
    Path(document_filename("vgm", "EXP/001/24-25")).write_bytes(pdf)
"""

from .version import __version__, __version_info__

from .exceptions import (
    AssetError,
    ExportDocsError,
    LayoutError,
    LayoutOverflowError,
    MalformedValueError,
    MissingEntityError,
    RenderingError,
    TableSpecError,
)
from .config import RenderConfig
from .assets import DocumentAssets
from .records import (
    Bank,
    Client,
    Company,
    ContainerItem,
    ExportDocumentRecord,
    InvoiceItem,
    Manufacturer,
    ProductLine,
    PurchaseOrderItem,
    PurchaseOrderRecord,
    TradeInvoiceRecord,
)
from .text.amount_words import amount_to_words
from .numbering import financial_year_label, next_document_number
from .totals import Totals, compute_totals
from .api import document_filename, load_record, render_document

__all__ = [
    "__version__",
    "__version_info__",
    "AssetError",
    "Bank",
    "Client",
    "Company",
    "ContainerItem",
    "DocumentAssets",
    "ExportDocsError",
    "ExportDocumentRecord",
    "InvoiceItem",
    "LayoutError",
    "LayoutOverflowError",
    "MalformedValueError",
    "Manufacturer",
    "MissingEntityError",
    "ProductLine",
    "PurchaseOrderItem",
    "PurchaseOrderRecord",
    "RenderConfig",
    "RenderingError",
    "TableSpecError",
    "Totals",
    "TradeInvoiceRecord",
    "amount_to_words",
    "compute_totals",
    "document_filename",
    "financial_year_label",
    "load_record",
    "next_document_number",
    "render_document",
]
