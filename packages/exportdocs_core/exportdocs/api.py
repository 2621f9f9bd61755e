"""

Public entry points.

Usage example:
>>> from exportdocs import render_document, document_filename
>>>
>>> pdf = render_document("annexure", record)
>>> document_filename("annexure", record.export_invoice_number)
'ANNEXURE_EXP_001_24-25.pdf'

``record`` may be a resolved record object or the JSON-shaped dict the
back office stores; dicts are converted with the record class of the
requested kind.

"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Type

from .assemblers import ASSEMBLERS, get_assembler, safe_filename_part
from .assets import DocumentAssets
from .config import RenderConfig
from .records import ExportDocumentRecord, PurchaseOrderRecord, TradeInvoiceRecord
from .utils.values import ValueParser

logger = logging.getLogger(__name__)

RECORD_TYPES: Dict[str, Type] = {
    "trade_invoice": TradeInvoiceRecord,
    "purchase_order": PurchaseOrderRecord,
    "annexure": ExportDocumentRecord,
    "vgm": ExportDocumentRecord,
    "custom_invoice": ExportDocumentRecord,
    "packing_list": ExportDocumentRecord,
}

__all__ = ["RECORD_TYPES", "document_filename", "load_record", "render_document"]


def load_record(kind: str, data: Mapping[str, Any], config: Optional[RenderConfig] = None):
    """Convert a JSON-shaped dict into the record type used by ``kind``."""
    if kind not in RECORD_TYPES:
        raise ValueError(f"Unknown document kind: {kind!r} (expected one of {', '.join(sorted(RECORD_TYPES))})")
    strict = config.strict if config is not None else False
    return RECORD_TYPES[kind].from_dict(data, ValueParser(strict=strict))


def render_document(
    kind: str,
    record: Any,
    assets: Optional[DocumentAssets] = None,
    config: Optional[RenderConfig] = None,
) -> bytes:
    """

    Render one document and return the PDF bytes.

    Raises MissingEntityError when a required party is absent,
    MalformedValueError for bad input values in strict mode and
    LayoutError when content cannot be placed on a page.

    """
    config = config or RenderConfig()
    assembler = get_assembler(kind, config=config, assets=assets)
    if isinstance(record, Mapping):
        record = load_record(kind, record, config)
    logger.debug(f"Rendering {kind} {assembler.number(record)!r}")
    return assembler.render(record)


def document_filename(kind: str, number: str) -> str:
    """File name for a document, e.g. ``VGM_EXP_001_24-25.pdf``."""
    if kind not in ASSEMBLERS:
        raise ValueError(f"Unknown document kind: {kind!r}")
    return f"{ASSEMBLERS[kind].filename_prefix}{safe_filename_part(number)}.pdf"
