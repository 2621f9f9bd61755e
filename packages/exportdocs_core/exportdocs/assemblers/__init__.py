"""
Document assemblers, one per document kind.

``ASSEMBLERS`` maps the kind name used by ``render_document`` to the
assembler class.
"""

from typing import Dict, Optional, Type

from ..assets import DocumentAssets
from ..config import RenderConfig
from .annexure import AnnexureAssembler
from .base import DocumentAssembler, LayoutParams, RenderPlan, safe_filename_part
from .custom_invoice import CustomInvoiceAssembler
from .packing_list import PackingListAssembler
from .purchase_order import PurchaseOrderAssembler
from .trade_invoice import TradeInvoiceAssembler
from .vgm import VgmAssembler

ASSEMBLERS: Dict[str, Type[DocumentAssembler]] = {
    cls.kind: cls
    for cls in (
        TradeInvoiceAssembler,
        PurchaseOrderAssembler,
        AnnexureAssembler,
        VgmAssembler,
        CustomInvoiceAssembler,
        PackingListAssembler,
    )
}


def get_assembler(
    kind: str,
    config: Optional[RenderConfig] = None,
    assets: Optional[DocumentAssets] = None,
) -> DocumentAssembler:
    """Instantiate the assembler registered for ``kind``."""
    try:
        cls = ASSEMBLERS[kind]
    except KeyError:
        raise ValueError(f"Unknown document kind: {kind!r} (expected one of {', '.join(sorted(ASSEMBLERS))})")
    return cls(config=config, assets=assets)


__all__ = [
    "ASSEMBLERS",
    "AnnexureAssembler",
    "CustomInvoiceAssembler",
    "DocumentAssembler",
    "LayoutParams",
    "PackingListAssembler",
    "PurchaseOrderAssembler",
    "RenderPlan",
    "TradeInvoiceAssembler",
    "VgmAssembler",
    "get_assembler",
    "safe_filename_part",
]
