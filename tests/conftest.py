"""
Pytest configuration for exportdocs
"""

import io
import logging
import sys
from copy import deepcopy

import pytest
from PIL import Image

from exportdocs.assets import DocumentAssets
from exportdocs.config import RenderConfig
from exportdocs.engine.text_metrics import TextMetricsEngine
from exportdocs.pdf.surface import RecordingSurface
from exportdocs.records import ExportDocumentRecord, PurchaseOrderRecord, TradeInvoiceRecord


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    package_logger = logging.getLogger("exportdocs")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def metrics():
    return TextMetricsEngine()


@pytest.fixture
def config():
    return RenderConfig()


def make_png(width=40, height=20, color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def assets(png_bytes):
    return DocumentAssets(header_image=png_bytes, footer_image=png_bytes, signature_image=png_bytes)


###############################################################################
# Sample records
###############################################################################

EXPORTER = {
    "companyName": "Hemal Ceramics Pvt Ltd",
    "address": "Survey No. 12, 8-A National Highway, Morbi, Gujarat",
    "iecNumber": "2412003456",
    "gstNumber": "24AABCH1234K1Z5",
    "contactPerson": "R. Patel",
    "phoneNumber": "+91 98250 00000",
}

CLIENT = {
    "companyName": "Davare Floors, Inc.",
    "person": "J. Doe",
    "address": "19 E 60 TH ST, Hialeah",
    "city": "FL",
    "country": "USA",
    "pinCode": "33013",
}

MANUFACTURER = {
    "companyName": "Sunrise Vitrified LLP",
    "contactPerson": "K. Shah",
    "address": "Lakhdhirpur Road, Morbi, Gujarat",
    "gstNumber": "24AAQFS9876L1Z2",
    "stuffingPermissionNumber": "STF/44/2024",
    "stuffingPermissionDate": "2024-04-10",
    "pinCode": "363642",
}

BANK = {
    "bankName": "State Bank of India",
    "bankAddress": "Main Branch, Morbi",
    "accountNumber": "00000012345678",
    "swiftCode": "sbininbb",
    "ifscCode": "sbin0000001",
}

TRADE_INVOICE = {
    "invoiceNumber": "HEM/PI/24-25/7",
    "invoiceDate": "2024-06-15",
    "exporter": EXPORTER,
    "client": CLIENT,
    "selectedBank": BANK,
    "finalDestination": "MIAMI, USA",
    "totalContainer": 2,
    "containerSize": "20'",
    "currencyType": "USD",
    "totalGrossWeight": "54000 KGS",
    "freight": "150.00",
    "discount": "25.50",
    "insurance": 0,
    "tax": 0,
    "notifyPartyLine1": "SAME AS CONSIGNEE",
    "termsAndConditions": "FOB MUNDRA, 100% ADVANCE",
    "note": "Transshipment allowed\nColour variation is possible",
    "items": [
        {"goodsDescription": "Polished Glazed Vitrified Tiles 600x1200", "hsnCode": "69072100",
         "boxes": 1200, "quantitySqmt": "1728.00", "ratePerSqmt": "5.25"},
        {"goodsDescription": "Digital Wall Tiles 300x600", "hsnCode": "69072300",
         "boxes": 800, "quantitySqmt": "1152.00", "ratePerSqmt": "3.10"},
    ],
}

PURCHASE_ORDER = {
    "poNumber": "HEM/PO/24-25/004",
    "poDate": "2024-06-20",
    "exporter": EXPORTER,
    "manufacturer": MANUFACTURER,
    "sizeName": "600x1200",
    "hsnCode": "69072100",
    "numberOfContainers": 2,
    "sourcePiInvoiceNumber": "HEM/PI/24-25/7",
    "termsAndConditions": "Delivery within 15 days. Boxes must carry exporter marks.",
    "items": [
        {"designName": "Statuario Gold", "weightPerBox": "28.5", "boxes": 600, "thickness": "9 MM"},
        {"designName": "Onyx Blue", "designImage": "ONYX-01", "weightPerBox": "28.5", "boxes": 600,
         "thickness": "9 MM"},
    ],
}


def _container(number, booking, boxes=1000, sample_boxes=0):
    product = {
        "goodsDescription": "Glazed Vitrified Tiles (600x1200)",
        "hsnCode": "69072100",
        "boxes": boxes,
        "sqmPerBox": "1.44",
        "rate": "5.25",
        "netWeight": str(boxes * 28),
        "grossWeight": str(boxes * 28 + 400),
    }
    samples = []
    if sample_boxes:
        samples.append(
            {
                "goodsDescription": "Glazed Vitrified Tiles (600x1200)",
                "hsnCode": "69072100",
                "boxes": sample_boxes,
                "sqmPerBox": "1.44",
                "rate": "0",
                "netWeight": str(sample_boxes * 28),
                "grossWeight": str(sample_boxes * 28),
            }
        )
    return {
        "bookingNo": booking,
        "containerNo": number,
        "lineSeal": f"LS{number[-4:]}",
        "rfidSeal": f"RF{number[-4:]}",
        "startPalletNo": "1",
        "endPalletNo": "20",
        "tareWeight": "2200",
        "weighingSlipNo": f"WS-{number[-3:]}",
        "weighingDateTime": "2024-07-01T10:15:00",
        "productItems": [product],
        "sampleItems": samples,
    }


EXPORT_DOCUMENT = {
    "exportInvoiceNumber": "EXP/001/24-25",
    "exportInvoiceDate": "2024-07-02",
    "exporter": EXPORTER,
    "client": CLIENT,
    "manufacturer": MANUFACTURER,
    "manufacturerDetails": [{"permissionNumber": "PERM-2024-77", "invoiceNumber": "SV/112", "invoiceDate": "2024-06-30"}],
    "countryOfFinalDestination": "USA",
    "vesselFlightNo": "MSC ANNA V.24",
    "portOfLoading": "MUNDRA",
    "portOfDischarge": "MIAMI",
    "finalDestination": "MIAMI, USA",
    "termsOfDeliveryAndPayment": "FOB MUNDRA",
    "conversationRate": "83.25",
    "currency": "USD",
    "containerItems": [
        _container("MSCU1234567", "BK-9001", sample_boxes=10),
        _container("MSCU7654321", "BK-9001"),
    ],
}


def export_document_with(containers: int, **changes) -> dict:
    """Export document dict with ``containers`` containers."""
    data = deepcopy(EXPORT_DOCUMENT)
    data["containerItems"] = [
        _container(f"MSCU{1000000 + index}", f"BK-{9000 + index}") for index in range(containers)
    ]
    data.update(changes)
    return data


@pytest.fixture
def trade_invoice_data():
    return deepcopy(TRADE_INVOICE)


@pytest.fixture
def purchase_order_data():
    return deepcopy(PURCHASE_ORDER)


@pytest.fixture
def export_document_data():
    return deepcopy(EXPORT_DOCUMENT)


@pytest.fixture
def trade_invoice():
    return TradeInvoiceRecord.from_dict(deepcopy(TRADE_INVOICE))


@pytest.fixture
def purchase_order():
    return PurchaseOrderRecord.from_dict(deepcopy(PURCHASE_ORDER))


@pytest.fixture
def export_document():
    return ExportDocumentRecord.from_dict(deepcopy(EXPORT_DOCUMENT))


@pytest.fixture
def export_document_factory():
    """Build export document dicts with a chosen number of containers."""
    return export_document_with


###############################################################################
# Layout helpers
###############################################################################


@pytest.fixture
def compose():
    """Lay a record out on a recording surface with the params the assembler picks."""

    def _compose(assembler, record, params=None):
        surface = RecordingSurface(assembler.config.page_size)
        assembler.compose(record, params or assembler.choose_params(record), surface)
        return surface

    return _compose


def all_text(surface) -> str:
    return " ".join(" ".join(surface.texts(index)) for index in range(surface.page_count))


@pytest.fixture
def text_of():
    return all_text
