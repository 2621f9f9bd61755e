"""

Resolved document records.

Records are immutable snapshots handed to the assemblers with every
related entity already joined in. ``from_dict`` accepts the JSON shape the
back office stores (camelCase keys) as well as snake_case keys, and runs
dates and numbers through a ValueParser so malformed values are either
recovered with a warning or rejected in strict mode.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .assets import image_from_value
from .utils.values import ValueParser, is_blank

ZERO = Decimal("0")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _get(data: Mapping[str, Any], name: str, *aliases: str, default: Any = None) -> Any:
    """Look a field up by snake_case name, its camelCase form, then aliases."""
    for key in (name, _camel(name)) + aliases:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _text(data: Mapping[str, Any], name: str, *aliases: str, default: str = "") -> str:
    value = _get(data, name, *aliases)
    if is_blank(value):
        return default
    return str(value).strip()


def _sub(data: Mapping[str, Any], name: str, *aliases: str) -> Optional[Mapping[str, Any]]:
    value = _get(data, name, *aliases)
    return value if isinstance(value, Mapping) else None


def _items(data: Mapping[str, Any], name: str, *aliases: str) -> Iterable[Mapping[str, Any]]:
    value = _get(data, name, *aliases, default=())
    return [item for item in value if isinstance(item, Mapping)]


###############################################################################
# Parties
###############################################################################


@dataclass(frozen=True, slots=True)
class Company:
    """The exporter."""

    company_name: str
    address: str = ""
    iec_number: str = ""
    gst_number: str = ""
    contact_person: str = ""
    phone_number: str = ""

    @property
    def bin_number(self) -> str:
        """Business identification number: characters 3-12 of the GSTIN."""
        return self.gst_number[2:12] if self.gst_number else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Company":
        return cls(
            company_name=_text(data, "company_name"),
            address=_text(data, "address"),
            iec_number=_text(data, "iec_number"),
            gst_number=_text(data, "gst_number"),
            contact_person=_text(data, "contact_person"),
            phone_number=_text(data, "phone_number"),
        )


@dataclass(frozen=True, slots=True)
class Client:
    """Consignee / buyer."""

    company_name: str
    person: str = ""
    contact_number: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    pin_code: str = ""

    @property
    def postal_lines(self) -> str:
        locality = ", ".join(part for part in (self.city, self.country) if part)
        if self.pin_code:
            locality = f"{locality} - {self.pin_code}" if locality else self.pin_code
        return "\n".join(part for part in (self.address, locality) if part)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Client":
        return cls(
            company_name=_text(data, "company_name"),
            person=_text(data, "person"),
            contact_number=_text(data, "contact_number"),
            address=_text(data, "address"),
            city=_text(data, "city"),
            country=_text(data, "country"),
            pin_code=_text(data, "pin_code"),
        )


@dataclass(frozen=True, slots=True)
class Manufacturer:
    company_name: str
    contact_person: str = ""
    address: str = ""
    gst_number: str = ""
    stuffing_permission_number: str = ""
    stuffing_permission_date: Optional[date] = None
    pin_code: str = ""

    @property
    def locality(self) -> str:
        """First segment of the address, used as place of receipt."""
        return self.address.split(",")[0].strip() if self.address else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: Optional[ValueParser] = None) -> "Manufacturer":
        parser = parser or ValueParser()
        return cls(
            company_name=_text(data, "company_name"),
            contact_person=_text(data, "contact_person"),
            address=_text(data, "address"),
            gst_number=_text(data, "gst_number"),
            stuffing_permission_number=_text(data, "stuffing_permission_number"),
            stuffing_permission_date=parser.parse_date(
                "stuffing_permission_date", _get(data, "stuffing_permission_date")
            ),
            pin_code=_text(data, "pin_code"),
        )


@dataclass(frozen=True, slots=True)
class Bank:
    bank_name: str
    bank_address: str = ""
    account_number: str = ""
    swift_code: str = ""
    ifsc_code: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bank":
        return cls(
            bank_name=_text(data, "bank_name"),
            bank_address=_text(data, "bank_address"),
            account_number=_text(data, "account_number"),
            swift_code=_text(data, "swift_code"),
            ifsc_code=_text(data, "ifsc_code"),
        )


def _party(cls, data: Mapping[str, Any], name: str, *aliases: str, parser: Optional[ValueParser] = None):
    sub = _sub(data, name, *aliases)
    if sub is None:
        return None
    if cls is Manufacturer:
        return cls.from_dict(sub, parser)
    return cls.from_dict(sub)


def _describe(data: Mapping[str, Any]) -> str:
    description = _text(data, "description", "goodsDescription")
    if description:
        return description
    design = _text(data, "design_name", "productName", default="N/A")
    size = _text(data, "size", "sizeName", default="N/A")
    return f"{design} ({size})"


###############################################################################
# Trade (proforma) invoice
###############################################################################


@dataclass(frozen=True, slots=True)
class InvoiceItem:
    description: str
    hsn_code: str = ""
    boxes: int = 0
    quantity_sqmt: Decimal = ZERO
    rate: Decimal = ZERO
    amount: Optional[Decimal] = None

    @property
    def line_amount(self) -> Decimal:
        if self.amount is not None:
            return self.amount
        return self.quantity_sqmt * self.rate

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: ValueParser) -> "InvoiceItem":
        amount = _get(data, "amount")
        return cls(
            description=_describe(data),
            hsn_code=_text(data, "hsn_code", default="N/A"),
            boxes=parser.parse_int("boxes", _get(data, "boxes")),
            quantity_sqmt=parser.parse_decimal("quantity_sqmt", _get(data, "quantity_sqmt")),
            rate=parser.parse_decimal("rate", _get(data, "rate", "ratePerSqmt")),
            amount=None if is_blank(amount) else parser.parse_decimal("amount", amount),
        )


@dataclass(frozen=True, slots=True)
class TradeInvoiceRecord:
    invoice_number: str
    invoice_date: date
    exporter: Optional[Company] = None
    client: Optional[Client] = None
    bank: Optional[Bank] = None
    final_destination: str = ""
    port_of_loading: str = "MUNDRA"
    total_container: int = 0
    container_size: str = ""
    currency: str = "USD"
    total_gross_weight: str = ""
    freight: Decimal = ZERO
    discount: Decimal = ZERO
    insurance: Decimal = ZERO
    tax: Decimal = ZERO
    notify_party_line1: str = ""
    notify_party_line2: str = ""
    terms_and_conditions: str = ""
    note: str = ""
    items: Tuple[InvoiceItem, ...] = ()

    @property
    def number(self) -> str:
        return self.invoice_number

    @property
    def total_sqmt(self) -> Decimal:
        return sum((item.quantity_sqmt for item in self.items), ZERO)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: Optional[ValueParser] = None) -> "TradeInvoiceRecord":
        parser = parser or ValueParser()
        return cls(
            invoice_number=_text(data, "invoice_number"),
            invoice_date=parser.parse_date("invoice_date", _get(data, "invoice_date"), required=True),
            exporter=_party(Company, data, "exporter"),
            client=_party(Client, data, "client"),
            bank=_party(Bank, data, "bank", "selectedBank"),
            final_destination=_text(data, "final_destination"),
            port_of_loading=_text(data, "port_of_loading", default="MUNDRA"),
            total_container=parser.parse_int("total_container", _get(data, "total_container")),
            container_size=_text(data, "container_size"),
            currency=_text(data, "currency", "currencyType", default="USD"),
            total_gross_weight=_text(data, "total_gross_weight", default="N/A"),
            freight=parser.parse_decimal("freight", _get(data, "freight")),
            discount=parser.parse_decimal("discount", _get(data, "discount")),
            insurance=parser.parse_decimal("insurance", _get(data, "insurance")),
            tax=parser.parse_decimal("tax", _get(data, "tax")),
            notify_party_line1=_text(data, "notify_party_line1"),
            notify_party_line2=_text(data, "notify_party_line2"),
            terms_and_conditions=_text(data, "terms_and_conditions"),
            note=_text(data, "note"),
            items=tuple(InvoiceItem.from_dict(item, parser) for item in _items(data, "items")),
        )


###############################################################################
# Purchase order
###############################################################################


@dataclass(frozen=True, slots=True)
class PurchaseOrderItem:
    description: str
    design_image: str = "AS PER SAMPLE"
    weight_per_box: Decimal = ZERO
    boxes: int = 0
    thickness: str = ""
    image: Optional[bytes] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: ValueParser) -> "PurchaseOrderItem":
        description = _text(data, "description", "goodsDescription", "designName", "productName", default="N/A")
        return cls(
            description=description,
            design_image=_text(data, "design_image", default="AS PER SAMPLE"),
            weight_per_box=parser.parse_decimal("weight_per_box", _get(data, "weight_per_box")),
            boxes=parser.parse_int("boxes", _get(data, "boxes")),
            thickness=_text(data, "thickness"),
            image=image_from_value(
                f"product {description!r}", _get(data, "image", "image_data", "imageData")
            ),
        )


@dataclass(frozen=True, slots=True)
class PurchaseOrderRecord:
    po_number: str
    po_date: date
    exporter: Optional[Company] = None
    manufacturer: Optional[Manufacturer] = None
    size: str = ""
    hsn_code: str = ""
    number_of_containers: int = 0
    source_pi_number: str = ""
    terms_and_conditions: str = ""
    items: Tuple[PurchaseOrderItem, ...] = ()

    @property
    def number(self) -> str:
        return self.po_number

    @property
    def total_boxes(self) -> int:
        return sum(item.boxes for item in self.items)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: Optional[ValueParser] = None) -> "PurchaseOrderRecord":
        parser = parser or ValueParser()
        return cls(
            po_number=_text(data, "po_number"),
            po_date=parser.parse_date("po_date", _get(data, "po_date"), required=True),
            exporter=_party(Company, data, "exporter"),
            manufacturer=_party(Manufacturer, data, "manufacturer", parser=parser),
            size=_text(data, "size", "sizeName", default="N/A"),
            hsn_code=_text(data, "hsn_code", default="N/A"),
            number_of_containers=parser.parse_int("number_of_containers", _get(data, "number_of_containers")),
            source_pi_number=_text(data, "source_pi_number", "sourcePiInvoiceNumber"),
            terms_and_conditions=_text(data, "terms_and_conditions"),
            items=tuple(PurchaseOrderItem.from_dict(item, parser) for item in _items(data, "items")),
        )


###############################################################################
# Export document (annexure, VGM, custom invoice)
###############################################################################


@dataclass(frozen=True, slots=True)
class ProductLine:
    """Boxes of one product loaded into a container."""

    description: str
    hsn_code: str = ""
    boxes: int = 0
    sqm_per_box: Decimal = ZERO
    rate: Decimal = ZERO
    net_weight: Decimal = ZERO
    gross_weight: Decimal = ZERO
    is_sample: bool = False

    @property
    def sqm(self) -> Decimal:
        return self.sqm_per_box * self.boxes

    @property
    def amount(self) -> Decimal:
        return self.sqm * self.rate

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: ValueParser, is_sample: bool = False) -> "ProductLine":
        return cls(
            description=_describe(data),
            hsn_code=_text(data, "hsn_code", default="N/A"),
            boxes=parser.parse_int("boxes", _get(data, "boxes")),
            sqm_per_box=parser.parse_decimal("sqm_per_box", _get(data, "sqm_per_box")),
            rate=parser.parse_decimal("rate", _get(data, "rate")),
            net_weight=parser.parse_decimal("net_weight", _get(data, "net_weight")),
            gross_weight=parser.parse_decimal("gross_weight", _get(data, "gross_weight")),
            is_sample=is_sample,
        )


@dataclass(frozen=True, slots=True)
class ContainerItem:
    booking_no: str = ""
    container_no: str = ""
    line_seal: str = ""
    rfid_seal: str = ""
    size: str = "1X20'"
    start_pallet_no: str = ""
    end_pallet_no: str = ""
    tare_weight: Decimal = ZERO
    weighing_slip_no: str = ""
    weighing_date_time: Optional[datetime] = None
    product_items: Tuple[ProductLine, ...] = ()
    sample_items: Tuple[ProductLine, ...] = ()

    @property
    def lines(self) -> Tuple[ProductLine, ...]:
        return self.product_items + self.sample_items

    @property
    def boxes(self) -> int:
        return sum(line.boxes for line in self.lines)

    @property
    def net_weight(self) -> Decimal:
        return sum((line.net_weight for line in self.lines), ZERO)

    @property
    def gross_weight(self) -> Decimal:
        return sum((line.gross_weight for line in self.lines), ZERO)

    @property
    def verified_gross_mass(self) -> Decimal:
        """Cargo (net) weight plus container tare."""
        return self.net_weight + self.tare_weight

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: ValueParser) -> "ContainerItem":
        return cls(
            booking_no=_text(data, "booking_no"),
            container_no=_text(data, "container_no"),
            line_seal=_text(data, "line_seal"),
            rfid_seal=_text(data, "rfid_seal"),
            size=_text(data, "size", "containerSize", default="1X20'"),
            start_pallet_no=_text(data, "start_pallet_no"),
            end_pallet_no=_text(data, "end_pallet_no"),
            tare_weight=parser.parse_decimal("tare_weight", _get(data, "tare_weight")),
            weighing_slip_no=_text(data, "weighing_slip_no"),
            weighing_date_time=parser.parse_datetime("weighing_date_time", _get(data, "weighing_date_time")),
            product_items=tuple(ProductLine.from_dict(item, parser) for item in _items(data, "product_items")),
            sample_items=tuple(
                ProductLine.from_dict(item, parser, is_sample=True) for item in _items(data, "sample_items")
            ),
        )


@dataclass(frozen=True, slots=True)
class ExportDocumentRecord:
    export_invoice_number: str
    export_invoice_date: date
    exporter: Optional[Company] = None
    client: Optional[Client] = None
    manufacturer: Optional[Manufacturer] = None
    permission_number: str = ""
    manufacturer_invoice_number: str = ""
    manufacturer_invoice_date: Optional[date] = None
    country_of_origin: str = "INDIA"
    country_of_final_destination: str = ""
    vessel_flight_no: str = ""
    port_of_loading: str = ""
    port_of_discharge: str = ""
    final_destination: str = ""
    terms_of_delivery_and_payment: str = ""
    conversion_rate: Decimal = Decimal("1")
    currency: str = "USD"
    containers: Tuple[ContainerItem, ...] = ()

    @property
    def number(self) -> str:
        return self.export_invoice_number

    @property
    def total_boxes(self) -> int:
        return sum(container.boxes for container in self.containers)

    @property
    def total_net_weight(self) -> Decimal:
        return sum((container.net_weight for container in self.containers), ZERO)

    @property
    def total_gross_weight(self) -> Decimal:
        return sum((container.gross_weight for container in self.containers), ZERO)

    @property
    def container_summary(self) -> str:
        """E.g. ``3 X 20'`` for the marks column."""
        if not self.containers:
            return ""
        size = re.sub(r"^\s*\d+\s*[xX]\s*", "", self.containers[0].size) or "20'"
        return f"{len(self.containers)} X {size}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parser: Optional[ValueParser] = None) -> "ExportDocumentRecord":
        parser = parser or ValueParser()
        manufacturer_info: Dict[str, Any] = {}
        details = _get(data, "manufacturer_details", default=())
        if isinstance(details, (list, tuple)) and details and isinstance(details[0], Mapping):
            manufacturer_info = dict(details[0])
        permission = _text(data, "permission_number") or _text(manufacturer_info, "permission_number")
        manufacturer_invoice_date = _get(data, "manufacturer_invoice_date")
        if manufacturer_invoice_date is None:
            manufacturer_invoice_date = _get(manufacturer_info, "invoice_date")
        return cls(
            export_invoice_number=_text(data, "export_invoice_number"),
            export_invoice_date=parser.parse_date(
                "export_invoice_date", _get(data, "export_invoice_date"), required=True
            ),
            exporter=_party(Company, data, "exporter"),
            client=_party(Client, data, "client"),
            manufacturer=_party(Manufacturer, data, "manufacturer", parser=parser),
            permission_number=permission,
            manufacturer_invoice_number=(
                _text(data, "manufacturer_invoice_number") or _text(manufacturer_info, "invoice_number")
            ),
            manufacturer_invoice_date=parser.parse_date("manufacturer_invoice_date", manufacturer_invoice_date),
            country_of_origin=_text(data, "country_of_origin", default="INDIA"),
            country_of_final_destination=_text(data, "country_of_final_destination"),
            vessel_flight_no=_text(data, "vessel_flight_no"),
            port_of_loading=_text(data, "port_of_loading"),
            port_of_discharge=_text(data, "port_of_discharge"),
            final_destination=_text(data, "final_destination"),
            terms_of_delivery_and_payment=_text(data, "terms_of_delivery_and_payment"),
            conversion_rate=parser.parse_decimal(
                "conversion_rate", _get(data, "conversion_rate", "conversationRate"), Decimal("1")
            ),
            currency=_text(data, "currency", default="USD"),
            containers=tuple(
                ContainerItem.from_dict(item, parser) for item in _items(data, "containers", "containerItems")
            ),
        )
