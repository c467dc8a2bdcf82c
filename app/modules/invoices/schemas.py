from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List
from datetime import date, datetime
from enum import Enum
from app.modules.clients.schemas import ClientForInvoice


class InvoiceType(str, Enum):
    PROFORMA = "proforma"  # Cotización no vinculante
    FINAL = "final"        # Factura fiscal definitiva


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"
    OVERDUE = "overdue"


class Unit(str, Enum):
    METER = "m"
    TON = "t"
    HOUR = "hour"
    CUBIC_METER = "m3"
    SQUARE_METER = "m2"


def initial_status(invoice_type: InvoiceType) -> InvoiceStatus:
    """Las proformas nacen en borrador; las finales quedan pendientes de pago"""
    if invoice_type == InvoiceType.PROFORMA:
        return InvoiceStatus.DRAFT
    return InvoiceStatus.PENDING


# Draft (builder)
class DraftItem(BaseModel):
    id: str
    description: str = ""
    unit: Unit = Unit.METER
    quantity: Decimal = Field(Decimal("1"), ge=0, decimal_places=3)
    unit_price: Decimal = Field(Decimal("0"), ge=0, decimal_places=4)
    total: Decimal = Decimal("0")

    model_config = ConfigDict(frozen=True)


class InvoiceTotals(BaseModel):
    sub_total: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal


# API payloads
class InvoiceItemIn(BaseModel):
    description: str = ""
    unit: Unit = Unit.METER
    quantity: Decimal = Field(Decimal("1"), ge=0, decimal_places=3, description="Cantidad (no negativa, hasta 3 decimales)")
    unit_price: Decimal = Field(Decimal("0"), ge=0, decimal_places=4, description="Precio unitario (hasta 4 decimales)")


class InvoiceCreate(BaseModel):
    type: InvoiceType = InvoiceType.FINAL
    client_id: Optional[str] = None
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)
    items: List[InvoiceItemIn] = Field(default_factory=list)


class InvoiceItemOut(BaseModel):
    id: str
    position: int
    description: str
    unit: str
    quantity: Decimal
    unit_price: Decimal
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class InvoiceOut(BaseModel):
    id: str
    type: InvoiceType
    status: InvoiceStatus
    client_id: str
    date: datetime
    due_date: Optional[date] = None
    notes: Optional[str] = None
    sub_total: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class InvoiceDetail(InvoiceOut):
    client: Optional[ClientForInvoice] = None
    items: List[InvoiceItemOut] = Field(default_factory=list)


class InvoiceSummary(BaseModel):
    """Fila del listado de facturas"""
    id: str
    reference: str
    type: InvoiceType
    status: InvoiceStatus
    client_name: str
    total_amount: Decimal
    date: datetime


class InvoiceList(BaseModel):
    invoices: List[InvoiceSummary]
    total: int


class InvoiceFilters(BaseModel):
    type: Optional[InvoiceType] = None
    status: Optional[InvoiceStatus] = None
    client_id: Optional[str] = None
