from app.database.database import Base
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Date, Text
from sqlalchemy.orm import relationship
from app.common.mixins import RecordMixin


class Invoice(Base, RecordMixin):
    """Cabecera de factura: tipo, estado, cliente y totales congelados al guardar"""
    __tablename__ = "invoices"

    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)

    # proforma | final
    type = Column(String(20), nullable=False, default="final")
    # draft | pending | partially_paid | fully_paid | overdue
    status = Column(String(20), nullable=False, default="pending")

    # Dates
    date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(Date, nullable=True)

    notes = Column(Text, nullable=True)

    # Totals (snapshot exacto del builder; total_amount == sub_total + tax_amount)
    sub_total = Column(Numeric(32, 12), nullable=False, default=0)
    tax_amount = Column(Numeric(32, 12), nullable=False, default=0)
    total_amount = Column(Numeric(32, 12), nullable=False, default=0)

    # Relationships
    client = relationship("Client")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        order_by="InvoiceItem.position",
        cascade="all, delete-orphan"
    )


class InvoiceItem(Base, RecordMixin):
    __tablename__ = "invoice_items"

    invoice_id = Column(String(36), ForeignKey("invoices.id"), nullable=False, index=True)
    # Orden de impresión
    position = Column(Integer, nullable=False, default=0)

    description = Column(Text, nullable=False, default="")
    unit = Column(String(10), nullable=False)
    quantity = Column(Numeric(18, 3), nullable=False)
    unit_price = Column(Numeric(18, 4), nullable=False)
    total = Column(Numeric(32, 12), nullable=False)  # quantity * unit_price, sin redondear

    invoice = relationship("Invoice", back_populates="items")
