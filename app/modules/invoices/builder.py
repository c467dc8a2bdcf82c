"""
Editor en memoria de facturas (borrador de líneas + guardado).

El ``InvoiceBuilder`` pertenece al llamador: mantiene la lista ordenada de
líneas del borrador, recalcula el total de cada línea en cada edición y al
guardar escribe primero la cabecera y después las líneas en el row store.
"""
from decimal import Decimal
from datetime import date, datetime, timezone
from itertools import count
from typing import Any, Iterable, List, Optional
import logging

from pydantic import ValidationError as PydanticValidationError

from app.common.exceptions import PersistenceError, RowStoreError, ValidationError
from app.core.config import settings
from app.database.row_store import Record, RowStore
from app.modules.invoices.schemas import (
    DraftItem, InvoiceCreate, InvoiceTotals, InvoiceType, Unit, initial_status
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("description", "unit", "quantity", "unit_price")
PRICED_FIELDS = ("quantity", "unit_price")


def compute_totals(items: Iterable[DraftItem], tax_rate: Decimal) -> InvoiceTotals:
    """
    Subtotal, impuesto y total a partir de los totales de línea.

    Los importes son exactos; el redondeo a céntimos solo se aplica al mostrar.
    """
    sub_total = sum((item.total for item in items), Decimal("0"))
    tax_amount = sub_total * tax_rate
    return InvoiceTotals(
        sub_total=sub_total,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        total_amount=sub_total + tax_amount
    )


class InvoiceBuilder:
    def __init__(
        self,
        invoice_type: InvoiceType = InvoiceType.FINAL,
        tax_rate: Optional[Decimal] = None,
        default_unit: Unit = Unit.METER
    ):
        self.invoice_type = InvoiceType(invoice_type)
        self.tax_rate = settings.TAX_RATE if tax_rate is None else Decimal(tax_rate)
        self.default_unit = default_unit
        self.client_id: Optional[str] = None
        self.due_date: Optional[date] = None
        self.notes: Optional[str] = None
        self.items: List[DraftItem] = []
        self._ids = count(1)
        self.reset()

    @classmethod
    def from_payload(cls, invoice_data: InvoiceCreate, tax_rate: Optional[Decimal] = None) -> "InvoiceBuilder":
        """Reproducir un borrador recibido por la API con las mismas operaciones del editor"""
        builder = cls(invoice_data.type, tax_rate=tax_rate)
        builder.client_id = invoice_data.client_id
        builder.due_date = invoice_data.due_date
        builder.notes = invoice_data.notes
        builder.items = []
        for line in invoice_data.items:
            item = builder.add_item()
            for field in EDITABLE_FIELDS:
                builder.update_item(item.id, field, getattr(line, field))
        return builder

    def reset(self) -> None:
        """Vuelve al estado inicial: una línea vacía, sin cliente ni notas"""
        self.items = []
        self.client_id = None
        self.notes = None
        self.add_item()

    # ----- Líneas -----

    def add_item(self) -> DraftItem:
        item = DraftItem(
            id=f"tmp-{next(self._ids)}",
            unit=self.default_unit,
            quantity=Decimal("1"),
            unit_price=Decimal("0"),
            total=Decimal("0")
        )
        self.items.append(item)
        return item

    def remove_item(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]

    def update_item(self, item_id: str, field: str, value: Any) -> Optional[DraftItem]:
        """
        Cambiar un campo de una línea.

        Si el campo es ``quantity`` o ``unit_price`` el total de la línea se
        recalcula con los valores ya actualizados de ambos. Devuelve la línea
        nueva, o ``None`` si el id no existe.
        """
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"El campo '{field}' no es editable")

        for index, item in enumerate(self.items):
            if item.id != item_id:
                continue
            try:
                updated = DraftItem.model_validate({**item.model_dump(), field: value})
            except PydanticValidationError as e:
                raise ValidationError(f"Valor inválido para '{field}': {value!r}") from e
            if field in PRICED_FIELDS:
                updated = updated.model_copy(update={"total": updated.quantity * updated.unit_price})
            self.items[index] = updated
            return updated
        return None

    # ----- Totales -----

    def totals(self) -> InvoiceTotals:
        return compute_totals(self.items, self.tax_rate)

    # ----- Persistencia -----

    async def save(self, store: RowStore) -> Record:
        """
        Guardar cabecera + líneas.

        Sin cliente seleccionado no se escribe nada. Si fallan las líneas se
        intenta borrar lo ya escrito antes de propagar ``PersistenceError``.
        """
        if not self.client_id:
            raise ValidationError("client required")

        totals = self.totals()
        header = {
            "type": self.invoice_type.value,
            "client_id": self.client_id,
            "sub_total": totals.sub_total,
            "tax_amount": totals.tax_amount,
            "total_amount": totals.total_amount,
            "status": initial_status(self.invoice_type).value,
            "date": datetime.now(timezone.utc),
            "due_date": self.due_date,
            "notes": self.notes
        }

        try:
            saved = await store.insert("invoices", header)
        except RowStoreError as e:
            logger.error(f"Error saving invoice header: {e}")
            raise PersistenceError("Error al guardar la factura") from e

        invoice_id = saved.get("id")
        if not invoice_id:
            logger.error("Invoice header stored without id")
            raise PersistenceError("Error al guardar la factura")

        written: List[str] = []
        try:
            for position, item in enumerate(self.items):
                row = await store.insert("invoice_items", {
                    "invoice_id": invoice_id,
                    "position": position,
                    "description": item.description,
                    "unit": item.unit.value,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "total": item.total
                })
                written.append(row.get("id"))
        except RowStoreError as e:
            logger.error(f"Error saving items of invoice {invoice_id}: {e}")
            await self._discard(store, invoice_id, written)
            raise PersistenceError("Error al guardar las líneas de la factura") from e

        logger.info(
            f"Invoice {invoice_id} saved ({self.invoice_type.value}, "
            f"{len(self.items)} items, total {totals.total_amount})"
        )
        self.reset()
        return saved

    @staticmethod
    async def _discard(store: RowStore, invoice_id: str, item_ids: List[str]) -> None:
        """Borrado compensatorio; si también falla queda la cabecera huérfana"""
        try:
            for item_id in item_ids:
                if item_id:
                    await store.delete("invoice_items", item_id)
            await store.delete("invoices", invoice_id)
            logger.warning(f"Invoice {invoice_id} discarded after partial save")
        except RowStoreError as e:
            logger.error(f"Could not discard orphan invoice {invoice_id}: {e}")
