from typing import Callable, List, Optional
import logging

from app.common.exceptions import (
    FetchError, NotFoundError, PersistenceError, RowStoreError, ValidationError
)
from app.database.row_store import Record, RowStore
from app.modules.invoices.schemas import (
    InvoiceFilters, InvoiceStatus, InvoiceSummary, InvoiceType
)

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "Cliente desconocido"


def short_reference(invoice_id: str) -> str:
    """Prefijo legible del identificador completo"""
    return str(invoice_id)[:8].upper()


class InvoiceService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_invoices(self, filters: Optional[InvoiceFilters] = None) -> List[InvoiceSummary]:
        """Listar facturas (más recientes primero) con el nombre del cliente"""
        conditions = {}
        if filters:
            conditions = {
                key: value.value if hasattr(value, "value") else value
                for key, value in filters.model_dump(exclude_none=True).items()
            }
        try:
            rows = await self.store.select(
                "invoices", conditions,
                order_by="created_at", descending=True, include=("client",)
            )
        except RowStoreError as e:
            logger.error(f"Error fetching invoices: {e}")
            raise FetchError("No se pudieron cargar las facturas") from e

        return [
            InvoiceSummary(
                id=row["id"],
                reference=short_reference(row["id"]),
                type=row["type"],
                status=row["status"],
                client_name=(row.get("client") or {}).get("name") or UNKNOWN_CLIENT,
                total_amount=row["total_amount"],
                date=row["date"]
            )
            for row in rows
        ]

    async def get_invoice(self, invoice_id: str) -> Record:
        """Cabecera + cliente + líneas en una sola lectura"""
        try:
            rows = await self.store.select("invoices", {"id": invoice_id}, include=("client", "items"))
        except RowStoreError as e:
            logger.error(f"Error fetching invoice {invoice_id}: {e}")
            raise FetchError("No se pudo cargar la factura") from e
        if not rows:
            raise NotFoundError("Factura no encontrada")
        return rows[0]

    async def promote_to_final(self, invoice_id: str, confirm: Callable[[Record], bool]) -> Optional[Record]:
        """
        Convertir una proforma en factura final.

        ``confirm`` recibe la cabecera y decide si se continúa; si responde
        que no, no se escribe nada y se devuelve ``None``. Solo cambian
        ``type`` y ``status``: totales y líneas quedan intactos.
        """
        try:
            rows = await self.store.select("invoices", {"id": invoice_id})
        except RowStoreError as e:
            logger.error(f"Error fetching invoice {invoice_id}: {e}")
            raise FetchError("No se pudo cargar la factura") from e
        if not rows:
            raise NotFoundError("Factura no encontrada")

        header = rows[0]
        if header["type"] != InvoiceType.PROFORMA.value:
            raise ValidationError("Solo las facturas proforma pueden convertirse en finales")

        if not confirm(header):
            logger.info(f"Promotion of invoice {invoice_id} cancelled by user")
            return None

        try:
            updated = await self.store.update("invoices", invoice_id, {
                "type": InvoiceType.FINAL.value,
                "status": InvoiceStatus.PENDING.value
            })
        except RowStoreError as e:
            logger.error(f"Error promoting invoice {invoice_id}: {e}")
            raise PersistenceError("Error al convertir la factura") from e

        logger.info(f"Invoice {invoice_id} promoted to final")
        return updated
