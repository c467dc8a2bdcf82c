from typing import List, Optional
import logging

from app.common.exceptions import (
    FetchError, NotFoundError, PersistenceError, RowStoreError, ValidationError
)
from app.database.row_store import Record, RowStore
from app.modules.suppliers.schemas import SupplierCreate, SupplierUpdate

logger = logging.getLogger(__name__)

TABLE = "suppliers"


class SupplierService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_suppliers(self, search: Optional[str] = None) -> List[Record]:
        """Listar por nombre; ``search`` busca en nombre y tipo de material"""
        try:
            rows = await self.store.select(TABLE, order_by="name")
        except RowStoreError as e:
            logger.error(f"Error fetching suppliers: {e}")
            raise FetchError("No se pudieron cargar los proveedores") from e

        if search:
            needle = search.strip().lower()
            rows = [
                r for r in rows
                if needle in (r.get("name") or "").lower()
                or needle in (r.get("material_type") or "").lower()
            ]
        return rows

    async def get_supplier(self, supplier_id: str) -> Record:
        try:
            rows = await self.store.select(TABLE, {"id": supplier_id})
        except RowStoreError as e:
            logger.error(f"Error fetching supplier {supplier_id}: {e}")
            raise FetchError("No se pudo cargar el proveedor") from e
        if not rows:
            raise NotFoundError("Proveedor no encontrado")
        return rows[0]

    async def create_supplier(self, supplier_data: SupplierCreate) -> Record:
        try:
            supplier = await self.store.insert(TABLE, supplier_data.model_dump())
        except RowStoreError as e:
            logger.error(f"Error creating supplier: {e}")
            raise PersistenceError("Error al registrar el proveedor") from e
        logger.info(f"Supplier {supplier['id']} created")
        return supplier

    async def update_supplier(self, supplier_id: str, supplier_data: SupplierUpdate) -> Record:
        patch = supplier_data.model_dump(exclude_unset=True)
        if "name" in patch and not patch["name"]:
            raise ValidationError("El nombre del proveedor es obligatorio")

        current = await self.get_supplier(supplier_id)
        if not patch:
            return current

        try:
            supplier = await self.store.update(TABLE, supplier_id, patch)
        except RowStoreError as e:
            logger.error(f"Error updating supplier {supplier_id}: {e}")
            raise PersistenceError("Error al actualizar el proveedor") from e
        logger.info(f"Supplier {supplier_id} updated ({', '.join(patch)})")
        return supplier

    async def delete_supplier(self, supplier_id: str) -> None:
        await self.get_supplier(supplier_id)
        try:
            await self.store.delete(TABLE, supplier_id)
        except RowStoreError as e:
            logger.error(f"Error deleting supplier {supplier_id}: {e}")
            raise PersistenceError("Error al eliminar el proveedor") from e
        logger.info(f"Supplier {supplier_id} deleted")
