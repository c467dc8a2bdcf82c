from typing import List
import logging

from app.common.exceptions import FetchError, PersistenceError, RowStoreError
from app.database.row_store import Record, RowStore
from app.modules.purchases.schemas import PurchaseCreate

logger = logging.getLogger(__name__)


class PurchaseService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_purchases(self) -> List[Record]:
        try:
            return await self.store.select("purchases", order_by="date", descending=True)
        except RowStoreError as e:
            logger.error(f"Error fetching purchases: {e}")
            raise FetchError("No se pudieron cargar las compras") from e

    async def create_purchase(self, purchase_data: PurchaseCreate) -> Record:
        record = purchase_data.model_dump()
        record["status"] = purchase_data.status.value
        record["total"] = purchase_data.quantity * purchase_data.unit_price
        try:
            purchase = await self.store.insert("purchases", record)
        except RowStoreError as e:
            logger.error(f"Error creating purchase: {e}")
            raise PersistenceError("Error al registrar la compra") from e
        logger.info(f"Purchase {purchase['id']} created ({record['total']})")
        return purchase
