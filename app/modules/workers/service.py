from typing import List
import logging

from app.common.exceptions import FetchError, PersistenceError, RowStoreError
from app.database.row_store import Record, RowStore
from app.modules.workers.schemas import WorkerCreate

logger = logging.getLogger(__name__)


class WorkerService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_workers(self) -> List[Record]:
        try:
            return await self.store.select("workers", order_by="name")
        except RowStoreError as e:
            logger.error(f"Error fetching workers: {e}")
            raise FetchError("No se pudieron cargar los obreros") from e

    @staticmethod
    def count_active(workers: List[Record]) -> int:
        return sum(1 for worker in workers if worker.get("is_active"))

    async def create_worker(self, worker_data: WorkerCreate) -> Record:
        try:
            worker = await self.store.insert("workers", worker_data.model_dump())
        except RowStoreError as e:
            logger.error(f"Error creating worker: {e}")
            raise PersistenceError("Error al registrar el obrero") from e
        logger.info(f"Worker {worker['id']} created ({worker_data.trade})")
        return worker
