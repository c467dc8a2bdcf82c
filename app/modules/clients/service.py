from typing import List, Optional
import logging

from app.common.exceptions import FetchError, NotFoundError, PersistenceError, RowStoreError
from app.database.row_store import Record, RowStore
from app.modules.clients.schemas import ClientCreate

logger = logging.getLogger(__name__)

TABLE = "clients"


class ClientService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_clients(self, search: Optional[str] = None) -> List[Record]:
        """Listar clientes por nombre; ``search`` filtra sin distinguir mayúsculas"""
        try:
            rows = await self.store.select(TABLE, order_by="name")
        except RowStoreError as e:
            logger.error(f"Error fetching clients: {e}")
            raise FetchError("No se pudieron cargar los clientes") from e

        if search:
            needle = search.strip().lower()
            rows = [r for r in rows if needle in (r.get("name") or "").lower()]
        return rows

    async def get_client(self, client_id: str) -> Record:
        try:
            rows = await self.store.select(TABLE, {"id": client_id})
        except RowStoreError as e:
            logger.error(f"Error fetching client {client_id}: {e}")
            raise FetchError("No se pudo cargar el cliente") from e
        if not rows:
            raise NotFoundError("Cliente no encontrado")
        return rows[0]

    async def create_client(self, client_data: ClientCreate) -> Record:
        try:
            client = await self.store.insert(TABLE, client_data.model_dump())
        except RowStoreError as e:
            logger.error(f"Error creating client: {e}")
            raise PersistenceError("Error al registrar el cliente") from e
        logger.info(f"Client {client['id']} created")
        return client
