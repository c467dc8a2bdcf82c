"""
Base service class for Reports module

Provides the row store access and error translation shared by all report
services.
"""

from typing import Any, Dict, List, Optional
import logging

from app.common.exceptions import FetchError, RowStoreError
from app.database.row_store import Record, RowStore

logger = logging.getLogger(__name__)


class BaseReportService:
    """Base service class for all report services"""

    def __init__(self, store: RowStore):
        self.store = store

    async def _fetch(self, table: str, filters: Optional[Dict[str, Any]] = None, **options) -> List[Record]:
        """Read rows for a report; any failure becomes FetchError"""
        try:
            return await self.store.select(table, filters, **options)
        except RowStoreError as e:
            logger.error(f"Error fetching {table} for report: {e}")
            raise FetchError(f"No se pudieron cargar los datos del reporte ({table})") from e
