from fastapi import Depends
from typing import Annotated
from app.database.database import AsyncSessionLocal
from app.database.row_store import RowStore, SqlAlchemyRowStore

_row_store = None


def get_row_store() -> RowStore:
    """Row store compartido por los endpoints (se sobreescribe en tests)."""
    global _row_store
    if _row_store is None:
        _row_store = SqlAlchemyRowStore(AsyncSessionLocal)
    return _row_store


row_store_dependency = Annotated[RowStore, Depends(get_row_store)]
