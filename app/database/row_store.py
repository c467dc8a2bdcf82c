"""
Row store: colaborador CRUD genérico sobre el que trabajan todos los servicios.

El contrato es pequeño (select / insert / update / delete) y
devuelve diccionarios planos, de modo que los servicios se pueden probar con
un doble en memoria y en producción se usa ``SqlAlchemyRowStore``.
"""
from typing import Any, Dict, Iterable, List, Optional, Protocol
import logging

from sqlalchemy import delete as sql_delete, select as sql_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.common.exceptions import RowStoreError
from app.database.database import Base, load_models

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RowStore(Protocol):
    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        include: Iterable[str] = (),
    ) -> List[Record]:
        ...

    async def insert(self, table: str, record: Record) -> Record:
        ...

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        ...

    async def delete(self, table: str, record_id: str) -> None:
        ...


class SqlAlchemyRowStore:
    """Row store respaldado por el ORM async de SQLAlchemy (una sesión por operación)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        load_models()
        self._models = {
            mapper.class_.__tablename__: mapper.class_
            for mapper in Base.registry.mappers
        }

    def _model(self, table: str):
        try:
            return self._models[table]
        except KeyError:
            raise RowStoreError(f"Tabla desconocida: {table}") from None

    @staticmethod
    def _column(model, name: str):
        if name not in model.__table__.columns:
            raise RowStoreError(f"Columna desconocida: {model.__tablename__}.{name}")
        return getattr(model, name)

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        include: Iterable[str] = (),
    ) -> List[Record]:
        model = self._model(table)
        include = tuple(include)
        stmt = sql_select(model)
        for name, value in (filters or {}).items():
            stmt = stmt.where(self._column(model, name) == value)
        if order_by:
            column = self._column(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        for name in include:
            if name not in model.__mapper__.relationships:
                raise RowStoreError(f"Relación desconocida: {table}.{name}")
            stmt = stmt.options(selectinload(getattr(model, name)))

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [row.to_record(include) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Select on {table} failed: {e}")
            raise RowStoreError(str(e)) from e

    async def insert(self, table: str, record: Record) -> Record:
        model = self._model(table)
        try:
            async with self.session_factory() as session:
                obj = model(**record)
                session.add(obj)
                await session.commit()
                await session.refresh(obj)
                return obj.to_record()
        except (SQLAlchemyError, TypeError) as e:
            logger.error(f"Insert into {table} failed: {e}")
            raise RowStoreError(str(e)) from e

    async def update(self, table: str, record_id: str, patch: Record) -> Record:
        model = self._model(table)
        try:
            async with self.session_factory() as session:
                obj = await session.get(model, record_id)
                if obj is None:
                    raise RowStoreError(f"{table} {record_id} no existe")
                for name, value in patch.items():
                    self._column(model, name)
                    setattr(obj, name, value)
                await session.commit()
                await session.refresh(obj)
                return obj.to_record()
        except SQLAlchemyError as e:
            logger.error(f"Update of {table} {record_id} failed: {e}")
            raise RowStoreError(str(e)) from e

    async def delete(self, table: str, record_id: str) -> None:
        model = self._model(table)
        try:
            async with self.session_factory() as session:
                await session.execute(sql_delete(model).where(model.id == record_id))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Delete of {table} {record_id} failed: {e}")
            raise RowStoreError(str(e)) from e
