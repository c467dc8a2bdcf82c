"""
Common mixins for row-store models
"""
from sqlalchemy import Column, DateTime, String, inspect
from sqlalchemy.sql import func
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


class TimestampMixin:
    """Mixin for models that need timestamp tracking"""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class RecordMixin(TimestampMixin):
    """
    Identificador opaco generado por el backend + serialización a dict.

    Los servicios solo ven diccionarios planos; ``to_record`` es la única
    forma en que un modelo sale del row store.
    """

    id = Column(String(36), primary_key=True, default=generate_id, index=True)

    def to_record(self, include=()) -> dict:
        mapper = inspect(self).mapper
        record = {attr.key: getattr(self, attr.key) for attr in mapper.column_attrs}
        for name in include:
            value = getattr(self, name)
            if value is None:
                record[name] = None
            elif isinstance(value, (list, tuple)):
                record[name] = [child.to_record() for child in value]
            else:
                record[name] = value.to_record()
        return record
