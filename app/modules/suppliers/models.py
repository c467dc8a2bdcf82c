from app.database.database import Base
from sqlalchemy import Column, String, Numeric, Text
from app.common.mixins import RecordMixin


class Supplier(Base, RecordMixin):
    __tablename__ = "suppliers"

    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    material_type = Column(String(100), nullable=True)  # cemento, acero, áridos...

    # Acumulado de compras al proveedor
    total_purchases = Column(Numeric(15, 2), nullable=False, default=0)
