from app.database.database import Base
from sqlalchemy import Column, String, Numeric, Text
from app.common.mixins import RecordMixin


class Client(Base, RecordMixin):
    __tablename__ = "clients"

    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    email = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Saldo adeudado por el cliente (se mantiene desde el ledger)
    total_debt = Column(Numeric(15, 2), nullable=False, default=0)
