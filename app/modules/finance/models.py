from app.database.database import Base
from sqlalchemy import Column, String, Numeric, Date, Text, ForeignKey
from app.common.mixins import RecordMixin


class Transaction(Base, RecordMixin):
    __tablename__ = "transactions"

    description = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    date = Column(Date, nullable=False)
    method = Column(String(20), nullable=True)  # cash | check | transfer
    status = Column(String(20), nullable=False, default="completed")

    # income | expense
    type = Column(String(10), nullable=False)
    category = Column(String(50), nullable=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=True)
