from app.database.database import Base
from sqlalchemy import Column, String, Numeric, Date
from app.common.mixins import RecordMixin


class Purchase(Base, RecordMixin):
    __tablename__ = "purchases"

    date = Column(Date, nullable=False)
    project = Column(String(200), nullable=True)
    item = Column(String(200), nullable=False)
    supplier = Column(String(200), nullable=True)

    quantity = Column(Numeric(15, 3), nullable=False)
    unit_price = Column(Numeric(15, 2), nullable=False)
    total = Column(Numeric(15, 2), nullable=False)  # quantity * unit_price

    # ordered | shipping | received
    status = Column(String(20), nullable=False, default="ordered")
