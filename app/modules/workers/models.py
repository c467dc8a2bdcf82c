from app.database.database import Base
from sqlalchemy import Boolean, Column, String, Numeric
from app.common.mixins import RecordMixin


class Worker(Base, RecordMixin):
    __tablename__ = "workers"

    name = Column(String(200), nullable=False)
    trade = Column(String(100), nullable=False)  # albañil, fontanero, electricista...
    phone = Column(String(50), nullable=True)
    daily_rate = Column(Numeric(15, 2), nullable=False, default=0)
    current_project = Column(String(200), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
