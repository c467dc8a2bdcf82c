from app.database.database import Base
from sqlalchemy import Column, Integer, String, Numeric, Date
from app.common.mixins import RecordMixin


class Project(Base, RecordMixin):
    __tablename__ = "projects"

    name = Column(String(200), nullable=False)
    client = Column(String(200), nullable=True)  # Nombre libre del cliente de la obra
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # active | completed | delayed | pending
    status = Column(String(20), nullable=False, default="pending")

    budget = Column(Numeric(15, 2), nullable=False, default=0)
    expenses = Column(Numeric(15, 2), nullable=False, default=0)
    progress = Column(Integer, nullable=False, default=0)  # 0-100
