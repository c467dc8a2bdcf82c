from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List


class WorkerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    trade: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    daily_rate: Decimal = Field(Decimal("0"), ge=0, description="Jornal diario")
    current_project: Optional[str] = Field(None, max_length=200)
    is_active: bool = True


class WorkerOut(WorkerCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


class WorkerList(BaseModel):
    workers: List[WorkerOut]
    total: int
    active: int = Field(description="Obreros activos")
