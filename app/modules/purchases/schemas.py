from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List
import datetime
from enum import Enum


class PurchaseStatus(str, Enum):
    ORDERED = "ordered"
    SHIPPING = "shipping"
    RECEIVED = "received"


class PurchaseCreate(BaseModel):
    date: datetime.date = Field(default_factory=datetime.date.today)
    project: Optional[str] = Field(None, max_length=200)
    item: str = Field(..., min_length=1, max_length=200)
    supplier: Optional[str] = Field(None, max_length=200)
    quantity: Decimal = Field(..., gt=0, description="Cantidad debe ser mayor a 0")
    unit_price: Decimal = Field(..., ge=0)
    status: PurchaseStatus = PurchaseStatus.ORDERED


class PurchaseOut(PurchaseCreate):
    id: str
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class PurchaseList(BaseModel):
    purchases: List[PurchaseOut]
    total: int
