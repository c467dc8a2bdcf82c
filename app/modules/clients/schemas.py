from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List
from datetime import datetime


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    email: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    total_debt: Decimal = Field(Decimal("0"), ge=0)


class ClientOut(ClientBase):
    id: str
    total_debt: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClientList(BaseModel):
    clients: List[ClientOut]
    total: int


class ClientForInvoice(BaseModel):
    """Datos mínimos del cliente que se imprimen en la factura"""
    id: str
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
