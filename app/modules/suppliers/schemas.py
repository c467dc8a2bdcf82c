from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import Optional, List


class SupplierBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    material_type: Optional[str] = Field(None, max_length=100)


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(BaseModel):
    """Todos los campos opcionales; solo se escriben los enviados"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    material_type: Optional[str] = Field(None, max_length=100)


class SupplierOut(SupplierBase):
    id: str
    total_purchases: Decimal = Decimal("0")

    model_config = ConfigDict(from_attributes=True)


class SupplierList(BaseModel):
    suppliers: List[SupplierOut]
    total: int
