from fastapi import APIRouter, Query, status
from typing import Optional

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.suppliers.service import SupplierService
from app.modules.suppliers.schemas import (
    SupplierCreate, SupplierUpdate, SupplierOut, SupplierList
)

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("/", response_model=SupplierList)
async def list_suppliers(
    store: row_store_dependency,
    search: Optional[str] = Query(None, description="Buscar por nombre o tipo de material"),
):
    suppliers = await SupplierService(store).list_suppliers(search)
    return SupplierList(suppliers=suppliers, total=len(suppliers))


@router.post("/", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
async def create_supplier(supplier_data: SupplierCreate, store: row_store_dependency):
    """Registrar un nuevo proveedor"""
    return await SupplierService(store).create_supplier(supplier_data)


@router.get("/{supplier_id}", response_model=SupplierOut)
async def get_supplier(supplier_id: str, store: row_store_dependency):
    return await SupplierService(store).get_supplier(supplier_id)


@router.patch("/{supplier_id}", response_model=SupplierOut)
async def update_supplier(supplier_id: str, supplier_data: SupplierUpdate, store: row_store_dependency):
    """Actualizar solo los campos enviados"""
    return await SupplierService(store).update_supplier(supplier_id, supplier_data)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(supplier_id: str, store: row_store_dependency):
    await SupplierService(store).delete_supplier(supplier_id)
