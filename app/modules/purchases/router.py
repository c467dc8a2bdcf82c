from fastapi import APIRouter, status

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.purchases.service import PurchaseService
from app.modules.purchases.schemas import PurchaseCreate, PurchaseOut, PurchaseList

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.get("/", response_model=PurchaseList)
async def list_purchases(store: row_store_dependency):
    purchases = await PurchaseService(store).list_purchases()
    return PurchaseList(purchases=purchases, total=len(purchases))


@router.post("/", response_model=PurchaseOut, status_code=status.HTTP_201_CREATED)
async def create_purchase(purchase_data: PurchaseCreate, store: row_store_dependency):
    """Registrar una compra; el total es cantidad x precio unitario"""
    return await PurchaseService(store).create_purchase(purchase_data)
