from fastapi import APIRouter, Query, status
from datetime import date
from typing import Optional

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.finance.service import FinanceService
from app.modules.finance.schemas import (
    FinanceSummary, TransactionCreate, TransactionOut, TransactionList
)

router = APIRouter(prefix="/finance", tags=["Finance"])


@router.get("/transactions", response_model=TransactionList)
async def list_transactions(store: row_store_dependency):
    transactions = await FinanceService(store).list_transactions()
    return TransactionList(transactions=transactions, total=len(transactions))


@router.post("/transactions", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
async def create_transaction(transaction_data: TransactionCreate, store: row_store_dependency):
    """Registrar un ingreso o un gasto"""
    return await FinanceService(store).create_transaction(transaction_data)


@router.get("/summary", response_model=FinanceSummary)
async def get_summary(
    store: row_store_dependency,
    as_of: Optional[date] = Query(None, description="Fecha de referencia (YYYY-MM-DD), por defecto hoy"),
):
    """Resumen financiero: saldo, mes en curso y deudas"""
    return await FinanceService(store).summary(as_of)
