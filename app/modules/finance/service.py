"""
Financial Service

Resumen calculado en memoria a partir de los movimientos, los saldos de
clientes y las compras pendientes de recibir.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
import logging

from app.common.exceptions import FetchError, PersistenceError, RowStoreError
from app.database.row_store import Record, RowStore
from app.modules.finance.schemas import FinanceSummary, TransactionCreate, TransactionType
from app.modules.purchases.schemas import PurchaseStatus

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _amount(value) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class FinanceService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_transactions(self) -> List[Record]:
        try:
            return await self.store.select("transactions", order_by="date", descending=True)
        except RowStoreError as e:
            logger.error(f"Error fetching transactions: {e}")
            raise FetchError("No se pudieron cargar los movimientos") from e

    async def create_transaction(self, transaction_data: TransactionCreate) -> Record:
        record = transaction_data.model_dump()
        record["type"] = transaction_data.type.value
        record["method"] = transaction_data.method.value
        try:
            transaction = await self.store.insert("transactions", record)
        except RowStoreError as e:
            logger.error(f"Error creating transaction: {e}")
            raise PersistenceError("Error al registrar el movimiento") from e
        logger.info(f"Transaction {transaction['id']} created ({record['type']} {record['amount']})")
        return transaction

    async def summary(self, today: Optional[date] = None) -> FinanceSummary:
        """Saldo neto, totales del mes en curso y deudas pendientes"""
        today = today or date.today()
        try:
            transactions = await self.store.select("transactions")
            clients = await self.store.select("clients")
            purchases = await self.store.select("purchases")
        except RowStoreError as e:
            logger.error(f"Error fetching finance data: {e}")
            raise FetchError("No se pudieron cargar los datos financieros") from e

        income = ZERO
        expense = ZERO
        monthly_income = ZERO
        monthly_expense = ZERO
        for tx in transactions:
            amount = _amount(tx.get("amount"))
            tx_date = _as_date(tx["date"])
            in_month = (tx_date.year, tx_date.month) == (today.year, today.month)
            if tx.get("type") == TransactionType.INCOME.value:
                income += amount
                if in_month:
                    monthly_income += amount
            elif tx.get("type") == TransactionType.EXPENSE.value:
                expense += amount
                if in_month:
                    monthly_expense += amount

        client_debt = sum((_amount(c.get("total_debt")) for c in clients), ZERO)
        supplier_debt = sum(
            (_amount(p.get("total")) for p in purchases if p.get("status") != PurchaseStatus.RECEIVED.value),
            ZERO
        )

        return FinanceSummary(
            balance=income - expense,
            monthly_income=monthly_income,
            monthly_expense=monthly_expense,
            client_debt=client_debt,
            supplier_debt=supplier_debt,
            month=today.strftime("%Y-%m")
        )
