"""
Tests para el módulo de Finanzas

Cubren el resumen mensual (año y mes), saldo neto y deudas pendientes.
"""

import pytest
from datetime import date
from decimal import Decimal

from app.common.exceptions import FetchError
from app.modules.finance.schemas import TransactionCreate, TransactionType
from app.modules.finance.service import FinanceService


# ===== FIXTURES =====

@pytest.fixture
async def ledger(store, sample_client):
    """Movimientos de dos años distintos en el mismo mes + compras"""
    service = FinanceService(store)
    movements = [
        ("Acompte Résidence", "300000", date(2024, 6, 3), TransactionType.INCOME),
        ("Paiement Lycée", "200000", date(2023, 6, 15), TransactionType.INCOME),
        ("Location grue", "50000", date(2024, 6, 20), TransactionType.EXPENSE),
        ("Salaires mai", "120000", date(2024, 5, 31), TransactionType.EXPENSE),
    ]
    for description, amount, day, kind in movements:
        await service.create_transaction(TransactionCreate(
            description=description, amount=Decimal(amount), date=day, type=kind
        ))
    await store.insert("purchases", {"item": "Ciment", "total": Decimal("40000"), "status": "ordered"})
    await store.insert("purchases", {"item": "Gravier", "total": Decimal("15000"), "status": "shipping"})
    await store.insert("purchases", {"item": "Sable", "total": Decimal("9000"), "status": "received"})
    store.calls.clear()
    return service


class TestFinanceSummary:
    """Tests para FinanceService.summary"""

    async def test_balance_is_income_minus_expense(self, ledger):
        summary = await ledger.summary(date(2024, 6, 25))
        assert summary.balance == Decimal("330000")

    async def test_monthly_totals_match_year_and_month(self, ledger):
        """Test junio 2023 no cuenta para junio 2024"""
        summary = await ledger.summary(date(2024, 6, 25))
        assert summary.monthly_income == Decimal("300000")
        assert summary.monthly_expense == Decimal("50000")
        assert summary.month == "2024-06"

    async def test_debts(self, ledger, sample_client):
        summary = await ledger.summary(date(2024, 6, 25))
        assert summary.client_debt == sample_client["total_debt"]
        assert summary.supplier_debt == Decimal("55000")

    async def test_empty_month(self, ledger):
        summary = await ledger.summary(date(2024, 7, 1))
        assert summary.monthly_income == Decimal("0")
        assert summary.monthly_expense == Decimal("0")

    async def test_read_failure(self, store):
        store.fail("select", "purchases")
        with pytest.raises(FetchError):
            await FinanceService(store).summary(date(2024, 6, 1))


class TestFinanceAPI:
    def test_transactions_and_summary(self, api_client):
        created = api_client.post("/finance/transactions", json={
            "description": "Acompte", "amount": "1000", "date": "2024-06-03",
            "type": "income", "method": "transfer"
        })
        assert created.status_code == 201
        assert created.json()["method"] == "transfer"

        assert api_client.get("/finance/transactions").json()["total"] == 1

        summary = api_client.get("/finance/summary", params={"as_of": "2024-06-30"}).json()
        assert Decimal(summary["monthly_income"]) == Decimal("1000")
        assert Decimal(summary["balance"]) == Decimal("1000")

    def test_negative_amount_rejected(self, api_client):
        response = api_client.post("/finance/transactions", json={
            "description": "X", "amount": "-5", "type": "expense"
        })
        assert response.status_code == 422
