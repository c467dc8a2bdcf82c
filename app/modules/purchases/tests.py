"""
Tests para el módulo de Compras
"""

import pytest
from decimal import Decimal

from app.common.exceptions import PersistenceError
from app.modules.purchases.schemas import PurchaseCreate, PurchaseStatus
from app.modules.purchases.service import PurchaseService


@pytest.fixture
def cement_purchase():
    return PurchaseCreate(
        project="Résidence 120 logements",
        item="Ciment CPJ 45",
        supplier="GICA",
        quantity=Decimal("200"),
        unit_price=Decimal("850.50")
    )


class TestPurchaseService:
    """Tests para PurchaseService"""

    async def test_total_is_quantity_times_price(self, store, cement_purchase):
        purchase = await PurchaseService(store).create_purchase(cement_purchase)
        assert purchase["total"] == Decimal("170100.00")
        assert purchase["status"] == PurchaseStatus.ORDERED.value

    async def test_create_failure(self, store, cement_purchase):
        store.fail("insert", "purchases")
        with pytest.raises(PersistenceError):
            await PurchaseService(store).create_purchase(cement_purchase)


class TestPurchaseAPI:
    def test_create_and_list(self, api_client):
        created = api_client.post("/purchases/", json={
            "item": "Rond à béton HA12", "quantity": "3.5", "unit_price": "98000", "status": "shipping"
        })
        assert created.status_code == 201
        assert Decimal(created.json()["total"]) == Decimal("343000")

        data = api_client.get("/purchases/").json()
        assert data["total"] == 1

    def test_zero_quantity_rejected(self, api_client):
        response = api_client.post("/purchases/", json={"item": "Sable", "quantity": "0", "unit_price": "10"})
        assert response.status_code == 422
