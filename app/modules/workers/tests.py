"""
Tests para el módulo de Obreros
"""

import pytest
from decimal import Decimal

from app.common.exceptions import FetchError, PersistenceError
from app.modules.workers.schemas import WorkerCreate
from app.modules.workers.service import WorkerService


# ===== FIXTURES =====

@pytest.fixture
def sample_worker_data():
    return WorkerCreate(
        name="Mourad Hamidi",
        trade="Coffreur",
        phone="0661 22 33 44",
        daily_rate=Decimal("3500.00"),
        current_project="Résidence 120 logements LPP"
    )


# ===== TESTS DEL SERVICIO =====

class TestWorkerService:
    """Tests para WorkerService"""

    async def test_create_worker(self, store, sample_worker_data):
        worker = await WorkerService(store).create_worker(sample_worker_data)
        assert worker["id"]
        assert worker["is_active"] is True
        assert worker["daily_rate"] == Decimal("3500.00")
        assert store.writes() == [("insert", "workers")]

    async def test_create_worker_failure(self, store, sample_worker_data):
        store.fail("insert", "workers")
        with pytest.raises(PersistenceError):
            await WorkerService(store).create_worker(sample_worker_data)

    async def test_list_ordered_by_name_and_active_count(self, store):
        service = WorkerService(store)
        await service.create_worker(WorkerCreate(name="Yacine Ferhat", trade="Ferrailleur"))
        await service.create_worker(WorkerCreate(name="Ali Bouzid", trade="Maçon", is_active=False))
        await service.create_worker(WorkerCreate(name="Karim Saadi", trade="Électricien"))

        workers = await service.list_workers()
        assert [w["name"] for w in workers] == ["Ali Bouzid", "Karim Saadi", "Yacine Ferhat"]
        assert WorkerService.count_active(workers) == 2

    async def test_list_failure(self, store):
        store.fail("select", "workers")
        with pytest.raises(FetchError):
            await WorkerService(store).list_workers()


class TestWorkerSchemas:
    """Validación de datos de entrada"""

    def test_negative_daily_rate_rejected(self):
        with pytest.raises(ValueError):
            WorkerCreate(name="X", trade="Maçon", daily_rate=Decimal("-1"))

    def test_trade_required(self):
        with pytest.raises(ValueError):
            WorkerCreate(name="X", trade="")


# ===== TESTS DE API =====

class TestWorkerAPI:
    """Tests para los endpoints de obreros"""

    def test_create_and_list(self, api_client):
        created = api_client.post("/workers/", json={
            "name": "Mourad Hamidi", "trade": "Coffreur", "daily_rate": "3500.00"
        })
        assert created.status_code == 201
        assert created.json()["is_active"] is True

        api_client.post("/workers/", json={"name": "Ali Bouzid", "trade": "Maçon", "is_active": False})

        response = api_client.get("/workers/")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["active"] == 1
        assert [w["name"] for w in data["workers"]] == ["Ali Bouzid", "Mourad Hamidi"]

    def test_list_failure_returns_503(self, api_client, store):
        store.fail("select", "workers")
        response = api_client.get("/workers/")
        assert response.status_code == 503
