"""
Tests para el módulo de Clientes
"""

import pytest
from decimal import Decimal

from app.common.exceptions import FetchError, NotFoundError, PersistenceError
from app.modules.clients.schemas import ClientCreate
from app.modules.clients.service import ClientService


# ===== FIXTURES =====

@pytest.fixture
def sample_client_data():
    return ClientCreate(
        name="Batimetal Sétif",
        phone="+213 36 12 34 56",
        address="Cité El Hidhab, Sétif",
        total_debt=Decimal("25000.00")
    )


# ===== TESTS DEL SERVICIO =====

class TestClientService:
    """Tests para ClientService"""

    async def test_create_client(self, store, sample_client_data):
        client = await ClientService(store).create_client(sample_client_data)
        assert client["id"]
        assert client["name"] == "Batimetal Sétif"
        assert store.writes() == [("insert", "clients")]

    async def test_create_client_failure(self, store, sample_client_data):
        store.fail("insert", "clients")
        with pytest.raises(PersistenceError):
            await ClientService(store).create_client(sample_client_data)

    async def test_list_clients_ordered_by_name(self, store):
        service = ClientService(store)
        for name in ("Zaki BTP", "Amenhyd", "Lafarge Algérie"):
            await service.create_client(ClientCreate(name=name))
        clients = await service.list_clients()
        assert [c["name"] for c in clients] == ["Amenhyd", "Lafarge Algérie", "Zaki BTP"]

    async def test_search_is_case_insensitive(self, store):
        service = ClientService(store)
        await service.create_client(ClientCreate(name="Lafarge Algérie"))
        await service.create_client(ClientCreate(name="Amenhyd"))
        clients = await service.list_clients("LAFARGE")
        assert [c["name"] for c in clients] == ["Lafarge Algérie"]

    async def test_get_client(self, store, sample_client):
        client = await ClientService(store).get_client(sample_client["id"])
        assert client["name"] == sample_client["name"]

    async def test_get_missing_client(self, store):
        with pytest.raises(NotFoundError):
            await ClientService(store).get_client("missing")

    async def test_list_failure(self, store):
        store.fail("select", "clients")
        with pytest.raises(FetchError):
            await ClientService(store).list_clients()


# ===== TESTS DE API =====

class TestClientAPI:
    """Tests para los endpoints de clientes"""

    def test_create_and_get(self, api_client):
        created = api_client.post("/clients/", json={"name": "Cosider", "phone": "021 00 00 00"})
        assert created.status_code == 201
        client_id = created.json()["id"]

        response = api_client.get(f"/clients/{client_id}")
        assert response.status_code == 200
        assert response.json()["phone"] == "021 00 00 00"
        assert Decimal(response.json()["total_debt"]) == Decimal("0")

    def test_create_requires_name(self, api_client):
        assert api_client.post("/clients/", json={"name": ""}).status_code == 422

    def test_list_with_search(self, api_client):
        api_client.post("/clients/", json={"name": "Cosider"})
        api_client.post("/clients/", json={"name": "ETRHB Haddad"})
        data = api_client.get("/clients/", params={"search": "cos"}).json()
        assert data["total"] == 1
        assert data["clients"][0]["name"] == "Cosider"

    def test_missing_client_404(self, api_client):
        response = api_client.get("/clients/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Cliente no encontrado"
