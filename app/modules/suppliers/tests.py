"""
Tests para el módulo de Proveedores
"""

import pytest
from decimal import Decimal

from app.common.exceptions import FetchError, NotFoundError, PersistenceError, ValidationError
from app.modules.suppliers.schemas import SupplierCreate, SupplierUpdate
from app.modules.suppliers.service import SupplierService


# ===== FIXTURES =====

@pytest.fixture
def sample_supplier_data():
    return SupplierCreate(
        name="GICA Ain El Kebira",
        phone="036 88 10 00",
        address="Zone industrielle, Ain El Kebira",
        material_type="Ciment"
    )


@pytest.fixture
async def sample_supplier(store):
    """Proveedor registrado en el store en memoria"""
    supplier = await store.insert("suppliers", {
        "name": "Tosyali Algérie",
        "phone": "041 00 00 00",
        "address": "Bethioua, Oran",
        "material_type": "Acier",
        "total_purchases": Decimal("980000.00"),
    })
    store.calls.clear()
    return supplier


# ===== TESTS DEL SERVICIO =====

class TestSupplierService:
    """Tests para SupplierService"""

    async def test_create_supplier(self, store, sample_supplier_data):
        supplier = await SupplierService(store).create_supplier(sample_supplier_data)
        assert supplier["id"]
        assert supplier["material_type"] == "Ciment"
        assert store.writes() == [("insert", "suppliers")]

    async def test_create_supplier_failure(self, store, sample_supplier_data):
        store.fail("insert", "suppliers")
        with pytest.raises(PersistenceError):
            await SupplierService(store).create_supplier(sample_supplier_data)

    async def test_search_by_name_or_material(self, store):
        service = SupplierService(store)
        await service.create_supplier(SupplierCreate(name="Sablière Ain Lahdjar", material_type="Sable"))
        await service.create_supplier(SupplierCreate(name="GICA", material_type="Ciment"))
        await service.create_supplier(SupplierCreate(name="ENG Sétif", material_type="Gravier"))

        assert [s["name"] for s in await service.list_suppliers()] == [
            "ENG Sétif", "GICA", "Sablière Ain Lahdjar"
        ]
        assert [s["name"] for s in await service.list_suppliers("ciment")] == ["GICA"]
        assert [s["name"] for s in await service.list_suppliers("SABLI")] == ["Sablière Ain Lahdjar"]
        assert await service.list_suppliers("bois") == []

    async def test_list_failure(self, store):
        store.fail("select", "suppliers")
        with pytest.raises(FetchError):
            await SupplierService(store).list_suppliers()

    async def test_get_missing_supplier(self, store):
        with pytest.raises(NotFoundError):
            await SupplierService(store).get_supplier("missing")

    async def test_update_only_sent_fields(self, store, sample_supplier):
        updated = await SupplierService(store).update_supplier(
            sample_supplier["id"], SupplierUpdate(phone="041 11 11 11")
        )
        assert updated["phone"] == "041 11 11 11"
        assert updated["name"] == "Tosyali Algérie"
        assert updated["total_purchases"] == Decimal("980000.00")
        assert store.writes() == [("update", "suppliers")]

    async def test_update_with_empty_name_rejected(self, store, sample_supplier):
        with pytest.raises(ValidationError):
            await SupplierService(store).update_supplier(sample_supplier["id"], SupplierUpdate(name=None))
        assert store.writes() == []

    async def test_update_missing_supplier(self, store):
        with pytest.raises(NotFoundError):
            await SupplierService(store).update_supplier("missing", SupplierUpdate(phone="1"))
        assert store.writes() == []

    async def test_update_failure(self, store, sample_supplier):
        store.fail("update", "suppliers")
        with pytest.raises(PersistenceError):
            await SupplierService(store).update_supplier(sample_supplier["id"], SupplierUpdate(phone="1"))

    async def test_delete_supplier(self, store, sample_supplier):
        await SupplierService(store).delete_supplier(sample_supplier["id"])
        assert store.rows("suppliers") == []
        assert store.writes() == [("delete", "suppliers")]

    async def test_delete_missing_supplier(self, store):
        with pytest.raises(NotFoundError):
            await SupplierService(store).delete_supplier("missing")
        assert store.writes() == []

    async def test_delete_failure(self, store, sample_supplier):
        store.fail("delete", "suppliers")
        with pytest.raises(PersistenceError):
            await SupplierService(store).delete_supplier(sample_supplier["id"])
        assert len(store.rows("suppliers")) == 1


# ===== TESTS DE API =====

class TestSupplierAPI:
    """Tests para los endpoints de proveedores"""

    def test_crud_flow(self, api_client):
        created = api_client.post("/suppliers/", json={"name": "GICA", "material_type": "Ciment"})
        assert created.status_code == 201
        supplier_id = created.json()["id"]
        assert created.json()["total_purchases"] == "0"

        response = api_client.patch(f"/suppliers/{supplier_id}", json={"address": "Sétif"})
        assert response.status_code == 200
        assert response.json()["address"] == "Sétif"
        assert response.json()["name"] == "GICA"

        response = api_client.get("/suppliers/", params={"search": "cim"})
        assert response.json()["total"] == 1

        response = api_client.delete(f"/suppliers/{supplier_id}")
        assert response.status_code == 204

        response = api_client.get(f"/suppliers/{supplier_id}")
        assert response.status_code == 404

    def test_delete_missing_returns_404(self, api_client):
        response = api_client.delete("/suppliers/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Proveedor no encontrado"

    def test_update_failure_returns_500(self, api_client, store):
        created = api_client.post("/suppliers/", json={"name": "ENG Sétif"})
        store.fail("update", "suppliers")
        response = api_client.patch(f"/suppliers/{created.json()['id']}", json={"phone": "1"})
        assert response.status_code == 500
