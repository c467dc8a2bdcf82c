"""
Tests del SqlAlchemyRowStore contra SQLite (aiosqlite)
"""

import pytest
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.common.exceptions import RowStoreError
from app.database.database import build_engine, create_tables
from app.database.row_store import SqlAlchemyRowStore
from app.modules.invoices.builder import InvoiceBuilder
from app.modules.invoices.renderer import HtmlPrintSurface, InvoiceDocumentRenderer
from app.modules.invoices.schemas import InvoiceType, Unit
from app.modules.invoices.service import InvoiceService


# ===== FIXTURES =====

@pytest.fixture
async def sql_store(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'rows.db'}")
    await create_tables(engine)
    yield SqlAlchemyRowStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


@pytest.fixture
async def saved_client(sql_store):
    return await sql_store.insert("clients", {"name": "Cosider", "address": "Alger"})


class TestSqlAlchemyRowStore:
    """Tests del contrato select / insert / update / delete"""

    async def test_insert_generates_id_and_timestamps(self, saved_client):
        assert len(saved_client["id"]) == 36
        assert saved_client["created_at"] is not None
        assert saved_client["total_debt"] == Decimal("0")

    async def test_select_with_filters_and_order(self, sql_store):
        for name in ("Zaki BTP", "Amenhyd"):
            await sql_store.insert("clients", {"name": name})
        rows = await sql_store.select("clients", order_by="name")
        assert [r["name"] for r in rows] == ["Amenhyd", "Zaki BTP"]
        rows = await sql_store.select("clients", {"name": "Zaki BTP"})
        assert len(rows) == 1

    async def test_update_and_delete(self, sql_store, saved_client):
        updated = await sql_store.update("clients", saved_client["id"], {"phone": "021 00 00 00"})
        assert updated["phone"] == "021 00 00 00"

        await sql_store.delete("clients", saved_client["id"])
        assert await sql_store.select("clients") == []

    async def test_update_missing_row(self, sql_store):
        with pytest.raises(RowStoreError):
            await sql_store.update("clients", "missing", {"name": "X"})

    async def test_unknown_table_and_column(self, sql_store):
        with pytest.raises(RowStoreError):
            await sql_store.select("transport_trips")
        with pytest.raises(RowStoreError):
            await sql_store.select("clients", {"nif": "1"})
        with pytest.raises(RowStoreError):
            await sql_store.select("clients", include=("invoices",))

    async def test_insert_unknown_field(self, sql_store):
        with pytest.raises(RowStoreError):
            await sql_store.insert("clients", {"name": "X", "nif": "1"})


class TestInvoicePipelineOnSql:
    """Guardado, lectura con relaciones, conversión e impresión sobre SQLite"""

    async def test_save_promote_and_render(self, sql_store, saved_client):
        builder = InvoiceBuilder(InvoiceType.PROFORMA, tax_rate=Decimal("0.19"))
        builder.client_id = saved_client["id"]
        first = builder.items[0]
        builder.update_item(first.id, "description", "Concrete supply")
        builder.update_item(first.id, "unit", Unit.CUBIC_METER)
        builder.update_item(first.id, "quantity", Decimal("10"))
        builder.update_item(first.id, "unit_price", Decimal("5000"))
        second = builder.add_item()
        builder.update_item(second.id, "description", "Labor")
        builder.update_item(second.id, "unit", Unit.HOUR)
        builder.update_item(second.id, "quantity", Decimal("8"))
        builder.update_item(second.id, "unit_price", Decimal("1200"))

        saved = await builder.save(sql_store)

        service = InvoiceService(sql_store)
        invoice = await service.get_invoice(saved["id"])
        assert invoice["client"]["name"] == "Cosider"
        assert [item["description"] for item in invoice["items"]] == ["Concrete supply", "Labor"]
        assert invoice["total_amount"] == Decimal("70924.00")

        promoted = await service.promote_to_final(saved["id"], lambda header: True)
        assert promoted["type"] == "final"
        assert promoted["status"] == "pending"
        assert promoted["total_amount"] == Decimal("70924.00")

        html = await InvoiceDocumentRenderer(sql_store).render(saved["id"], HtmlPrintSurface())
        assert "70924.00" in html
        assert "Cosider" in html


class TestSiteTablesOnSql:
    """Obreros y proveedores con los valores por defecto de las columnas"""

    async def test_worker_and_supplier_defaults(self, sql_store):
        worker = await sql_store.insert("workers", {"name": "Mourad Hamidi", "trade": "Coffreur"})
        assert worker["is_active"] is True
        assert worker["daily_rate"] == Decimal("0")

        supplier = await sql_store.insert("suppliers", {"name": "GICA", "material_type": "Ciment"})
        assert supplier["total_purchases"] == Decimal("0")
        await sql_store.delete("suppliers", supplier["id"])
        assert await sql_store.select("suppliers") == []
