"""
Tests para el módulo de Facturas

Cubren:
- Editor de líneas (ids temporales, recálculo de totales, campos editables)
- Guardado cabecera + líneas y borrado compensatorio
- Conversión proforma -> final
- Documento imprimible (marcador de carga, totales de la cabecera, orden de secciones)
- Endpoints HTTP con el row store en memoria
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from app.common.exceptions import (
    FetchError, NotFoundError, PersistenceError, ValidationError
)
from app.core.config import settings
from app.modules.invoices.builder import InvoiceBuilder, compute_totals
from app.modules.invoices.renderer import (
    LOADING_HTML, FilePrintSurface, HtmlPrintSurface, InvoiceDocumentRenderer,
    format_money, format_quantity
)
from app.modules.invoices.schemas import (
    InvoiceCreate, InvoiceFilters, InvoiceItemIn, InvoiceType, Unit
)
from app.modules.invoices.service import InvoiceService, short_reference


TAX = Decimal("0.19")


# ===== FIXTURES =====

@pytest.fixture
def builder():
    return InvoiceBuilder(InvoiceType.FINAL, tax_rate=TAX)


@pytest.fixture
def construction_builder(builder):
    """Borrador con suministro de hormigón y mano de obra"""
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
    return builder


async def insert_invoice(store, client_id, type="proforma", status="draft", total="70924.00"):
    """Cabecera + dos líneas escritas directamente en el store"""
    header = await store.insert("invoices", {
        "type": type,
        "status": status,
        "client_id": client_id,
        "date": datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
        "due_date": None,
        "notes": None,
        "sub_total": Decimal("59600.00"),
        "tax_amount": Decimal("11324.00"),
        "total_amount": Decimal(total),
    })
    await store.insert("invoice_items", {
        "invoice_id": header["id"], "position": 0, "description": "Concrete supply",
        "unit": "m3", "quantity": Decimal("10"), "unit_price": Decimal("5000"), "total": Decimal("50000"),
    })
    await store.insert("invoice_items", {
        "invoice_id": header["id"], "position": 1, "description": "Labor",
        "unit": "hour", "quantity": Decimal("8"), "unit_price": Decimal("1200"), "total": Decimal("9600"),
    })
    store.calls.clear()
    return header


# ===== TESTS DEL EDITOR =====

class TestInvoiceBuilder:
    """Tests para el editor de líneas en memoria"""

    def test_starts_with_one_default_item(self, builder):
        """Test estado inicial: una línea por defecto y sin cliente"""
        assert len(builder.items) == 1
        item = builder.items[0]
        assert item.id == "tmp-1"
        assert item.unit == Unit.METER
        assert item.quantity == Decimal("1")
        assert item.unit_price == Decimal("0")
        assert item.total == Decimal("0")
        assert builder.client_id is None

    def test_add_item_generates_unique_ids(self, builder):
        ids = {builder.add_item().id for _ in range(5)}
        ids.add(builder.items[0].id)
        assert len(ids) == 6

    def test_ids_are_not_reused_after_remove(self, builder):
        second = builder.add_item()
        builder.remove_item(second.id)
        third = builder.add_item()
        assert third.id != second.id

    def test_update_quantity_recomputes_total(self, builder):
        """Test total == cantidad x precio tras cada edición"""
        item_id = builder.items[0].id
        builder.update_item(item_id, "unit_price", Decimal("2.5"))
        updated = builder.update_item(item_id, "quantity", Decimal("4"))
        assert updated.total == Decimal("10.0")
        assert builder.items[0].total == updated.quantity * updated.unit_price

    def test_update_description_keeps_total(self, builder):
        item_id = builder.items[0].id
        builder.update_item(item_id, "unit_price", Decimal("100"))
        builder.update_item(item_id, "description", "Excavación")
        assert builder.items[0].description == "Excavación"
        assert builder.items[0].total == Decimal("100")

    def test_update_unknown_item_changes_nothing(self, builder):
        before = list(builder.items)
        assert builder.update_item("tmp-999", "quantity", Decimal("3")) is None
        assert builder.items == before

    def test_update_non_editable_field_rejected(self, builder):
        with pytest.raises(ValidationError):
            builder.update_item(builder.items[0].id, "total", Decimal("1"))

    def test_update_negative_quantity_rejected(self, builder):
        item_id = builder.items[0].id
        with pytest.raises(ValidationError):
            builder.update_item(item_id, "quantity", Decimal("-1"))
        assert builder.items[0].quantity == Decimal("1")

    def test_update_invalid_unit_rejected(self, builder):
        with pytest.raises(ValidationError):
            builder.update_item(builder.items[0].id, "unit", "km")

    def test_remove_unknown_id_leaves_list_identical(self, builder):
        builder.add_item()
        before = list(builder.items)
        builder.remove_item("tmp-42")
        assert builder.items == before

    def test_remove_item_keeps_order(self, builder):
        second = builder.add_item()
        third = builder.add_item()
        builder.remove_item(second.id)
        assert [item.id for item in builder.items] == ["tmp-1", third.id]

    def test_reset_restores_single_item(self, construction_builder):
        construction_builder.client_id = "client-1"
        construction_builder.reset()
        assert len(construction_builder.items) == 1
        assert construction_builder.client_id is None
        assert construction_builder.items[0].total == Decimal("0")


class TestInvoiceTotals:
    """Tests para subtotal, impuesto y total"""

    def test_construction_example(self, construction_builder):
        totals = construction_builder.totals()
        assert totals.sub_total == Decimal("59600")
        assert totals.tax_amount == Decimal("11324")
        assert totals.total_amount == Decimal("70924")
        assert totals.tax_rate == TAX

    def test_total_is_subtotal_plus_tax(self, construction_builder):
        totals = construction_builder.totals()
        assert totals.sub_total == sum(item.total for item in construction_builder.items)
        assert totals.total_amount == totals.sub_total + totals.tax_amount

    def test_sub_cent_line_totals_are_kept_exact(self, builder):
        """Test subtotal == suma de líneas aunque haya fracciones de céntimo"""
        item_id = builder.items[0].id
        builder.update_item(item_id, "quantity", Decimal("0.5"))
        builder.update_item(item_id, "unit_price", Decimal("0.25"))
        second = builder.add_item()
        builder.update_item(second.id, "quantity", Decimal("1.333"))
        builder.update_item(second.id, "unit_price", Decimal("10.01"))

        totals = builder.totals()
        assert builder.items[0].total == Decimal("0.125")
        assert totals.sub_total == sum(item.total for item in builder.items)
        assert totals.sub_total == Decimal("13.46833")
        assert totals.tax_amount == totals.sub_total * TAX
        assert totals.total_amount == totals.sub_total + totals.tax_amount

    def test_too_many_decimals_rejected(self, builder):
        item_id = builder.items[0].id
        with pytest.raises(ValidationError):
            builder.update_item(item_id, "quantity", Decimal("1.2345"))
        with pytest.raises(ValidationError):
            builder.update_item(item_id, "unit_price", Decimal("0.00001"))

    def test_empty_list_totals_zero(self):
        totals = compute_totals([], TAX)
        assert totals.sub_total == Decimal("0")
        assert totals.total_amount == Decimal("0")

    def test_default_rate_comes_from_settings(self):
        assert InvoiceBuilder().tax_rate == settings.TAX_RATE


# ===== TESTS DE GUARDADO =====

class TestInvoiceSave:
    """Tests para el guardado cabecera + líneas"""

    async def test_save_without_client_writes_nothing(self, store, construction_builder):
        with pytest.raises(ValidationError):
            await construction_builder.save(store)
        assert store.calls == []
        assert len(construction_builder.items) == 2

    async def test_save_writes_header_then_items(self, store, sample_client, construction_builder):
        construction_builder.client_id = sample_client["id"]
        saved = await construction_builder.save(store)

        assert store.calls == [
            ("insert", "invoices"),
            ("insert", "invoice_items"),
            ("insert", "invoice_items"),
        ]
        items = sorted(store.rows("invoice_items"), key=lambda r: r["position"])
        assert [item["invoice_id"] for item in items] == [saved["id"], saved["id"]]
        assert [item["position"] for item in items] == [0, 1]
        assert [item["total"] for item in items] == [Decimal("50000"), Decimal("9600")]
        assert items[0]["unit"] == "m3"

    async def test_saved_totals_match_builder(self, store, sample_client, construction_builder):
        construction_builder.client_id = sample_client["id"]
        before = construction_builder.totals()
        saved = await construction_builder.save(store)
        assert saved["sub_total"] == before.sub_total
        assert saved["tax_amount"] == before.tax_amount
        assert saved["total_amount"] == before.total_amount
        assert saved["type"] == "final"
        assert saved["status"] == "pending"

    async def test_save_resets_builder(self, store, sample_client, construction_builder):
        construction_builder.client_id = sample_client["id"]
        await construction_builder.save(store)
        assert len(construction_builder.items) == 1
        assert construction_builder.client_id is None

    async def test_proforma_saved_as_draft(self, store, sample_client):
        builder = InvoiceBuilder(InvoiceType.PROFORMA, tax_rate=TAX)
        builder.client_id = sample_client["id"]
        saved = await builder.save(store)
        assert saved["type"] == "proforma"
        assert saved["status"] == "draft"

    async def test_header_failure_writes_no_items(self, store, sample_client, construction_builder):
        construction_builder.client_id = sample_client["id"]
        store.fail("insert", "invoices")
        with pytest.raises(PersistenceError):
            await construction_builder.save(store)
        assert ("insert", "invoice_items") not in store.calls
        assert len(construction_builder.items) == 2

    async def test_item_failure_discards_written_rows(self, store, sample_client, construction_builder):
        """Test borrado compensatorio cuando falla la segunda línea"""
        construction_builder.client_id = sample_client["id"]
        store.fail("insert", "invoice_items", after=1)
        with pytest.raises(PersistenceError):
            await construction_builder.save(store)

        assert store.rows("invoices") == []
        assert store.rows("invoice_items") == []
        assert store.calls[-2:] == [("delete", "invoice_items"), ("delete", "invoices")]
        # El borrador queda intacto para reintentar
        assert construction_builder.client_id == sample_client["id"]

    async def test_discard_failure_still_raises_persistence_error(self, store, sample_client, construction_builder):
        construction_builder.client_id = sample_client["id"]
        store.fail("insert", "invoice_items")
        store.fail("delete", "invoices")
        with pytest.raises(PersistenceError):
            await construction_builder.save(store)
        assert len(store.rows("invoices")) == 1

    def test_from_payload_replays_items(self):
        payload = InvoiceCreate(
            type=InvoiceType.PROFORMA,
            client_id="client-1",
            items=[
                InvoiceItemIn(description="Concrete supply", unit=Unit.CUBIC_METER,
                              quantity=Decimal("10"), unit_price=Decimal("5000")),
                InvoiceItemIn(description="Labor", unit=Unit.HOUR,
                              quantity=Decimal("8"), unit_price=Decimal("1200")),
            ]
        )
        builder = InvoiceBuilder.from_payload(payload, tax_rate=TAX)
        assert builder.invoice_type == InvoiceType.PROFORMA
        assert builder.client_id == "client-1"
        assert [item.description for item in builder.items] == ["Concrete supply", "Labor"]
        assert builder.totals().total_amount == Decimal("70924")

    async def test_from_payload_without_items_writes_header_only(self, store, sample_client):
        """Test un borrador sin líneas no inventa la línea por defecto"""
        payload = InvoiceCreate(client_id=sample_client["id"], items=[])
        builder = InvoiceBuilder.from_payload(payload, tax_rate=TAX)
        assert builder.items == []

        saved = await builder.save(store)
        assert store.writes() == [("insert", "invoices")]
        assert store.rows("invoice_items") == []
        assert saved["total_amount"] == Decimal("0")

    async def test_notes_are_saved_and_cleared(self, store, sample_client):
        payload = InvoiceCreate(client_id=sample_client["id"], notes="Pago a 30 días")
        builder = InvoiceBuilder.from_payload(payload, tax_rate=TAX)
        saved = await builder.save(store)
        assert saved["notes"] == "Pago a 30 días"
        assert builder.notes is None


# ===== TESTS DEL SERVICIO =====

class TestInvoiceService:
    """Tests para listado, detalle y conversión proforma -> final"""

    async def test_promote_proforma(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        service = InvoiceService(store)

        updated = await service.promote_to_final(header["id"], lambda h: True)

        assert updated["type"] == "final"
        assert updated["status"] == "pending"
        assert updated["total_amount"] == header["total_amount"]
        assert updated["sub_total"] == header["sub_total"]
        assert store.writes() == [("update", "invoices")]
        assert len(store.rows("invoice_items")) == 2

    async def test_promote_declined_writes_nothing(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        seen = []

        result = await InvoiceService(store).promote_to_final(header["id"], lambda h: seen.append(h) or False)

        assert result is None
        assert seen[0]["id"] == header["id"]
        assert store.writes() == []
        assert store.rows("invoices")[0]["type"] == "proforma"

    async def test_promote_final_rejected(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"], type="final", status="pending")
        with pytest.raises(ValidationError):
            await InvoiceService(store).promote_to_final(header["id"], lambda h: True)
        assert store.writes() == []

    async def test_promote_missing_invoice(self, store):
        with pytest.raises(NotFoundError):
            await InvoiceService(store).promote_to_final("missing", lambda h: True)

    async def test_promote_update_failure(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        store.fail("update", "invoices")
        with pytest.raises(PersistenceError):
            await InvoiceService(store).promote_to_final(header["id"], lambda h: True)

    async def test_list_newest_first_with_client_name(self, store, sample_client):
        older = await insert_invoice(store, sample_client["id"])
        newer = await insert_invoice(store, sample_client["id"], type="final", status="pending")

        invoices = await InvoiceService(store).list_invoices()

        assert [inv.id for inv in invoices] == [newer["id"], older["id"]]
        assert invoices[0].client_name == sample_client["name"]
        assert invoices[0].reference == short_reference(newer["id"])

    async def test_list_unknown_client(self, store):
        await insert_invoice(store, "ghost-client")
        invoices = await InvoiceService(store).list_invoices()
        assert invoices[0].client_name == "Cliente desconocido"

    async def test_list_filters_by_type(self, store, sample_client):
        await insert_invoice(store, sample_client["id"])
        final = await insert_invoice(store, sample_client["id"], type="final", status="pending")
        invoices = await InvoiceService(store).list_invoices(InvoiceFilters(type=InvoiceType.FINAL))
        assert [inv.id for inv in invoices] == [final["id"]]

    async def test_list_failure_raises_fetch_error(self, store):
        store.fail("select", "invoices")
        with pytest.raises(FetchError):
            await InvoiceService(store).list_invoices()

    async def test_get_invoice_includes_items_in_order(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        invoice = await InvoiceService(store).get_invoice(header["id"])
        assert invoice["client"]["name"] == sample_client["name"]
        assert [item["description"] for item in invoice["items"]] == ["Concrete supply", "Labor"]

    def test_short_reference(self):
        assert short_reference("3f2a9c1e-aaaa-bbbb-cccc-000000000000") == "3F2A9C1E"


# ===== TESTS DEL DOCUMENTO =====

class TestInvoiceRenderer:
    """Tests para el documento imprimible"""

    async def test_render_missing_invoice_closes_surface(self, store):
        surface = HtmlPrintSurface()
        with pytest.raises(NotFoundError):
            await InvoiceDocumentRenderer(store).render("missing", surface)
        assert surface.closed
        assert surface.content is None

    async def test_render_fetch_failure_closes_surface(self, store):
        store.fail("select", "invoices")
        surface = HtmlPrintSurface()
        with pytest.raises(FetchError):
            await InvoiceDocumentRenderer(store).render("any", surface)
        assert surface.closed
        assert surface.content != LOADING_HTML

    async def test_render_single_read(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        await InvoiceDocumentRenderer(store).render(header["id"], HtmlPrintSurface())
        assert store.calls == [("select", "invoices")]

    async def test_render_uses_stored_totals(self, store, sample_client):
        """Test el total impreso es el de la cabecera aunque las líneas sumen otra cosa"""
        header = await insert_invoice(store, sample_client["id"], total="99999.99")
        surface = HtmlPrintSurface()
        html = await InvoiceDocumentRenderer(store).render(header["id"], surface)

        assert surface.content == html
        assert "99999.99" in html
        assert "70924.00" not in html
        assert "59600.00" in html
        assert "11324.00" in html

    async def test_render_sections_in_order(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"])
        html = await InvoiceDocumentRenderer(store).render(header["id"], HtmlPrintSurface())
        body = html[html.index("<body>"):]

        markers = [
            settings.ISSUER_NAME,
            "Factura proforma",
            short_reference(header["id"]),
            "05/03/2024",
            "Borrador",
            sample_client["name"],
            "Concrete supply",
            "Labor",
            "Subtotal",
            "Impuesto (19%)",
            "Gracias por su confianza",
            "window.print()",
        ]
        positions = [body.index(marker) for marker in markers]
        assert positions == sorted(positions)

    async def test_render_final_title_and_units(self, store, sample_client):
        header = await insert_invoice(store, sample_client["id"], type="final", status="pending")
        html = await InvoiceDocumentRenderer(store).render(header["id"], HtmlPrintSurface())
        assert "Factura proforma" not in html
        assert "Pendiente" in html
        assert "m³" in html
        assert "hora" in html
        assert f"5000.00 {settings.CURRENCY}" in html

    async def test_sub_cent_amounts_print_consistently(self, store, sample_client):
        """Test línea y subtotal de 0.125 se imprimen ambos como 0.13"""
        builder = InvoiceBuilder(InvoiceType.FINAL, tax_rate=TAX)
        builder.client_id = sample_client["id"]
        builder.notes = "Entrega en obra"
        item_id = builder.items[0].id
        builder.update_item(item_id, "quantity", Decimal("0.5"))
        builder.update_item(item_id, "unit_price", Decimal("0.25"))
        saved = await builder.save(store)

        html = await InvoiceDocumentRenderer(store).render(saved["id"], HtmlPrintSurface())
        body = html[html.index("<body>"):]
        assert body.count(f"0.13 {settings.CURRENCY}") == 2
        assert f"0.12 {settings.CURRENCY}" not in body
        assert f"0.15 {settings.CURRENCY}" in body
        assert body.index("Entrega en obra") < body.index("Gracias por su confianza")

    async def test_render_to_file(self, store, sample_client, tmp_path):
        header = await insert_invoice(store, sample_client["id"])
        surface = FilePrintSurface(tmp_path / "out" / "invoice.html")
        await InvoiceDocumentRenderer(store).render(header["id"], surface)
        assert "Concrete supply" in surface.path.read_text(encoding="utf-8")

    def test_formatters(self):
        assert format_money(Decimal("70924")) == "70924.00"
        assert format_money(None) == "0.00"
        assert format_money(Decimal("0.125")) == "0.13"
        assert format_money(Decimal("2.675")) == "2.68"
        assert format_money(Decimal("11324.000000000000")) == "11324.00"
        assert format_quantity(Decimal("10.000")) == "10"
        assert format_quantity(Decimal("2.500")) == "2.5"


# ===== TESTS DE API =====

class TestInvoiceAPI:
    """Tests para los endpoints de facturas"""

    def _create_client(self, api_client):
        response = api_client.post("/clients/", json={"name": "Cosider Travaux Publics"})
        assert response.status_code == 201
        return response.json()["id"]

    def _payload(self, client_id, type="proforma"):
        return {
            "type": type,
            "client_id": client_id,
            "items": [
                {"description": "Concrete supply", "unit": "m3", "quantity": "10", "unit_price": "5000"},
                {"description": "Labor", "unit": "hour", "quantity": "8", "unit_price": "1200"},
            ]
        }

    def test_preview_totals(self, api_client):
        response = api_client.post("/invoices/preview", json=self._payload(None))
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["sub_total"]) == Decimal("59600")
        assert Decimal(data["total_amount"]) == Decimal("70924")

    def test_create_without_client(self, api_client, store):
        response = api_client.post("/invoices/", json=self._payload(None))
        assert response.status_code == 400
        assert response.json()["detail"] == "client required"
        assert store.rows("invoices") == []

    def test_create_with_empty_items(self, api_client, store):
        client_id = self._create_client(api_client)
        response = api_client.post("/invoices/", json={"client_id": client_id, "items": [], "notes": "Anticipo"})
        assert response.status_code == 201
        assert response.json()["notes"] == "Anticipo"
        assert len(store.rows("invoices")) == 1
        assert store.rows("invoice_items") == []

    def test_create_rejects_extra_decimals(self, api_client, store):
        client_id = self._create_client(api_client)
        payload = self._payload(client_id)
        payload["items"][0]["quantity"] = "1.23456"
        assert api_client.post("/invoices/", json=payload).status_code == 422
        assert store.rows("invoices") == []

    def test_create_list_promote_print(self, api_client):
        client_id = self._create_client(api_client)

        created = api_client.post("/invoices/", json=self._payload(client_id))
        assert created.status_code == 201
        invoice_id = created.json()["id"]
        assert created.json()["status"] == "draft"

        listing = api_client.get("/invoices/").json()
        assert listing["total"] == 1
        assert listing["invoices"][0]["client_name"] == "Cosider Travaux Publics"

        detail = api_client.get(f"/invoices/{invoice_id}").json()
        assert len(detail["items"]) == 2

        declined = api_client.post(f"/invoices/{invoice_id}/promote")
        assert declined.status_code == 409

        promoted = api_client.post(f"/invoices/{invoice_id}/promote", params={"confirm": "true"})
        assert promoted.status_code == 200
        assert promoted.json()["type"] == "final"

        again = api_client.post(f"/invoices/{invoice_id}/promote", params={"confirm": "true"})
        assert again.status_code == 400

        printed = api_client.get(f"/invoices/{invoice_id}/print")
        assert printed.status_code == 200
        assert printed.headers["content-type"].startswith("text/html")
        assert "70924.00" in printed.text

    def test_get_missing_invoice(self, api_client):
        assert api_client.get("/invoices/nope").status_code == 404
        assert api_client.get("/invoices/nope/print").status_code == 404

    def test_list_failure_returns_503(self, api_client, store):
        store.fail("select", "invoices")
        response = api_client.get("/invoices/")
        assert response.status_code == 503
