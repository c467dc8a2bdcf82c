"""
Tests para el módulo de Reportes
"""

import pytest
from decimal import Decimal

from app.common.exceptions import FetchError
from app.modules.reports.services import InvoiceReportService, ProjectReportService


# ===== FIXTURES =====

@pytest.fixture
async def projects(store):
    rows = [
        {"name": "Résidence 120 logements", "status": "active", "progress": 40,
         "budget": Decimal("1000000"), "expenses": Decimal("450000")},
        {"name": "Pont Oued Rhumel", "status": "active", "progress": 75,
         "budget": Decimal("3000000"), "expenses": Decimal("2100000")},
        {"name": "Lycée Bordj", "status": "completed", "progress": 100,
         "budget": Decimal("1000000"), "expenses": Decimal("950000")},
    ]
    for row in rows:
        await store.insert("projects", row)
    store.calls.clear()
    return rows


class TestProjectReport:
    """Tests para el resumen de obras"""

    async def test_summary(self, store, projects):
        summary = await ProjectReportService(store).get_project_summary()
        assert summary["total_projects"] == 3
        assert summary["active_count"] == 2
        # (40 + 75) / 2 = 57.5 -> 58
        assert summary["average_progress"] == 58
        assert summary["total_budget"] == Decimal("5000000")
        assert summary["total_expenses"] == Decimal("3500000")
        assert summary["budget_usage"] == Decimal("0.7000")

    async def test_summary_without_projects(self, store):
        summary = await ProjectReportService(store).get_project_summary()
        assert summary["active_count"] == 0
        assert summary["average_progress"] == 0
        assert summary["budget_usage"] == Decimal("0")

    async def test_read_failure(self, store):
        store.fail("select", "projects")
        with pytest.raises(FetchError):
            await ProjectReportService(store).get_project_summary()


class TestInvoiceReport:
    async def test_by_status(self, store, sample_client):
        for type, status, total in (("final", "pending", "100.00"), ("final", "fully_paid", "50.00"),
                                    ("proforma", "draft", "70.00")):
            await store.insert("invoices", {"type": type, "status": status, "client_id": sample_client["id"],
                                            "total_amount": Decimal(total)})
        report = await InvoiceReportService(store).get_invoices_by_status()
        assert report["total_invoices"] == 3
        assert report["final_total_amount"] == Decimal("150.00")
        assert [b["status"] for b in report["statuses"]] == ["draft", "fully_paid", "pending"]


class TestReportsAPI:
    def test_project_summary_json(self, api_client):
        api_client.post("/projects/", json={"name": "Obra A", "status": "active", "progress": 50,
                                            "budget": "100", "expenses": "25"})
        data = api_client.get("/reports/projects").json()
        assert data["active_count"] == 1
        assert data["average_progress"] == 50
        assert Decimal(data["budget_usage"]) == Decimal("0.25")

    def test_project_csv_export(self, api_client):
        api_client.post("/projects/", json={"name": "Obra A", "status": "active", "budget": "100"})
        response = api_client.get("/reports/projects", params={"export": "csv"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.strip().splitlines()
        assert lines[0].startswith("Proyecto,Cliente,Estado")
        assert lines[1].startswith("Obra A")

    def test_invoice_csv_export(self, api_client):
        client_id = api_client.post("/clients/", json={"name": "Cosider"}).json()["id"]
        api_client.post("/invoices/", json={"client_id": client_id, "items": [
            {"description": "Terrassement", "unit": "m3", "quantity": "100", "unit_price": "10"}
        ]})
        response = api_client.get("/reports/invoices", params={"export": "csv"})
        lines = response.text.strip().splitlines()
        assert lines[0].startswith("Referencia,Tipo,Estado,Cliente")
        assert "Cosider" in lines[1]
        assert "1190.00" in lines[1]

    def test_invalid_export_format(self, api_client):
        assert api_client.get("/reports/projects", params={"export": "pdf"}).status_code == 422
