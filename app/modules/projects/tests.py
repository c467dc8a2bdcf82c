"""
Tests para el módulo de Obras (Projects)
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError as PydanticValidationError

from app.common.exceptions import FetchError
from app.modules.projects.schemas import ProjectCreate, ProjectStatus
from app.modules.projects.service import ProjectService


class TestProjectSchemas:
    def test_end_date_before_start_rejected(self):
        with pytest.raises(PydanticValidationError):
            ProjectCreate(name="Viaducto", start_date=date(2024, 5, 1), end_date=date(2024, 4, 1))

    def test_progress_bounds(self):
        with pytest.raises(PydanticValidationError):
            ProjectCreate(name="Viaducto", progress=120)


class TestProjectService:
    """Tests para ProjectService"""

    async def test_create_and_filter_by_status(self, store):
        service = ProjectService(store)
        await service.create_project(ProjectCreate(name="Résidence 120 logements", status=ProjectStatus.ACTIVE,
                                                   budget=Decimal("1000000"), progress=40))
        await service.create_project(ProjectCreate(name="Lycée Bordj", status=ProjectStatus.COMPLETED))

        active = await service.list_projects(ProjectStatus.ACTIVE)
        assert [p["name"] for p in active] == ["Résidence 120 logements"]
        assert active[0]["status"] == "active"
        assert len(await service.list_projects()) == 2

    async def test_list_newest_first(self, store):
        service = ProjectService(store)
        await service.create_project(ProjectCreate(name="Primero"))
        await service.create_project(ProjectCreate(name="Segundo"))
        assert [p["name"] for p in await service.list_projects()] == ["Segundo", "Primero"]

    async def test_list_failure(self, store):
        store.fail("select", "projects")
        with pytest.raises(FetchError):
            await ProjectService(store).list_projects()


class TestProjectAPI:
    def test_create_and_list(self, api_client):
        created = api_client.post("/projects/", json={
            "name": "Pont de Oued Rhumel", "status": "delayed", "budget": "500000", "progress": 15
        })
        assert created.status_code == 201

        data = api_client.get("/projects/", params={"status": "delayed"}).json()
        assert data["total"] == 1
        assert data["projects"][0]["progress"] == 15
        assert api_client.get("/projects/", params={"status": "active"}).json()["total"] == 0
