"""
Project Reports Router
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies.dbDependecies import row_store_dependency
from ..services.projects import ProjectReportService
from ..schemas import ProjectSummaryResponse
from ..utils import create_csv_response, CSV_HEADERS


router = APIRouter(prefix="/reports/projects", tags=["Reports"])


@router.get("", response_model=None)
async def get_project_summary(
    store: row_store_dependency,
    export: Optional[str] = Query(None, pattern="^(csv)$", description="Export format: csv"),
):
    """Project summary; with export=csv returns one row per project."""
    service = ProjectReportService(store)

    if export == "csv":
        rows = await service.get_projects_detail()
        return create_csv_response(rows, "projects.csv", CSV_HEADERS["projects"])

    return ProjectSummaryResponse(**await service.get_project_summary())
