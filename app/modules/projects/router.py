from fastapi import APIRouter, Query, status
from typing import Optional

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.projects.service import ProjectService
from app.modules.projects.schemas import ProjectCreate, ProjectOut, ProjectList, ProjectStatus

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("/", response_model=ProjectList)
async def list_projects(
    store: row_store_dependency,
    project_status: Optional[ProjectStatus] = Query(None, alias="status"),
):
    projects = await ProjectService(store).list_projects(project_status)
    return ProjectList(projects=projects, total=len(projects))


@router.post("/", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def create_project(project_data: ProjectCreate, store: row_store_dependency):
    """Registrar una nueva obra"""
    return await ProjectService(store).create_project(project_data)
