from typing import List, Optional
import logging

from app.common.exceptions import FetchError, PersistenceError, RowStoreError
from app.database.row_store import Record, RowStore
from app.modules.projects.schemas import ProjectCreate, ProjectStatus

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, store: RowStore):
        self.store = store

    async def list_projects(self, status: Optional[ProjectStatus] = None) -> List[Record]:
        filters = {"status": status.value} if status else None
        try:
            return await self.store.select("projects", filters, order_by="created_at", descending=True)
        except RowStoreError as e:
            logger.error(f"Error fetching projects: {e}")
            raise FetchError("No se pudieron cargar los proyectos") from e

    async def create_project(self, project_data: ProjectCreate) -> Record:
        record = project_data.model_dump()
        record["status"] = project_data.status.value
        try:
            project = await self.store.insert("projects", record)
        except RowStoreError as e:
            logger.error(f"Error creating project: {e}")
            raise PersistenceError("Error al registrar el proyecto") from e
        logger.info(f"Project {project['id']} created")
        return project
