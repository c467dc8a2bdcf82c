from fastapi import APIRouter, status

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.workers.service import WorkerService
from app.modules.workers.schemas import WorkerCreate, WorkerOut, WorkerList

router = APIRouter(prefix="/workers", tags=["Workers"])


@router.get("/", response_model=WorkerList)
async def list_workers(store: row_store_dependency):
    """Listar obreros por nombre con el total de activos"""
    workers = await WorkerService(store).list_workers()
    return WorkerList(workers=workers, total=len(workers), active=WorkerService.count_active(workers))


@router.post("/", response_model=WorkerOut, status_code=status.HTTP_201_CREATED)
async def create_worker(worker_data: WorkerCreate, store: row_store_dependency):
    return await WorkerService(store).create_worker(worker_data)
