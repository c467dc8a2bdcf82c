from fastapi import APIRouter, Query, status
from typing import Optional

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.clients.service import ClientService
from app.modules.clients.schemas import ClientCreate, ClientOut, ClientList

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("/", response_model=ClientList)
async def list_clients(
    store: row_store_dependency,
    search: Optional[str] = Query(None, description="Buscar por nombre"),
):
    """Listar clientes ordenados por nombre"""
    clients = await ClientService(store).list_clients(search)
    return ClientList(clients=clients, total=len(clients))


@router.post("/", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
async def create_client(client_data: ClientCreate, store: row_store_dependency):
    """Registrar un nuevo cliente"""
    return await ClientService(store).create_client(client_data)


@router.get("/{client_id}", response_model=ClientOut)
async def get_client(client_id: str, store: row_store_dependency):
    return await ClientService(store).get_client(client_id)
