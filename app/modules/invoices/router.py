from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from typing import Optional

from app.dependencies.dbDependecies import row_store_dependency
from app.modules.invoices.builder import InvoiceBuilder
from app.modules.invoices.renderer import HtmlPrintSurface, InvoiceDocumentRenderer
from app.modules.invoices.service import InvoiceService
from app.modules.invoices.schemas import (
    InvoiceCreate, InvoiceOut, InvoiceDetail, InvoiceList, InvoiceTotals,
    InvoiceFilters, InvoiceStatus, InvoiceType
)

# Router principal del módulo de facturas
router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post("/", response_model=InvoiceOut, status_code=status.HTTP_201_CREATED)
async def create_invoice(invoice_data: InvoiceCreate, store: row_store_dependency):
    """
    Crear una factura proforma o final

    Se guarda primero la cabecera y luego las líneas. Requiere cliente.
    """
    builder = InvoiceBuilder.from_payload(invoice_data)
    return await builder.save(store)


@router.post("/preview", response_model=InvoiceTotals)
async def preview_totals(invoice_data: InvoiceCreate):
    """Calcular subtotal, impuesto y total sin guardar nada"""
    return InvoiceBuilder.from_payload(invoice_data).totals()


@router.get("/", response_model=InvoiceList)
async def list_invoices(
    store: row_store_dependency,
    type: Optional[InvoiceType] = Query(None, description="proforma o final"),
    status: Optional[InvoiceStatus] = Query(None, description="Estado de la factura"),
    client_id: Optional[str] = Query(None, description="Filtrar por cliente"),
):
    """Listar facturas, las más recientes primero"""
    filters = InvoiceFilters(type=type, status=status, client_id=client_id)
    invoices = await InvoiceService(store).list_invoices(filters)
    return InvoiceList(invoices=invoices, total=len(invoices))


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice(invoice_id: str, store: row_store_dependency):
    """Obtener cabecera, cliente y líneas de una factura"""
    return await InvoiceService(store).get_invoice(invoice_id)


@router.post("/{invoice_id}/promote", response_model=InvoiceOut)
async def promote_invoice(
    invoice_id: str,
    store: row_store_dependency,
    confirm: bool = Query(False, description="Confirmación explícita del usuario"),
):
    """
    Convertir una proforma en factura final

    La conversión es irreversible, por eso exige ``confirm=true``.
    """
    updated = await InvoiceService(store).promote_to_final(invoice_id, lambda header: confirm)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Se requiere confirmación para convertir la factura"
        )
    return updated


@router.get("/{invoice_id}/print", response_class=HTMLResponse)
async def print_invoice(invoice_id: str, store: row_store_dependency):
    """Documento HTML listo para imprimir"""
    surface = HtmlPrintSurface()
    html = await InvoiceDocumentRenderer(store).render(invoice_id, surface)
    return HTMLResponse(content=html)
