"""
Invoice Reports Router
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies.dbDependecies import row_store_dependency
from ..services.invoices import InvoiceReportService
from ..schemas import InvoiceStatusResponse
from ..utils import create_csv_response, CSV_HEADERS


router = APIRouter(prefix="/reports/invoices", tags=["Reports"])


@router.get("", response_model=None)
async def get_invoices_by_status(
    store: row_store_dependency,
    export: Optional[str] = Query(None, pattern="^(csv)$", description="Export format: csv"),
):
    """Invoices grouped by status; with export=csv returns the full listing."""
    service = InvoiceReportService(store)

    if export == "csv":
        rows = await service.get_invoice_rows()
        return create_csv_response(rows, "invoices.csv", CSV_HEADERS["invoices"])

    return InvoiceStatusResponse(**await service.get_invoices_by_status())
