"""
Invoice Reports Service

Facturación agregada por estado y tipo, a partir de las cabeceras guardadas.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from .base import BaseReportService
from app.modules.invoices.service import short_reference

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _cents(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENT, ROUND_HALF_UP)


class InvoiceReportService(BaseReportService):
    """Service for generating invoice reports"""

    async def get_invoices_by_status(self) -> Dict[str, Any]:
        invoices = await self._fetch("invoices")
        by_status: Dict[str, Dict[str, Any]] = {}
        for inv in invoices:
            bucket = by_status.setdefault(inv["status"], {"status": inv["status"], "count": 0, "total_amount": ZERO})
            bucket["count"] += 1
            bucket["total_amount"] += Decimal(str(inv.get("total_amount") or 0))

        final_total = sum(
            (Decimal(str(inv.get("total_amount") or 0)) for inv in invoices if inv.get("type") == "final"),
            ZERO
        )
        return {
            "total_invoices": len(invoices),
            "final_total_amount": final_total,
            "statuses": sorted(by_status.values(), key=lambda b: b["status"]),
        }

    async def get_invoice_rows(self) -> List[Dict[str, Any]]:
        """Flat invoice listing for CSV export"""
        rows = []
        for inv in await self._fetch("invoices", order_by="created_at", descending=True, include=("client",)):
            rows.append({
                "reference": short_reference(inv["id"]),
                "type": inv["type"],
                "status": inv["status"],
                "client_name": (inv.get("client") or {}).get("name", ""),
                "date": inv.get("date"),
                "due_date": inv.get("due_date"),
                "sub_total": _cents(inv.get("sub_total")),
                "tax_amount": _cents(inv.get("tax_amount")),
                "total_amount": _cents(inv.get("total_amount")),
            })
        return rows
