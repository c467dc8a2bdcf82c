"""
Generación del documento imprimible de una factura.

El llamador abre la superficie de impresión antes de pedir el documento; el
renderer escribe de inmediato un marcador de "cargando", hace una única
lectura (cabecera + cliente + líneas) y reemplaza el contenido por el
documento final. Si la lectura falla la superficie se cierra.
"""
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Any, Dict, Optional, Protocol
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.common.exceptions import FetchError, NotFoundError, RowStoreError
from app.core.config import settings
from app.database.row_store import Record, RowStore
from app.modules.invoices.schemas import InvoiceType
from app.modules.invoices.service import short_reference

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

LOADING_HTML = (
    "<!doctype html><html><head><meta charset=\"utf-8\"><title>Cargando…</title></head>"
    "<body><p>Preparando la factura…</p></body></html>"
)

STATUS_LABELS = {
    "draft": "Borrador",
    "pending": "Pendiente",
    "partially_paid": "Pagada parcialmente",
    "fully_paid": "Pagada",
    "overdue": "Vencida",
}

UNIT_LABELS = {
    "m": "m",
    "t": "t",
    "hour": "hora",
    "m3": "m³",
    "m2": "m²",
}


class PrintSurface(Protocol):
    def write(self, html: str) -> None:
        ...

    def close(self) -> None:
        ...


class HtmlPrintSurface:
    """Superficie en memoria; el endpoint HTTP devuelve ``content``"""

    def __init__(self):
        self.content: Optional[str] = None
        self.closed = False

    def write(self, html: str) -> None:
        self.content = html

    def close(self) -> None:
        self.content = None
        self.closed = True


class FilePrintSurface:
    """Escribe el documento en disco (scripts y exportaciones)"""

    def __init__(self, path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.closed = False

    def write(self, html: str) -> None:
        self.path.write_text(html, encoding="utf-8")

    def close(self) -> None:
        self.path.unlink(missing_ok=True)
        self.closed = True


def format_money(value: Any) -> str:
    """Importe redondeado a céntimos (mitad hacia arriba), p. ej. 0.125 -> 0.13"""
    if value is None:
        value = 0
    return str(Decimal(str(value)).quantize(CENT, ROUND_HALF_UP))


def format_quantity(value: Any) -> str:
    quantity = Decimal(str(value or 0))
    if quantity == quantity.to_integral_value():
        return str(quantity.to_integral_value())
    return f"{quantity.normalize():f}"


def format_date(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime("%d/%m/%Y")
    return str(value)[:10]


class InvoiceDocumentRenderer:
    def __init__(self, store: RowStore, config=settings):
        self.store = store
        self.config = config

        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.jinja_env.filters["money"] = format_money
        self.jinja_env.filters["quantity"] = format_quantity
        self.jinja_env.filters["date"] = format_date

    async def render(self, invoice_id: str, surface: PrintSurface) -> str:
        """Leer la factura y escribir el documento final en ``surface``"""
        surface.write(LOADING_HTML)
        try:
            rows = await self.store.select("invoices", {"id": invoice_id}, include=("client", "items"))
        except RowStoreError as e:
            surface.close()
            logger.error(f"Error fetching invoice {invoice_id} for printing: {e}")
            raise FetchError("No se pudo cargar la factura para imprimir") from e

        if not rows:
            surface.close()
            raise NotFoundError("Factura no encontrada")

        html = self.build_document(rows[0])
        surface.write(html)
        logger.info(f"Invoice {invoice_id} rendered for printing")
        return html

    def build_document(self, invoice: Record) -> str:
        """
        Documento HTML autocontenido.

        Los totales salen de la cabecera guardada, nunca de sumar las líneas.
        """
        is_proforma = invoice.get("type") == InvoiceType.PROFORMA.value
        client = invoice.get("client") or {}
        context: Dict[str, Any] = {
            "issuer": {
                "name": self.config.ISSUER_NAME,
                "address": self.config.ISSUER_ADDRESS,
                "phone": self.config.ISSUER_PHONE,
                "registration_number": self.config.ISSUER_REGISTRATION_NUMBER,
            },
            "title": "Factura proforma" if is_proforma else "Factura",
            "reference": short_reference(invoice["id"]),
            "issue_date": invoice.get("date"),
            "due_date": invoice.get("due_date"),
            "status_label": STATUS_LABELS.get(invoice.get("status"), invoice.get("status")),
            "client": {
                "name": client.get("name") or "",
                "address": client.get("address") or "",
                "phone": client.get("phone") or "",
            },
            "items": [
                {
                    "description": item.get("description") or "",
                    "unit": UNIT_LABELS.get(item.get("unit"), item.get("unit")),
                    "quantity": item.get("quantity"),
                    "unit_price": item.get("unit_price"),
                    "total": item.get("total"),
                }
                for item in invoice.get("items") or []
            ],
            "sub_total": invoice.get("sub_total"),
            "tax_amount": invoice.get("tax_amount"),
            "total_amount": invoice.get("total_amount"),
            "notes": invoice.get("notes") or "",
            "tax_percent": format_quantity(Decimal(str(self.config.TAX_RATE)) * 100),
            "currency": self.config.CURRENCY,
            "print_delay_ms": self.config.PRINT_DELAY_MS,
        }
        template = self.jinja_env.get_template("invoice.html")
        return template.render(**context)
