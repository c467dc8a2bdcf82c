"""
Módulo de Facturación (Invoices)

Este módulo maneja las facturas de la empresa constructora:

- Facturas proforma (cotizaciones no vinculantes) y finales (fiscales)
- Editor de líneas en memoria con totales recalculados en cada cambio
- Guardado cabecera + líneas sobre el row store
- Conversión proforma -> final con confirmación explícita
- Documento HTML listo para imprimir

Tablas principales:
- invoices: Cabeceras de factura
- invoice_items: Líneas de factura
"""

from .models import Invoice, InvoiceItem
from .schemas import (
    InvoiceCreate, InvoiceOut, InvoiceDetail, InvoiceType, InvoiceStatus, Unit
)
from .builder import InvoiceBuilder, compute_totals
from .renderer import InvoiceDocumentRenderer, HtmlPrintSurface, FilePrintSurface
from .service import InvoiceService

__all__ = [
    "Invoice", "InvoiceItem",
    "InvoiceCreate", "InvoiceOut", "InvoiceDetail", "InvoiceType", "InvoiceStatus", "Unit",
    "InvoiceBuilder", "compute_totals",
    "InvoiceDocumentRenderer", "HtmlPrintSurface", "FilePrintSurface",
    "InvoiceService",
]
