"""
Services package for Reports module
"""

from .projects import ProjectReportService
from .invoices import InvoiceReportService

__all__ = [
    "ProjectReportService",
    "InvoiceReportService"
]
