"""
Routers package for Reports module

Exports all report router instances for easy importing.
"""

from .projects import router as projects_router
from .invoices import router as invoices_router

__all__ = [
    "projects_router",
    "invoices_router"
]
