"""
Reports Module

Este módulo NO crea nuevas tablas: agrega en memoria las filas de otros
módulos (proyectos, facturas) para generar reportes ejecutivos.

Funcionalidades principales:
- Resumen de obras (activas, avance promedio, presupuesto vs gastos)
- Exportación CSV de obras y facturas

Architecture Pattern: Service Layer
- routers/ -> Define FastAPI endpoints con validaciones
- services/ -> Lógica de agregación
- schemas/ -> Modelos Pydantic para responses
- utils/ -> Utilidades para exportación CSV y formateo
"""

from .routers import projects_router, invoices_router

__all__ = [
    "projects_router",
    "invoices_router"
]
