"""
Errores de dominio compartidos por todos los módulos.

Los servicios nunca dejan escapar un ``RowStoreError``: lo convierten en
``PersistenceError`` (escrituras) o ``FetchError`` (lecturas). La aplicación
FastAPI traduce cualquier ``AppError`` a una respuesta JSON con ``detail``.
"""
from fastapi import status


class AppError(Exception):
    """Error base con mensaje apto para mostrar al usuario."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Precondición no cumplida antes de escribir."""

    status_code = status.HTTP_400_BAD_REQUEST


class PersistenceError(AppError):
    """Falló una escritura en el row store. No se hace rollback ni reintento."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class FetchError(AppError):
    """Falló una lectura (listados, documentos)."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class RowStoreError(Exception):
    """Error genérico del backend de filas; solo lleva un mensaje."""
