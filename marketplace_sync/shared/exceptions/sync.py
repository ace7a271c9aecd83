"""
Excepciones del pipeline API -> PostgreSQL.
"""
from typing import Optional

from marketplace_sync.shared.exceptions.base import SyncException


class SyncConfigError(SyncException):
    """Error de configuración del pipeline (env vars, ventana de fechas)."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="CONFIG_ERROR",
            details=details
        )


class FetchError(SyncException):
    """
    Fallo de transporte o decodificación al pedir una página.
    Nunca se interpreta como "no hay más datos".
    """

    def __init__(self, endpoint: str, page: int, reason: str, status: Optional[int] = None):
        super().__init__(
            message=f"Fallo al obtener '{endpoint}' página {page}: {reason}",
            error_code="FETCH_ERROR",
            details={"endpoint": endpoint, "page": page, "status": status}
        )
        self.endpoint = endpoint
        self.page = page
        self.reason = reason
        self.status = status


class StorageError(SyncException):
    """El UPSERT atómico falló (constraint, conexión, etc)."""

    def __init__(self, table: str, reason: str):
        super().__init__(
            message=f"UPSERT en '{table}' falló: {reason}",
            error_code="STORAGE_ERROR",
            details={"table": table}
        )
        self.table = table


class PageSyncError(SyncException):
    """Fallo procesando (mapeo o escritura) una página concreta de una entidad."""

    def __init__(self, entity: str, page: int, cause: BaseException):
        super().__init__(
            message=f"{entity}: sync abortado en página {page}: {cause}",
            error_code="PAGE_SYNC_ERROR",
            details={"entity": entity, "page": page}
        )
        self.entity = entity
        self.page = page
