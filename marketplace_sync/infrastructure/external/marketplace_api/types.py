"""
Tipos y utilidades puras para el pipeline API -> Postgres.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """Retorna la hora actual en UTC, como datetime aware."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Page:
    """
    Una página de la API.

    number: índice 1-based enviado como `page`
    last_page: valor de meta.last_page si vino en la respuesta
    """

    number: int
    records: list[dict[str, Any]]
    last_page: Optional[int] = None


@dataclass(frozen=True)
class FetchResult:
    """
    Resultado etiquetado de un GET de página: ok con payload, o error con motivo.

    Permite distinguir "la API falló" de "no quedan datos".
    """

    payload: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: dict[str, Any], status: Optional[int] = None) -> "FetchResult":
        return cls(payload=payload, status=status)

    @classmethod
    def failure(cls, reason: str, status: Optional[int] = None) -> "FetchResult":
        return cls(error=reason, status=status)

    @property
    def records(self) -> list[dict[str, Any]]:
        return self.payload.get("data") or []

    @property
    def last_page(self) -> Optional[int]:
        meta = self.payload.get("meta") or {}
        if not isinstance(meta, dict):
            return None
        value = meta.get("last_page")
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
        return None


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo de la API a una columna Postgres.

    - column: nombre de la columna en Postgres
    - default: valor cuando el campo falta o viene null (None, 0 o False)
    - source_field: nombre del campo en la API si difiere de la columna
    """

    column: str
    default: Any = None
    source_field: Optional[str] = None

    @property
    def api_field(self) -> str:
        return self.source_field or self.column
