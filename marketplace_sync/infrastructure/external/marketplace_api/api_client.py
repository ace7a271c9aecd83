"""
Cliente mínimo de la API HTTP del marketplace.

Requisitos cubiertos:
- requests
- paginación por número de página (`page` + `meta.last_page`)
- resultado etiquetado por página: un fallo de red nunca se confunde con "fin de datos"

Sin reintentos: si se desean, son responsabilidad del scheduler externo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import requests
from loguru import logger

from marketplace_sync.shared.exceptions.sync import FetchError

from .types import FetchResult, Page


@dataclass(frozen=True)
class ApiCredentials:
    base_url: str
    key: str


def _truncate(text: str, limit: int = 500) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class MarketplaceApiClient:
    """
    Cliente HTTP de la API. Expone un generator que produce páginas (Page).

    Importante:
    - No hace cast de tipos de campos: eso se decide en el mapeo de Postgres.
    - El timeout es del transporte (requests); el pipeline no impone otro.
    """

    def __init__(
        self,
        credentials: ApiCredentials,
        *,
        limit: int = 500,
        session: Optional[requests.Session] = None,
        timeout_s: float = 60.0,
    ) -> None:
        self._creds = credentials
        self._base_url = credentials.base_url.rstrip("/")
        self._limit = limit
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def fetch_page(self, endpoint: str, params: dict[str, Any], page: int) -> FetchResult:
        """
        GET de una página. Nunca levanta por errores de transporte/decodificación:
        los devuelve como FetchResult.failure.
        """
        url = f"{self._base_url}/{endpoint}"
        query: dict[str, Any] = {"key": self._creds.key, "limit": self._limit}
        query.update(params)
        query["page"] = page

        logger.debug(f"GET {url} page={page}")
        try:
            resp = self._session.get(url, params=query, timeout=self._timeout_s)
        except requests.RequestException as e:
            return FetchResult.failure(f"error de transporte: {e}")

        if not 200 <= resp.status_code < 300:
            return FetchResult.failure(
                f"HTTP {resp.status_code}: {_truncate(resp.text or '')}",
                status=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError:
            return FetchResult.failure(
                f"respuesta no es JSON: {_truncate(resp.text or '')}",
                status=resp.status_code,
            )

        if not isinstance(payload, dict):
            return FetchResult.failure("respuesta JSON no es un objeto", status=resp.status_code)

        data = payload.get("data")
        if data is not None and not isinstance(data, list):
            return FetchResult.failure("el campo 'data' no es una lista", status=resp.status_code)

        return FetchResult.success(payload, status=resp.status_code)

    def iter_pages(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Iterator[Page]:
        """
        Itera páginas de forma lazy empezando siempre en la página 1.

        Corta cuando:
        - una página viene con `data` vacío, o
        - la página actual alcanza `meta.last_page`.
        Si falta `last_page` pero hubo datos, sigue con la siguiente página.
        Un fallo de fetch levanta FetchError.
        """
        params = dict(params or {})
        page = 1

        while True:
            result = self.fetch_page(endpoint, params, page)
            if not result.ok:
                raise FetchError(endpoint, page, result.error or "desconocido", status=result.status)

            records = result.records
            if not records:
                logger.debug(f"'{endpoint}' página {page} vacía, fin de paginación")
                return

            last_page = result.last_page
            yield Page(number=page, records=records, last_page=last_page)

            if last_page is not None and page >= last_page:
                return
            page += 1
