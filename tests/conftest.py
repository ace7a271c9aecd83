"""
Configuración de fixtures para pytest.
"""
from __future__ import annotations

import pytest
from loguru import logger

from marketplace_sync.infrastructure.external.marketplace_api.api_client import (
    ApiCredentials,
    MarketplaceApiClient,
)
from tests.fakes import FakeSession


@pytest.fixture
def make_client():
    def _make(pages: dict[str, list], limit: int = 2) -> tuple[MarketplaceApiClient, FakeSession]:
        session = FakeSession(pages)
        client = MarketplaceApiClient(
            ApiCredentials(base_url="https://api.example.com/api/", key="secret"),
            limit=limit,
            session=session,
            timeout_s=5,
        )
        return client, session

    return _make


@pytest.fixture
def log_records():
    """Captura los records de loguru emitidos durante el test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
