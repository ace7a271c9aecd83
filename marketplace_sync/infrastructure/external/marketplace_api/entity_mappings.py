"""
Mapeos API -> Postgres por entidad (sales, orders, stocks, incomes).

Los mapeos son datos, no lógica: cada entidad declara su endpoint, su tabla,
su clave de identidad y la lista de columnas con su default.
Defaults: strings/fechas -> None, numéricos -> 0, booleanos -> False.

Este módulo no realiza I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .types import FieldMapping


@dataclass(frozen=True)
class EntitySyncConfig:
    """
    Config de un endpoint de la API -> una tabla Postgres.

    snapshot=True indica que la entidad se sincroniza para una única fecha
    (solo dateFrom), no para un rango.
    """

    name: str
    endpoint: str
    table: str
    unique_columns: tuple[str, ...]
    field_mappings: tuple[FieldMapping, ...]
    snapshot: bool = False

    @property
    def columns(self) -> list[str]:
        return [m.column for m in self.field_mappings]

    @property
    def update_columns(self) -> list[str]:
        """Columnas que se pisan en conflicto: todo menos la identidad y created_at."""
        return [c for c in self.columns if c not in self.unique_columns] + ["updated_at"]


def _text(*columns: str) -> tuple[FieldMapping, ...]:
    return tuple(FieldMapping(c) for c in columns)


def _zero(*columns: str) -> tuple[FieldMapping, ...]:
    return tuple(FieldMapping(c, default=0) for c in columns)


def _flag(*columns: str) -> tuple[FieldMapping, ...]:
    return tuple(FieldMapping(c, default=False) for c in columns)


SALES = EntitySyncConfig(
    name="Sales",
    endpoint="sales",
    table="sales",
    unique_columns=("sale_id",),
    field_mappings=(
        *_text("g_number", "date", "last_change_date", "supplier_article", "tech_size", "barcode"),
        *_zero("total_price", "discount_percent"),
        *_flag("is_supply", "is_realization"),
        *_zero("promo_code_discount"),
        *_text("warehouse_name", "country_name", "oblast_okrug_name", "region_name",
               "income_id", "sale_id", "odid"),
        *_zero("spp", "for_pay", "finished_price", "price_with_disc"),
        *_text("nm_id", "subject", "category", "brand"),
        *_flag("is_storno"),
    ),
)

ORDERS = EntitySyncConfig(
    name="Orders",
    endpoint="orders",
    table="orders",
    unique_columns=("g_number",),
    field_mappings=(
        *_text("g_number", "date", "last_change_date", "supplier_article", "tech_size", "barcode"),
        *_zero("total_price", "discount_percent"),
        *_text("warehouse_name", "oblast", "income_id", "odid", "nm_id",
               "subject", "category", "brand"),
        *_flag("is_cancel"),
        *_text("cancel_dt"),
    ),
)

STOCKS = EntitySyncConfig(
    name="Stocks",
    endpoint="stocks",
    table="stocks",
    unique_columns=("nm_id", "warehouse_name", "date"),
    snapshot=True,
    field_mappings=(
        *_text("nm_id", "warehouse_name", "date", "last_change_date",
               "supplier_article", "tech_size", "barcode"),
        *_zero("quantity"),
        *_flag("is_supply", "is_realization"),
        *_zero("quantity_full", "in_way_to_client", "in_way_from_client"),
        *_text("subject", "category", "brand", "sc_code"),
        *_zero("price", "discount"),
    ),
)

INCOMES = EntitySyncConfig(
    name="Incomes",
    endpoint="incomes",
    table="incomes",
    unique_columns=("income_id",),
    field_mappings=(
        *_text("income_id", "number", "date", "last_change_date",
               "supplier_article", "tech_size", "barcode"),
        *_zero("quantity", "total_price"),
        *_text("date_close", "warehouse_name", "nm_id"),
    ),
)


# Orden fijo de ejecución del orquestador
ENTITY_CONFIGS: tuple[EntitySyncConfig, ...] = (SALES, ORDERS, STOCKS, INCOMES)


def map_record(
    record: dict[str, Any],
    *,
    config: EntitySyncConfig,
    synced_at: datetime,
) -> dict[str, Any]:
    """
    Mapea un record crudo de la API a un dict listo para UPSERT.

    Función total: toda columna declarada aparece en la fila. Un campo ausente
    o null toma el default de su FieldMapping. No valida tipos; eso lo hace Postgres.
    """
    row: dict[str, Any] = {}
    for m in config.field_mappings:
        value = record.get(m.api_field)
        row[m.column] = m.default if value is None else value

    row["created_at"] = synced_at
    row["updated_at"] = synced_at
    return row


def map_page(
    records: list[dict[str, Any]],
    *,
    config: EntitySyncConfig,
    synced_at: datetime,
) -> list[dict[str, Any]]:
    return [map_record(r, config=config, synced_at=synced_at) for r in records]
