from __future__ import annotations

from datetime import datetime, timezone

import pytest

from marketplace_sync.infrastructure.external.marketplace_api.entity_mappings import (
    ENTITY_CONFIGS,
    INCOMES,
    ORDERS,
    SALES,
    STOCKS,
    map_page,
    map_record,
)

SYNCED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_incomes_record_maps_and_fills_total_price_with_zero() -> None:
    raw = {
        "income_id": 1,
        "number": "A1",
        "quantity": 5,
        "date": "2024-01-01",
        "warehouse_name": "Коледино",
    }

    row = map_record(raw, config=INCOMES, synced_at=SYNCED_AT)

    assert row["income_id"] == 1
    assert row["number"] == "A1"
    assert row["quantity"] == 5
    assert row["date"] == "2024-01-01"
    assert row["total_price"] == 0
    assert row["date_close"] is None
    assert row["created_at"] == SYNCED_AT
    assert row["updated_at"] == SYNCED_AT


@pytest.mark.parametrize("config", ENTITY_CONFIGS, ids=lambda c: c.name)
def test_empty_record_gets_every_column_with_its_default(config) -> None:
    row = map_record({}, config=config, synced_at=SYNCED_AT)

    assert set(row) == set(config.columns) | {"created_at", "updated_at"}
    for mapping in config.field_mappings:
        assert row[mapping.column] == mapping.default


def test_defaults_by_kind() -> None:
    orders = map_record({}, config=ORDERS, synced_at=SYNCED_AT)
    assert orders["is_cancel"] is False
    assert orders["total_price"] == 0
    assert orders["cancel_dt"] is None

    stocks = map_record({}, config=STOCKS, synced_at=SYNCED_AT)
    assert stocks["quantity"] == 0
    assert stocks["is_supply"] is False
    assert stocks["sc_code"] is None


def test_null_value_is_defaulted_but_falsy_values_are_kept() -> None:
    row = map_record(
        {"is_cancel": False, "total_price": None, "discount_percent": 0, "g_number": ""},
        config=ORDERS,
        synced_at=SYNCED_AT,
    )
    assert row["total_price"] == 0
    assert row["discount_percent"] == 0
    assert row["g_number"] == ""


def test_unknown_api_fields_are_ignored() -> None:
    row = map_record({"g_number": "G1", "extra": "x"}, config=ORDERS, synced_at=SYNCED_AT)
    assert "extra" not in row


def test_update_columns_exclude_identity_and_created_at() -> None:
    for config in ENTITY_CONFIGS:
        update = config.update_columns
        assert "updated_at" in update
        assert "created_at" not in update
        assert not set(config.unique_columns) & set(update)
        assert set(config.unique_columns) <= set(config.columns)


def test_identity_keys() -> None:
    assert SALES.unique_columns == ("sale_id",)
    assert ORDERS.unique_columns == ("g_number",)
    assert STOCKS.unique_columns == ("nm_id", "warehouse_name", "date")
    assert INCOMES.unique_columns == ("income_id",)


def test_fixed_order_and_snapshot_flag() -> None:
    assert [c.endpoint for c in ENTITY_CONFIGS] == ["sales", "orders", "stocks", "incomes"]
    assert [c.snapshot for c in ENTITY_CONFIGS] == [False, False, True, False]


def test_columns_are_unique_per_entity() -> None:
    for config in ENTITY_CONFIGS:
        assert len(config.columns) == len(set(config.columns))


def test_map_page_preserves_order() -> None:
    rows = map_page([{"g_number": "B"}, {"g_number": "A"}], config=ORDERS, synced_at=SYNCED_AT)
    assert [r["g_number"] for r in rows] == ["B", "A"]
