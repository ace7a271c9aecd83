"""
Repositorio Postgres (psycopg v3) para el UPSERT idempotente por página.

Cada llamada a upsert_rows es una transacción: o entran todas las filas
de la página o ninguna.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import psycopg
from psycopg.rows import dict_row

from marketplace_sync.shared.exceptions.sync import StorageError


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def dedupe_by_identity(
    rows: Iterable[dict[str, Any]], unique_columns: Sequence[str]
) -> list[dict[str, Any]]:
    """
    Colapsa filas con la misma clave de identidad; gana la última.

    PostgreSQL rechaza un INSERT ... ON CONFLICT que toque la misma fila dos veces
    (CardinalityViolation), así que el batch nunca debe llevar claves repetidas.
    """
    by_key: dict[tuple, dict[str, Any]] = {}
    for row in rows:
        key = tuple(row.get(c) for c in unique_columns)
        # pop + set: la posición refleja la última aparición
        by_key.pop(key, None)
        by_key[key] = row
    return list(by_key.values())


def build_upsert_sql(
    table: str,
    columns: Sequence[str],
    unique_columns: Sequence[str],
    update_columns: Sequence[str],
) -> str:
    insert_cols_sql = ", ".join(_quote(c) for c in columns)
    placeholders = ", ".join(["%s"] * len(columns))
    conflict_sql = ", ".join(_quote(c) for c in unique_columns)

    if not update_columns:
        action = "DO NOTHING"
    else:
        set_sql = ", ".join(f"{_quote(c)} = EXCLUDED.{_quote(c)}" for c in update_columns)
        action = f"DO UPDATE SET {set_sql}"

    return (
        f"INSERT INTO {_quote(table)} ({insert_cols_sql}) "
        f"VALUES ({placeholders}) "
        f"ON CONFLICT ({conflict_sql}) {action}"
    )


class PostgresUpsertRepository:
    def __init__(self, dsn: str) -> None:
        self._dsn = dsn

    def connect(self) -> psycopg.Connection:
        """
        Abre conexión en autocommit: cada página abre su propia transacción
        con conn.transaction().
        """
        try:
            return psycopg.connect(self._dsn, autocommit=True, row_factory=dict_row)
        except psycopg.OperationalError as e:
            raise psycopg.OperationalError(
                f"{e}\n"
                f"Sugerencia: verifica que DATABASE_URL sea accesible desde donde ejecutas el job.\n"
                f"- Si DATABASE_URL apunta a un hostname de Docker, eso solo resuelve dentro de la red de Docker."
            ) from e

    def upsert_rows(
        self,
        conn: psycopg.Connection,
        *,
        table: str,
        rows: Iterable[dict[str, Any]],
        unique_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> int:
        """
        INSERT ... ON CONFLICT (unique_columns) DO UPDATE SET update_columns.

        - Inserta las claves nuevas; en las existentes pisa exactamente update_columns.
        - Atómico por llamada.
        Retorna la cantidad de filas enviadas (tras colapsar duplicados).
        """
        rows_list = dedupe_by_identity(rows, unique_columns)
        if not rows_list:
            return 0

        # Columnas: asumimos que todas las filas traen el mismo conjunto.
        columns = list(rows_list[0].keys())
        missing = [c for c in unique_columns if c not in columns]
        if missing:
            raise ValueError(f"Faltan columnas de identidad {missing} en row para UPSERT")

        sql = build_upsert_sql(table, columns, unique_columns, update_columns)
        values = [tuple(row.get(c) for c in columns) for row in rows_list]

        try:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.executemany(sql, values)
        except psycopg.Error as e:
            raise StorageError(table, str(e)) from e

        return len(values)
