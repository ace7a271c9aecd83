"""
CLI: API del marketplace -> Postgres (one-way sync).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer).
  - Una corrida = sales, orders, stocks, incomes en ese orden; el primer error aborta.

Variables de entorno requeridas:
  - MARKETPLACE_API_BASE_URL
  - MARKETPLACE_API_KEY
  - DATABASE_URL (debe ser postgresql://... o postgres://...)

Ejecución:
  python scripts/sync_api_data.py
  python scripts/sync_api_data.py --date-from 2024-01-01 --date-to 2024-01-31
  python scripts/sync_api_data.py --schema-only
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin instalar el paquete.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

# Cargar variables desde .env si existe (antes de construir Settings).
load_dotenv(_REPO_ROOT / ".env", override=False)

from marketplace_sync.core.config import settings
from marketplace_sync.core.logging import configure_logging
from marketplace_sync.infrastructure.external.marketplace_api.sync_service import build_from_settings
from marketplace_sync.shared.exceptions.base import SyncException
from marketplace_sync.shared.utils.date_utils import parse_date_option

SCHEMA_SQL_PATH = (
    _REPO_ROOT / "marketplace_sync" / "infrastructure" / "external" / "marketplace_api" / "schema.sql"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync data from marketplace API")
    parser.add_argument("--date-from", help="Inicio de la ventana (YYYY-MM-DD). Default: hoy.")
    parser.add_argument("--date-to", help="Fin de la ventana (YYYY-MM-DD). Default: hoy.")
    parser.add_argument(
        "--schema-only",
        action="store_true",
        help="Solo imprime el DDL recomendado (no ejecuta sync).",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.schema_only:
        print(SCHEMA_SQL_PATH.read_text(encoding="utf-8"))
        return 0

    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        date_from = parse_date_option(args.date_from)
        date_to = parse_date_option(args.date_to)
        orchestrator = build_from_settings(settings)
        results = orchestrator.run(date_from, date_to)
    except SyncException as e:
        logger.error(f"API sync falló [{e.error_code}]: {e.message}")
        return 1

    total = sum(r.processed for r in results)
    logger.info(f"Sync OK: entidades={len(results)}, filas={total}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
