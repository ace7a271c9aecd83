from datetime import date, datetime
from typing import Optional

from marketplace_sync.shared.exceptions.sync import SyncConfigError

API_DATE_FORMAT = "%Y-%m-%d"


def format_api_date(value: date) -> str:
    """Formato de fecha que espera la API (dateFrom/dateTo)."""
    return value.strftime(API_DATE_FORMAT)


def parse_date_option(raw: Optional[str], default: Optional[date] = None) -> date:
    """
    Parsea una fecha de CLI (YYYY-MM-DD o ISO datetime).
    Si no viene valor, retorna `default` (hoy si tampoco se indica).
    """
    if not raw:
        return default or date.today()
    raw = raw.strip()
    try:
        return datetime.strptime(raw, API_DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError as e:
        raise SyncConfigError(f"Fecha invalida: '{raw}' (se espera YYYY-MM-DD)") from e


def validate_window(date_from: date, date_to: date) -> None:
    if date_from > date_to:
        raise SyncConfigError(
            f"Ventana invalida: date_from ({date_from}) es posterior a date_to ({date_to})",
            field="date_from",
        )
