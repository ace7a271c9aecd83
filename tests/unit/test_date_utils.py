from datetime import date

import pytest

from marketplace_sync.shared.exceptions.sync import SyncConfigError
from marketplace_sync.shared.utils.date_utils import format_api_date, parse_date_option, validate_window


def test_parse_date_option_plain_date():
    assert parse_date_option("2024-03-01") == date(2024, 3, 1)


def test_parse_date_option_iso_datetime():
    assert parse_date_option("2024-03-01T10:30:00") == date(2024, 3, 1)


def test_parse_date_option_defaults_to_today():
    assert parse_date_option(None) == date.today()
    assert parse_date_option("") == date.today()


def test_parse_date_option_explicit_default():
    assert parse_date_option(None, default=date(2020, 1, 1)) == date(2020, 1, 1)


def test_parse_date_option_invalid():
    with pytest.raises(SyncConfigError):
        parse_date_option("01/03/2024")


def test_format_api_date():
    assert format_api_date(date(2024, 1, 5)) == "2024-01-05"


def test_validate_window():
    validate_window(date(2024, 1, 1), date(2024, 1, 1))
    with pytest.raises(SyncConfigError) as exc_info:
        validate_window(date(2024, 1, 2), date(2024, 1, 1))
    assert exc_info.value.error_code == "CONFIG_ERROR"
