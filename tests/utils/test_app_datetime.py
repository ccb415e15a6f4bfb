"""Timestamps cross the repository boundary in the application timezone."""

from datetime import datetime, timedelta, timezone

import pytest

import helpdesk.utils
from helpdesk.utils import ensure_app_naive_datetime, ensure_app_timezone
from helpdesk.utils.datetime import _resolve_timezone


def test_package_exports_only_conversion_helpers() -> None:
    assert sorted(helpdesk.utils.__all__) == [
        "ensure_app_naive_datetime",
        "ensure_app_timezone",
        "now_in_app_naive_datetime",
        "now_in_app_timezone",
    ]


def test_naive_column_values_are_read_back_aware() -> None:
    stored = datetime(2024, 5, 1, 12, 30)

    loaded = ensure_app_timezone(stored)

    assert loaded.tzinfo is not None
    assert loaded.replace(tzinfo=None) == stored


def test_aware_values_are_stored_naive_in_app_time() -> None:
    value = datetime(2024, 5, 1, 9, 0, tzinfo=timezone(timedelta(hours=-3)))

    assert ensure_app_naive_datetime(value) == datetime(2024, 5, 1, 12, 0)
    assert ensure_app_naive_datetime(None) is None


@pytest.mark.parametrize(
    ("name", "offset"),
    [("UTC-03:00", timedelta(hours=-3)), ("GMT+0530", timedelta(hours=5, minutes=30))],
)
def test_offset_names_resolve_to_fixed_zones(name, offset) -> None:
    assert _resolve_timezone(name).utcoffset(None) == offset


def test_unknown_zone_falls_back_to_lisbon() -> None:
    assert str(_resolve_timezone("Nowhere/City")) == "Europe/Lisbon"
