"""Domain Types — id parsing, UTC normalization, entity immutability.

Tests:
    - parse_module_id accepts signed base-10 integers within int64
    - Anything else raises InvalidModuleIdError (distinct from not-found)
    - Module is frozen
    - name_key trims and folds case for every script, not just ASCII
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from app.core.domain_types import (
    MAX_MODULE_ID, Module, as_utc, name_key, parse_module_id,
)
from app.core.errors import InvalidModuleIdError


@pytest.mark.parametrize("raw, expected", [
    ("1", 1), ("42", 42), ("+7", 7), ("-3", -3), ("0", 0), (12, 12),
    (str(MAX_MODULE_ID), MAX_MODULE_ID),
])
def test_parse_module_id_valid(raw, expected):
    assert parse_module_id(raw) == expected


@pytest.mark.parametrize("raw", [
    "abc", "", " 1", "1.5", "1e3", "0x10", "1_000", str(MAX_MODULE_ID + 1), True,
])
def test_parse_module_id_invalid(raw):
    with pytest.raises(InvalidModuleIdError) as exc_info:
        parse_module_id(raw)
    assert exc_info.value.field == "id"


def test_as_utc_naive_assumed_utc():
    assert as_utc(datetime(2026, 1, 1, 12)).tzinfo is timezone.utc


def test_as_utc_converts_other_offsets():
    plus_two = timezone(timedelta(hours=2))
    converted = as_utc(datetime(2026, 1, 1, 12, tzinfo=plus_two))
    assert converted.hour == 10
    assert converted.utcoffset() == timedelta(0)


def test_module_is_immutable():
    module = Module(
        name="Inventory", description="", is_active=True,
        created_at=datetime.now(timezone.utc), id=1,
    )
    with pytest.raises(FrozenInstanceError):
        module.id = 2


@pytest.mark.parametrize("left, right", [
    ("Inventory", "  INVENTORY "), ("ÉCLAIR", "éclair"), ("ΣΟΦΙΑ", "σοφια"),
])
def test_name_key_folds_case_and_whitespace(left, right):
    assert name_key(left) == name_key(right)


def test_name_key_keeps_distinct_names_apart():
    assert name_key("Inventory") != name_key("Inventories")
