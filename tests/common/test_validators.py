from __future__ import annotations

from datetime import date

import pytest

from praetor.common.validators import (
    optional_bool,
    optional_non_negative_number,
    parse_positive_number,
    require_id_list,
    require_iso_date,
    require_json_object,
    require_non_empty,
)
from praetor.core.exceptions import ValidationError


def test_require_non_empty_strips_and_names_field():
    assert require_non_empty("  Acme ", "name") == "Acme"
    with pytest.raises(ValidationError, match="^name is required$") as exc:
        require_non_empty("   ", "name")
    assert exc.value.field == "name"


@pytest.mark.parametrize("value", [0, -1, "0", True, None, "abc", float("nan")])
def test_parse_positive_number_rejects(value):
    with pytest.raises(ValidationError):
        parse_positive_number(value, "items[0].quantity")


def test_numbers_accept_numeric_strings():
    assert parse_positive_number("2.5", "quantity") == 2.5
    assert optional_non_negative_number(0, "discount") == 0.0
    assert optional_non_negative_number(None, "discount") is None
    with pytest.raises(ValidationError, match="discount must be greater than or equal to 0"):
        optional_non_negative_number(-0.01, "discount")


def test_id_list_dedupes_in_order_and_reports_index():
    assert require_id_list(["a", "b", "a"], "clientIds") == ["a", "b"]
    with pytest.raises(ValidationError, match=r"^clientIds\[1\] is required$"):
        require_id_list(["a", 3], "clientIds")
    with pytest.raises(ValidationError, match="clientIds must be an array"):
        require_id_list("a", "clientIds")


def test_misc_validators():
    assert require_iso_date("2025-03-01T00:00:00Z", "expirationDate") == date(2025, 3, 1)
    with pytest.raises(ValidationError):
        require_iso_date("03/01/2025", "expirationDate")
    with pytest.raises(ValidationError):
        optional_bool("yes", "enabled")
    with pytest.raises(ValidationError):
        require_json_object([1, 2])


@pytest.mark.parametrize("value", [10**400, -(10**400), "1e400"])
def test_numbers_too_large_for_a_float_are_rejected(value):
    with pytest.raises(ValidationError, match=r"^items\[0\]\.quantity must be a number$") as exc:
        parse_positive_number(value, "items[0].quantity")
    assert exc.value.field == "items[0].quantity"


@pytest.mark.parametrize("value", ["2025-12-31garbage", "2025-12-31 junk", "2025-12-31Tnope", "2025-12"])
def test_iso_date_rejects_trailing_text(value):
    with pytest.raises(ValidationError, match="expirationDate must be a date"):
        require_iso_date(value, "expirationDate")


def test_iso_date_accepts_timestamps_with_fractions():
    assert require_iso_date("2025-12-31", "expirationDate") == date(2025, 12, 31)
    assert require_iso_date("2025-12-31T23:00:00.000Z", "expirationDate") == date(2025, 12, 31)
