from datetime import date

import pytest

from app.utils.phone import has_min_digits, normalize_phone, phone_digits
from app.utils.validators import parse_day, validate_stay_dates


def test_phone_digits():
    assert phone_digits("+91 (987) 654-3210") == "919876543210"
    assert phone_digits(None) == ""


def test_has_min_digits():
    assert has_min_digits("98765 43210")
    assert not has_min_digits("98765-432")
    assert not has_min_digits("phone: abcdefghij")


def test_normalize_phone_keeps_international_prefix():
    assert normalize_phone(" +91 98765 43210") == "+919876543210"
    assert normalize_phone("098765 43210") == "09876543210"
    assert normalize_phone("") == ""


def test_validate_stay_dates():
    assert validate_stay_dates(date(2024, 5, 10), date(2024, 5, 11)) == (True, None)
    ok, error = validate_stay_dates(date(2024, 5, 10), date(2024, 5, 10))
    assert not ok and "after check-in" in error
    ok, error = validate_stay_dates(date(2024, 5, 1), date(2024, 5, 3), today=date(2024, 5, 2))
    assert not ok and "past" in error


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2024-05-10", date(2024, 5, 10)),
        ("2024-05-10T00:00:00", date(2024, 5, 10)),
        ("2024-05-10T00:00:00.000Z", date(2024, 5, 10)),
        ("2024-05-10T18:30:00+05:30", date(2024, 5, 10)),
    ],
)
def test_parse_day(raw, expected):
    assert parse_day(raw) == expected


def test_parse_day_rejects_garbage():
    with pytest.raises(ValueError):
        parse_day("next tuesday")
