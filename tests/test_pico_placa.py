from datetime import date

import pytest
from fastapi import HTTPException

from vehicle_ownership.api.pico_placa import get_pico_placa
from vehicle_ownership.core.pico_placa import (
    is_restricted,
    last_plate_digit,
    restriction_for_day,
    weekly_schedule,
)

MONDAY = date(2026, 10, 19)
SATURDAY = date(2026, 10, 24)


def test_restriction_for_weekdays_follows_bogota_schedule():
    monday = restriction_for_day(MONDAY)
    assert monday.day_name == "Lunes"
    assert monday.digits == (0, 1)
    assert monday.hours == "6:00 AM - 9:00 AM, 3:00 PM - 7:30 PM"

    friday = restriction_for_day(date(2026, 10, 23))
    assert friday.digits == (8, 9)


def test_weekend_has_no_restriction():
    saturday = restriction_for_day(SATURDAY)
    assert saturday.has_restriction is False
    assert saturday.hours == "Sin restricción"


def test_is_restricted_uses_last_plate_digit():
    assert is_restricted("ABC121", MONDAY) is True
    assert is_restricted("abc 120", MONDAY) is True
    assert is_restricted("ABC122", MONDAY) is False
    assert is_restricted("ABC121", SATURDAY) is False


def test_plates_ending_in_letter_are_never_restricted():
    assert last_plate_digit("ABC12D") is None
    assert is_restricted("ABC12D", MONDAY) is False
    assert last_plate_digit("") is None


def test_weekly_schedule_covers_all_digits_once():
    schedule = weekly_schedule()
    assert [day.day_name for day in schedule][:2] == ["Lunes", "Martes"]
    digits = [digit for day in schedule for digit in day.digits]
    assert sorted(digits) == list(range(10))


def test_pico_placa_endpoint_reports_plate_status():
    response = get_pico_placa(plate="abc121", date="2026-10-19")

    assert response["ok"] is True
    data = response["data"]
    assert data["date"] == "2026-10-19"
    assert data["today"]["digits"] == [0, 1]
    assert data["plate"] == "ABC 121"
    assert data["isRestricted"] is True
    assert len(data["week"]) == 7


def test_pico_placa_endpoint_rejects_bad_date():
    with pytest.raises(HTTPException) as exc:
        get_pico_placa(plate=None, date="19/10/2026")
    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_date"
