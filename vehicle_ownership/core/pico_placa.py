"""Pico y Placa driving restrictions (Bogotá calendar by last plate digit)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from vehicle_ownership.constants import PICO_PLACA_HOURS, PICO_PLACA_SCHEDULE, WEEKDAY_NAMES
from vehicle_ownership.utils.string import normalize_vehicle_plate

__all__ = ["DayRestriction", "restriction_for_day", "is_restricted", "weekly_schedule", "last_plate_digit"]

NO_RESTRICTION_HOURS = "Sin restricción"


@dataclass(frozen=True, slots=True)
class DayRestriction:
    day_name: str
    digits: tuple[int, ...]
    hours: str

    @property
    def has_restriction(self) -> bool:
        return bool(self.digits)


def _restriction_for_weekday(weekday: int) -> DayRestriction:
    digits = PICO_PLACA_SCHEDULE.get(weekday, ())
    return DayRestriction(
        day_name=WEEKDAY_NAMES[weekday],
        digits=digits,
        hours=PICO_PLACA_HOURS if digits else NO_RESTRICTION_HOURS,
    )


def restriction_for_day(day: date) -> DayRestriction:
    return _restriction_for_weekday(day.weekday())


def weekly_schedule() -> list[DayRestriction]:
    return [_restriction_for_weekday(weekday) for weekday in range(7)]


def last_plate_digit(plate: str) -> int | None:
    normalized = normalize_vehicle_plate(plate)
    if not normalized or not normalized[-1].isdigit() or not normalized[-1].isascii():
        return None
    return int(normalized[-1])


def is_restricted(plate: str, day: date) -> bool:
    """True when the plate may not circulate on ``day``.

    Plates ending in a letter (motorcycles) are never restricted by this calendar.
    """
    digit = last_plate_digit(plate)
    if digit is None:
        return False
    return digit in restriction_for_day(day).digits
