"""Pico y Placa restriction endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from vehicle_ownership.core.pico_placa import (
    DayRestriction,
    is_restricted,
    restriction_for_day,
    weekly_schedule,
)
from vehicle_ownership.utils.string import format_vehicle_plate, normalize_vehicle_plate
from vehicle_ownership.utils.time import parse_iso_date, today_in_cot

router = APIRouter(prefix="/api/pico-placa")


def _serialize_restriction(restriction: DayRestriction) -> dict[str, object]:
    return {
        "day": restriction.day_name,
        "digits": list(restriction.digits),
        "hours": restriction.hours,
        "hasRestriction": restriction.has_restriction,
    }


@router.get("")
def get_pico_placa(
    plate: str | None = Query(None),
    date: str | None = Query(None),
):
    try:
        day = parse_iso_date(date) or today_in_cot()
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid_date")

    restriction = restriction_for_day(day)
    data: dict[str, object] = {
        "date": day.isoformat(),
        "today": _serialize_restriction(restriction),
        "week": [_serialize_restriction(item) for item in weekly_schedule()],
    }

    normalized_plate = normalize_vehicle_plate(plate or "")
    if normalized_plate:
        data["plate"] = format_vehicle_plate(normalized_plate)
        data["isRestricted"] = is_restricted(normalized_plate, day)

    return {"ok": True, "data": data}
