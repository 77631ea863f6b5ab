from __future__ import annotations

from datetime import date, timedelta

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from conftest import make_record
from vehicle_ownership.api.service.records import (
    complete_service_endpoint,
    create_service_endpoint,
    get_service_types,
    list_services_for_vehicle,
    update_service_endpoint,
)
from vehicle_ownership.core.maintenance import ensure_default_service_types
from vehicle_ownership.core.reconciliation import VehicleData
from vehicle_ownership.core.registration import ensure_default_vehicle_types, register_vehicle
from vehicle_ownership.schemas.service import ServiceCreateRequest, ServiceUpdateRequest

LAST_MONTH = date.today() - timedelta(days=30)


def _setup(db_session: Session) -> int:
    ensure_default_vehicle_types(db_session)
    register_vehicle(
        db_session,
        user_id="user-1",
        plate="ABC123",
        vehicle_data=VehicleData.from_record(make_record()),
    )
    types = ensure_default_service_types(db_session)
    return types[0].id


def _create_payload(service_type_id: int, **overrides) -> ServiceCreateRequest:
    body = {
        "vehiclePlate": " abc123 ",
        "serviceTypeId": service_type_id,
        "description": "Cambio de aceite y filtro",
        "cost": 185000,
        "serviceDate": LAST_MONTH.isoformat(),
        "mileage": 42000,
    }
    body.update(overrides)
    return ServiceCreateRequest.model_validate(body)


def test_service_types_listing(db_session: Session) -> None:
    ensure_default_service_types(db_session)
    data = get_service_types(db=db_session)["data"]
    assert "Cambio de aceite" in {item["name"] for item in data}
    assert all(item["isActive"] for item in data)


def test_create_and_list_services(db_session: Session) -> None:
    type_id = _setup(db_session)

    created = create_service_endpoint(_create_payload(type_id), user_id="user-1", db=db_session)
    assert created["ok"] is True
    assert created["service"]["licensePlate"] == "ABC123"
    assert created["service"]["isCompleted"] is False

    listed = list_services_for_vehicle(vehicle_plate="abc123", user_id="user-1", db=db_session)
    assert [item["id"] for item in listed["services"]] == [created["service"]["id"]]


@pytest.mark.parametrize(
    ("overrides", "status", "detail"),
    [
        ({"description": "Oil"}, 400, "description_too_short"),
        ({"cost": -1}, 400, "negative_cost"),
        ({"serviceDate": (date.today() + timedelta(days=30)).isoformat()}, 400, "future_service_date"),
        ({"mileage": -10}, 400, "negative_mileage"),
        ({"vehiclePlate": "XYZ987"}, 404, "vehicle_not_found"),
        ({"serviceTypeId": 9999}, 400, "service_type_unavailable"),
        ({"vehiclePlate": "   "}, 400, "vehicle_plate_required"),
    ],
)
def test_create_service_errors(db_session: Session, overrides, status, detail) -> None:
    type_id = _setup(db_session)
    with pytest.raises(HTTPException) as exc:
        create_service_endpoint(_create_payload(type_id, **overrides), user_id="user-1", db=db_session)
    assert exc.value.status_code == status
    assert exc.value.detail == detail


def test_services_are_private_to_vehicle_owner(db_session: Session) -> None:
    type_id = _setup(db_session)
    created = create_service_endpoint(_create_payload(type_id), user_id="user-1", db=db_session)

    with pytest.raises(HTTPException) as listing:
        list_services_for_vehicle(vehicle_plate="ABC123", user_id="user-2", db=db_session)
    assert listing.value.status_code == 403

    with pytest.raises(HTTPException) as completing:
        complete_service_endpoint(service_id=created["service"]["id"], user_id="user-2", db=db_session)
    assert completing.value.status_code == 403


def test_update_service_partial_fields(db_session: Session) -> None:
    type_id = _setup(db_session)
    service_id = create_service_endpoint(_create_payload(type_id), user_id="user-1", db=db_session)["service"]["id"]

    updated = update_service_endpoint(
        ServiceUpdateRequest.model_validate({"notes": "Cliente frecuente", "cost": 200000}),
        service_id=service_id,
        user_id="user-1",
        db=db_session,
    )
    assert updated["service"]["notes"] == "Cliente frecuente"
    assert updated["service"]["cost"] == 200000
    assert updated["service"]["description"] == "Cambio de aceite y filtro"

    with pytest.raises(HTTPException) as cleared:
        update_service_endpoint(
            ServiceUpdateRequest.model_validate({"description": None}),
            service_id=service_id,
            user_id="user-1",
            db=db_session,
        )
    assert cleared.value.detail == "description_required"

    with pytest.raises(HTTPException) as missing:
        update_service_endpoint(ServiceUpdateRequest(), service_id=9999, user_id="user-1", db=db_session)
    assert missing.value.status_code == 404


def test_complete_service_twice_conflicts(db_session: Session) -> None:
    type_id = _setup(db_session)
    service_id = create_service_endpoint(_create_payload(type_id), user_id="user-1", db=db_session)["service"]["id"]

    done = complete_service_endpoint(service_id=service_id, user_id="user-1", db=db_session)
    assert done["service"]["isCompleted"] is True
    assert done["service"]["completedAt"] is not None

    with pytest.raises(HTTPException) as exc:
        complete_service_endpoint(service_id=service_id, user_id="user-1", db=db_session)
    assert exc.value.status_code == 409
    assert exc.value.detail == "service_already_completed"


def test_service_flow_over_http(db_session: Session) -> None:
    from vehicle_ownership.main import app

    type_id = _setup(db_session)
    headers = {"X-User-Id": "user-1"}
    body = _create_payload(type_id).model_dump(by_alias=True, mode="json")

    with TestClient(app) as client:
        created = client.post("/api/service", json=body, headers=headers)
        service_id = created.json()["service"]["id"]
        completed = client.post(f"/api/service/{service_id}/complete", headers=headers)
        listed = client.get("/api/service/vehicle/ABC123", headers=headers)
        anonymous = client.get("/api/service/vehicle/ABC123")

    assert created.status_code == 200
    assert completed.json()["service"]["isCompleted"] is True
    assert [item["id"] for item in listed.json()["services"]] == [service_id]
    assert anonymous.status_code == 401
