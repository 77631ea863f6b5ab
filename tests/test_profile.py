from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vehicle_ownership.api.profile import create_my_profile, get_my_profile, update_my_profile
from vehicle_ownership.api.vehicle.common import build_request_for_user
from vehicle_ownership.core.profile import (
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    ProfileValidationError,
    clean_profile_changes,
    create_profile,
    update_profile_for_user,
)
from vehicle_ownership.schemas.profile import ProfileCreateRequest, ProfileUpdateRequest


def _create_payload(**overrides) -> ProfileCreateRequest:
    body = {
        "email": "Laura.Gomez@Example.com",
        "fullName": "  Laura   Gómez ",
        "documentType": "cc",
        "documentNumber": "52123456",
    }
    body.update(overrides)
    return ProfileCreateRequest.model_validate(body)


def test_clean_profile_changes_normalizes_values():
    cleaned = clean_profile_changes(
        {
            "full_name": " María   Núñez ",
            "document_type": " ce ",
            "document_number": " 123456 ",
            "phone": "3001234567",
            "city": "  ",
        }
    )
    assert cleaned == {
        "full_name": "María Núñez",
        "document_type": "CE",
        "document_number": "123456",
        "phone": "3001234567",
        "city": None,
    }


@pytest.mark.parametrize(
    ("changes", "code"),
    [
        ({"full_name": "A"}, "invalid_full_name"),
        ({"full_name": "R2-D2 Unit"}, "invalid_full_name"),
        ({"document_type": "XX"}, "invalid_document_type"),
        ({"document_number": "12ab56"}, "invalid_document_format"),
        ({"phone": "300-123"}, "invalid_phone"),
        ({"email": "new@example.com"}, "unknown_profile_field"),
    ],
)
def test_clean_profile_changes_rejects(changes, code):
    with pytest.raises(ProfileValidationError) as exc:
        clean_profile_changes(changes)
    assert exc.value.code == code


def test_create_profile_rules(db_session: Session) -> None:
    profile = create_profile(db_session, user_id="user-1", email=" Laura@Example.com ", full_name="Laura Gómez")
    assert profile.email == "laura@example.com"

    with pytest.raises(ProfileAlreadyExistsError):
        create_profile(db_session, user_id="user-2", email="laura@example.com", full_name="Otra Persona")
    with pytest.raises(ProfileAlreadyExistsError):
        create_profile(db_session, user_id="user-1", email="other@example.com", full_name="Laura Gómez")
    with pytest.raises(ProfileValidationError) as bad_email:
        create_profile(db_session, user_id="user-3", email="not-an-email", full_name="Laura Gómez")
    assert bad_email.value.code == "invalid_email"


def test_update_profile_for_missing_user(db_session: Session) -> None:
    with pytest.raises(ProfileNotFoundError):
        update_profile_for_user(db_session, "ghost", {"city": "Bogotá"})


def test_profile_endpoints(db_session: Session) -> None:
    with pytest.raises(HTTPException) as missing:
        get_my_profile(user_id="user-1", db=db_session)
    assert missing.value.status_code == 404

    created = create_my_profile(_create_payload(), user_id="user-1", db=db_session)["profile"]
    assert created["fullName"] == "Laura Gómez"
    assert created["firstName"] == "Laura"
    assert created["documentType"] == "CC"
    assert created["documentTypeLabel"] == "Cédula de Ciudadanía"
    assert created["canProveOwnership"] is True
    assert created["hasCompleteContactInfo"] is False

    with pytest.raises(HTTPException) as duplicate:
        create_my_profile(_create_payload(), user_id="user-1", db=db_session)
    assert duplicate.value.status_code == 409

    updated = update_my_profile(
        ProfileUpdateRequest.model_validate(
            {"phone": "3001234567", "address": "Calle 10 # 5-20", "city": "Bogotá", "documentType": "PA"}
        ),
        user_id="user-1",
        db=db_session,
    )["profile"]
    assert updated["hasCompleteContactInfo"] is True
    assert updated["canProveOwnership"] is False
    assert updated["fullName"] == "Laura Gómez"

    with pytest.raises(HTTPException) as invalid:
        update_my_profile(
            ProfileUpdateRequest.model_validate({"documentNumber": "123"}), user_id="user-1", db=db_session
        )
    assert invalid.value.status_code == 400
    assert invalid.value.detail == "invalid_document_format"


def test_profile_update_feeds_ownership_request(db_session: Session) -> None:
    create_my_profile(_create_payload(documentType=None, documentNumber=None), user_id="user-1", db=db_session)

    with pytest.raises(HTTPException) as incomplete:
        build_request_for_user(db_session, "user-1", "ABC123")
    assert incomplete.value.detail == "profile_document_missing"

    update_my_profile(
        ProfileUpdateRequest.model_validate({"documentType": "CC", "documentNumber": "52123456"}),
        user_id="user-1",
        db=db_session,
    )
    request = build_request_for_user(db_session, "user-1", "ABC123")
    assert request.requester_document_number == "52123456"
    assert request.requester_full_name == "Laura Gómez"


def test_profile_over_http(db_session: Session) -> None:
    from vehicle_ownership.main import app

    headers = {"X-User-Id": "user-9"}
    with TestClient(app) as client:
        created = client.post("/api/profile", json={"email": "ana@example.com", "fullName": "Ana Torres"}, headers=headers)
        fetched = client.get("/api/profile", headers=headers)
        rejected = client.put("/api/profile", json={"phone": "12"}, headers=headers)

    assert created.status_code == 200
    assert fetched.json()["profile"]["email"] == "ana@example.com"
    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "invalid_phone"
