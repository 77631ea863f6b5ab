"""Profile endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from vehicle_ownership.api.deps import get_current_user_id
from vehicle_ownership.core.profile import (
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    ProfileValidationError,
    create_profile,
    serialize_profile,
    update_profile_for_user,
)
from vehicle_ownership.crud import get_profile
from vehicle_ownership.db import get_db
from vehicle_ownership.schemas.profile import ProfileCreateRequest, ProfileUpdateRequest
from vehicle_ownership.settings import settings

router = APIRouter(prefix="/api/profile")


def _serialize(profile):
    return serialize_profile(profile, accepted_document_type=settings.accepted_document_type)


@router.get("")
def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    profile = get_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="profile_not_found")
    return {"ok": True, "profile": _serialize(profile)}


@router.post("")
def create_my_profile(
    payload: ProfileCreateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    fields = payload.model_dump(exclude_none=True, exclude={"email"})
    try:
        profile = create_profile(db, user_id=user_id, email=payload.email, **fields)
    except ProfileValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.code) from exc
    except ProfileAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail="profile_already_exists") from exc
    return {"ok": True, "profile": _serialize(profile)}


@router.put("")
def update_my_profile(
    payload: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        profile = update_profile_for_user(db, user_id, payload.model_dump(exclude_unset=True))
    except ProfileValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.code) from exc
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail="profile_not_found") from exc
    return {"ok": True, "profile": _serialize(profile)}
