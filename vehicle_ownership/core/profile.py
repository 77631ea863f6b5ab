"""User profile management: the identity fields ownership checks read."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.orm import Session

from vehicle_ownership.constants import (
    EMAIL_RE,
    PHONE_RE,
    PROFILE_NAME_MIN_LENGTH,
    VALID_DOCUMENT_TYPES,
)
from vehicle_ownership.crud import get_profile, get_profile_by_email, update_profile, upsert_profile
from vehicle_ownership.models import UserProfile
from vehicle_ownership.utils.logging import logger
from vehicle_ownership.utils.string import is_valid_document_number
from vehicle_ownership.utils.time import format_cot_iso

__all__ = [
    "ProfileValidationError",
    "ProfileNotFoundError",
    "ProfileAlreadyExistsError",
    "clean_profile_changes",
    "create_profile",
    "update_profile_for_user",
    "serialize_profile",
]

_DOCUMENT_TYPE_LABELS = dict(VALID_DOCUMENT_TYPES)


class ProfileValidationError(ValueError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class ProfileNotFoundError(ValueError):
    pass


class ProfileAlreadyExistsError(ValueError):
    """Another profile already uses the user id or the email."""


def _clean_full_name(value: str | None) -> str:
    name = " ".join((value or "").split())
    if len(name) < PROFILE_NAME_MIN_LENGTH:
        raise ProfileValidationError(
            "invalid_full_name", "El nombre completo debe tener al menos 2 caracteres"
        )
    if not all(ch.isalpha() or ch == " " for ch in name):
        raise ProfileValidationError("invalid_full_name", "Nombre inválido")
    return name


def _optional_text(value: str | None) -> str | None:
    text = (value or "").strip()
    return text or None


def clean_profile_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and normalize editable profile fields; blank optional fields clear them."""
    cleaned: Dict[str, Any] = {}
    for key, value in changes.items():
        if key == "full_name":
            cleaned[key] = _clean_full_name(value)
        elif key == "document_type":
            document_type = (value or "").strip().upper()
            if document_type not in _DOCUMENT_TYPE_LABELS:
                raise ProfileValidationError("invalid_document_type", "Tipo de documento inválido")
            cleaned[key] = document_type
        elif key == "document_number":
            document_number = (value or "").strip()
            if not is_valid_document_number(document_number):
                raise ProfileValidationError(
                    "invalid_document_format", "El número de documento debe tener entre 6 y 12 dígitos"
                )
            cleaned[key] = document_number
        elif key == "phone":
            phone = _optional_text(value)
            if phone is not None and not PHONE_RE.fullmatch(phone):
                raise ProfileValidationError("invalid_phone", "Teléfono inválido")
            cleaned[key] = phone
        elif key in ("address", "city"):
            cleaned[key] = _optional_text(value)
        else:
            raise ProfileValidationError("unknown_profile_field", f"Campo no editable: {key}")
    return cleaned


def create_profile(db: Session, *, user_id: str, email: str, **fields: Any) -> UserProfile:
    email = (email or "").strip().lower()
    if not EMAIL_RE.fullmatch(email):
        raise ProfileValidationError("invalid_email", "Email inválido")
    if "full_name" not in fields:
        raise ProfileValidationError("invalid_full_name", "El nombre completo es obligatorio")
    if get_profile(db, user_id) is not None or get_profile_by_email(db, email) is not None:
        raise ProfileAlreadyExistsError(user_id)

    cleaned = clean_profile_changes(fields)
    profile = upsert_profile(db, user_id=user_id, email=email, **cleaned)
    logger.info("Created profile for user %s", user_id)
    return profile


def update_profile_for_user(db: Session, user_id: str, changes: Dict[str, Any]) -> UserProfile:
    profile = get_profile(db, user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)
    cleaned = clean_profile_changes(changes)
    if not cleaned:
        return profile
    return update_profile(db, profile, cleaned)


def serialize_profile(profile: UserProfile, *, accepted_document_type: str) -> dict[str, Any]:
    full_name = profile.full_name or ""
    return {
        "id": profile.id,
        "email": profile.email,
        "fullName": profile.full_name,
        "firstName": full_name.split(" ")[0] if full_name else None,
        "documentType": profile.document_type,
        "documentTypeLabel": _DOCUMENT_TYPE_LABELS.get(profile.document_type or ""),
        "documentNumber": profile.document_number,
        "phone": profile.phone,
        "address": profile.address,
        "city": profile.city,
        "hasCompleteContactInfo": bool(profile.phone and profile.address and profile.city),
        "canProveOwnership": (
            profile.document_type == accepted_document_type
            and is_valid_document_number(profile.document_number or "")
        ),
        "createdAt": format_cot_iso(profile.created_at),
        "updatedAt": format_cot_iso(profile.updated_at),
    }
