"""Helpers shared by the vehicle endpoints."""

from __future__ import annotations

import asyncio

from fastapi import HTTPException
from sqlalchemy.orm import Session

from vehicle_ownership.core.reconciliation import (
    OwnershipReconciler,
    ReasonCode,
    ReconciliationRequest,
    ReconciliationResult,
)
from vehicle_ownership.crud import get_profile
from vehicle_ownership.settings import settings
from vehicle_ownership.utils.logging import logger


def build_request_for_user(db: Session, user_id: str, plate: str) -> ReconciliationRequest:
    """Fill the requester fields from the caller's profile."""
    profile = get_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="profile_not_found")
    if not profile.document_type or not profile.document_number:
        raise HTTPException(status_code=400, detail="profile_document_missing")

    return ReconciliationRequest(
        plate=(plate or "").strip(),
        requester_document_type=profile.document_type.strip().upper(),
        requester_document_number=profile.document_number.strip(),
        requester_full_name=profile.full_name or "",
    )


async def run_reconciliation(
    reconciler: OwnershipReconciler,
    request: ReconciliationRequest,
    *,
    timeout: float | None = None,
) -> ReconciliationResult:
    timeout = settings.reconciliation_timeout_seconds if timeout is None else timeout
    try:
        return await asyncio.wait_for(reconciler.reconcile_request(request), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Ownership reconciliation timed out after %.1fs for %s", timeout, request.plate)
        return ReconciliationResult.invalid(ReasonCode.SYSTEM_ERROR)


__all__ = ["build_request_for_user", "run_reconciliation"]
