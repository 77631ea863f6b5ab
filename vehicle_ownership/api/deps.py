"""Shared dependencies for API endpoints."""

from __future__ import annotations

from fastapi import Header, HTTPException

from vehicle_ownership.core.reconciliation import OwnershipReconciler
from vehicle_ownership.core.registry import HttpRegistryLookup, RegistryLookup, SqlRegistryLookup
from vehicle_ownership.db import SessionLocal
from vehicle_ownership.settings import settings


def get_current_user_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str:
    """User id resolved upstream by the identity provider."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="user_id_required")
    return user_id


def build_registry_lookup() -> RegistryLookup:
    if settings.registry_backend == "http":
        if not settings.runt_api_url:
            raise RuntimeError("RUNT_API_URL is required when REGISTRY_BACKEND=http")
        return HttpRegistryLookup(settings.runt_api_url, timeout=settings.runt_api_timeout)
    return SqlRegistryLookup(SessionLocal)


def get_reconciler() -> OwnershipReconciler:
    latency = None
    if settings.registry_latency_enabled:
        latency = (settings.registry_latency_min_seconds, settings.registry_latency_max_seconds)
    return OwnershipReconciler(
        build_registry_lookup(),
        accepted_document_type=settings.accepted_document_type,
        latency=latency,
    )


__all__ = ["get_current_user_id", "build_registry_lookup", "get_reconciler"]
