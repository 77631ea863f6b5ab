"""Health endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
def healthz() -> dict[str, object]:
    """Health check endpoint used by monitoring systems."""

    return {"ok": True, "message": "Vehicle ownership service is running."}
