"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vehicle_ownership import __version__
from vehicle_ownership.api import router as api_router
from vehicle_ownership.core.maintenance import ensure_default_service_types
from vehicle_ownership.core.registration import ensure_default_vehicle_types
from vehicle_ownership.db import Base, engine, SessionLocal
from vehicle_ownership import models  # noqa: F401 - ensure models are imported for metadata creation
from vehicle_ownership.settings import settings
from vehicle_ownership.utils.logging import logger

app = FastAPI(title="Vehicle Ownership API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

with SessionLocal() as db:
    ensure_default_vehicle_types(db)
    ensure_default_service_types(db)

app.include_router(api_router)


@app.exception_handler(Exception)
async def all_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"ok": False, "error": "internal_error"})


@app.on_event("startup")
async def _log_startup() -> None:
    logger.info(
        "Vehicle ownership API started (env=%s, registry=%s, latency=%s)",
        settings.app_env,
        settings.registry_backend,
        "on" if settings.registry_latency_enabled else "off",
    )


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("vehicle_ownership.main:app", host="0.0.0.0", port=10000, reload=True)
