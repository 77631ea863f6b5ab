"""Application API routers."""

from fastapi import APIRouter

from .health import router as health_router
from .pico_placa import router as pico_placa_router
from .profile import router as profile_router
from .service import router as service_router
from .vehicle import router as vehicle_router

router = APIRouter()
router.include_router(health_router)
router.include_router(vehicle_router)
router.include_router(pico_placa_router)
router.include_router(profile_router)
router.include_router(service_router)

__all__ = ["router"]
