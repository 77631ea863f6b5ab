"""Vehicle API routers."""

from fastapi import APIRouter

from .query import router as query_router
from .register import router as register_router
from .validate import router as validate_router

router = APIRouter()
router.include_router(validate_router)
router.include_router(register_router)
router.include_router(query_router)

__all__ = ["router"]
