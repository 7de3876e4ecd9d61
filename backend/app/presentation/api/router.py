"""Top-level API router — mounts every endpoint group under ``/api``."""

from fastapi import APIRouter

from app.presentation.api.endpoints.customers import router as customers_router
from app.presentation.api.endpoints.health import router as health_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(customers_router)
