"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from cms.api.v1.categories import router as categories_router
from cms.api.v1.health import router as health_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(categories_router, prefix="/categories", tags=["categories"])
