from fastapi import APIRouter

from .catalog import items_router, warehouses_router
from .health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(warehouses_router)
api_router.include_router(items_router)

__all__ = ["api_router"]
