"""
FastAPI dependencies.

Everything is created once in `create_app` and stored on `app.state`; the
dependencies below only hand those objects to route functions.
"""
from fastapi import Request

from ..config.settings import Settings
from ..database.session import Database
from ..services.entity_service import EntityService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_warehouse_service(request: Request) -> EntityService:
    return request.app.state.warehouse_service


def get_item_service(request: Request) -> EntityService:
    return request.app.state.item_service
