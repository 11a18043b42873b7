from .entity_service import EntityService
from .health import check_health
from .catalog import build_item_service, build_warehouse_service

__all__ = ["EntityService", "check_health", "build_item_service", "build_warehouse_service"]
