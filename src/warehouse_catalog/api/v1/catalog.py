from ...schemas.item import ItemCreate, ItemRead, ItemUpdate
from ...schemas.warehouse import WarehouseCreate, WarehouseRead, WarehouseUpdate
from ..deps import get_item_service, get_warehouse_service
from .entity_router import build_entity_router

warehouses_router = build_entity_router(
    prefix="/api/warehouses",
    resource_name="Warehouse",
    get_service=get_warehouse_service,
    create_schema=WarehouseCreate,
    update_schema=WarehouseUpdate,
    read_schema=WarehouseRead,
)

items_router = build_entity_router(
    prefix="/api/items",
    resource_name="Item",
    get_service=get_item_service,
    create_schema=ItemCreate,
    update_schema=ItemUpdate,
    read_schema=ItemRead,
)
