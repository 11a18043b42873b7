from ..database.session import Database
from ..repositories.item_repository import ItemRepository
from ..repositories.warehouse_repository import WarehouseRepository
from ..schemas.item import ItemCreate, ItemRead, ItemUpdate
from ..schemas.warehouse import WarehouseCreate, WarehouseRead, WarehouseUpdate
from .entity_service import EntityService


def build_warehouse_service(database: Database, *, default_actor_id: int | None = 1) -> EntityService:
    return EntityService(
        WarehouseRepository(database, default_actor_id=default_actor_id),
        create_schema=WarehouseCreate,
        update_schema=WarehouseUpdate,
        read_schema=WarehouseRead,
    )


def build_item_service(database: Database, *, default_actor_id: int | None = 1) -> EntityService:
    return EntityService(
        ItemRepository(database, default_actor_id=default_actor_id),
        create_schema=ItemCreate,
        update_schema=ItemUpdate,
        read_schema=ItemRead,
    )
