from ..database.session import Database
from ..models.warehouse import Warehouse
from .base_repository import EntityRepository, EntitySpec

WAREHOUSE_SPEC: EntitySpec[Warehouse] = EntitySpec(
    model=Warehouse,
    resource_name="Warehouse",
    id_field="warehouse_id",
    code_field="warehouse_code",
    name_field="warehouse_name",
    searchable_fields=("warehouse_code", "warehouse_name", "city", "state"),
    sortable_fields={
        "name": "warehouse_name",
        "code": "warehouse_code",
        "city": "city",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    default_sort="name",
    # A warehouse may be re-coded; the new code is checked against the active set.
    code_mutable=True,
)


class WarehouseRepository(EntityRepository[Warehouse]):
    def __init__(self, database: Database, *, default_actor_id: int | None = 1):
        super().__init__(WAREHOUSE_SPEC, database, default_actor_id=default_actor_id)
