from ..database.session import Database
from ..models.item import Item
from .base_repository import EntityRepository, EntitySpec

ITEM_SPEC: EntitySpec[Item] = EntitySpec(
    model=Item,
    resource_name="Item",
    id_field="item_id",
    code_field="item_code",
    name_field="item_name",
    searchable_fields=("item_code", "item_name", "item_description", "category", "brand"),
    sortable_fields={
        "name": "item_name",
        "code": "item_code",
        "category": "category",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    default_sort="name",
    # Item codes are printed on labels and stock records; they never change.
    code_mutable=False,
)


class ItemRepository(EntityRepository[Item]):
    def __init__(self, database: Database, *, default_actor_id: int | None = 1):
        super().__init__(ITEM_SPEC, database, default_actor_id=default_actor_id)
