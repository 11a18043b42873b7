"""
Repository layer.

One generic `EntityRepository` configured per entity kind by an `EntitySpec`.

Usage:
    from warehouse_catalog.repositories import WarehouseRepository, ItemRepository
"""

from .base_repository import EntityRepository, EntitySpec
from .merge import apply_patch
from .warehouse_repository import WarehouseRepository, WAREHOUSE_SPEC
from .item_repository import ItemRepository, ITEM_SPEC

__all__ = [
    "EntityRepository",
    "EntitySpec",
    "apply_patch",
    "WarehouseRepository",
    "WAREHOUSE_SPEC",
    "ItemRepository",
    "ITEM_SPEC",
]
