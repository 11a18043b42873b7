r"""
Centralized access to all database models of the catalog.

Importing this package registers every model on `Base.metadata`, which
`Database.create_all()` relies on.

    from warehouse_catalog.models import Warehouse, Item
"""

from .warehouse import Warehouse
from .item import Item

__all__ = [
    "Warehouse",
    "Item",
]
