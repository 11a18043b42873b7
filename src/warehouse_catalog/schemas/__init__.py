from .envelope import ApiResponse, ErrorDetail, success_response, error_response
from .pagination import PaginationQuery, PaginationMeta, Page
from .health import DependencyHealth, HealthStatus
from .warehouse import WarehouseCreate, WarehouseUpdate, WarehouseRead
from .item import ItemCreate, ItemUpdate, ItemRead

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "success_response",
    "error_response",
    "PaginationQuery",
    "PaginationMeta",
    "Page",
    "DependencyHealth",
    "HealthStatus",
    "WarehouseCreate",
    "WarehouseUpdate",
    "WarehouseRead",
    "ItemCreate",
    "ItemUpdate",
    "ItemRead",
]
