"""Warehouse catalog service: warehouses and items over a soft-delete repository layer."""
