"""Schemas package re-exports for easy imports from `src.catalog.schemas`."""
from .schemas import (
    validate_payload,
    MAX_INT64,
    ProductUrls,
    ProductLinks,
    ProductUser,
    Tag,
    ProductBase,
    ProductCreate,
    ProductUpdate,
    Product,
    ProductFilter,
    OrderBase,
    OrderCreate,
    OrderUpdate,
    Order,
    OrderDetail,
    OrderFilter,
    OrderStatus,
    DeleteResult,
)

__all__ = [
    "validate_payload",
    "MAX_INT64",
    "ProductUrls",
    "ProductLinks",
    "ProductUser",
    "Tag",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "Product",
    "ProductFilter",
    "OrderBase",
    "OrderCreate",
    "OrderUpdate",
    "Order",
    "OrderDetail",
    "OrderFilter",
    "OrderStatus",
    "DeleteResult",
]
