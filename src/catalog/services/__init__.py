"""Services package re-exports for easy imports from `src.catalog.services`."""
from ..exceptions import NotFoundError, ValidationError, DatabaseError
from .base import Service
from .products import ProductService
from .orders import OrderService

__all__ = [
    "Service",
    "ProductService",
    "OrderService",
    "NotFoundError",
    "ValidationError",
    "DatabaseError",
]
