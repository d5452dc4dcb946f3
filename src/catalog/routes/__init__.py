"""HTTP routers for the catalog records."""
from . import products, orders

__all__ = ["products", "orders"]
