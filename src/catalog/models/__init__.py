"""Models package re-exports for easy imports from `src.catalog.models`."""
from .models import Base, Product, ProductTag, Order, OrderProduct, OrderStatus, generate_id

__all__ = ["Base", "Product", "ProductTag", "Order", "OrderProduct", "OrderStatus", "generate_id"]
