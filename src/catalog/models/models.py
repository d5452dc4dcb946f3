from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    JSON,
    ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import declarative_base, relationship
import enum
import secrets
import time

Base = declarative_base()


def generate_id() -> str:
    """Return a new record id.

    Ids start with the creation time in nanoseconds (hex) so sorting by id
    follows creation order; the random suffix keeps them unique.
    """
    return f"{time.time_ns():016x}{secrets.token_hex(4)}"


class OrderStatus(enum.Enum):
    CREATED = "CREATED"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class Product(Base):
    __tablename__ = "products"
    id = Column(String(32), primary_key=True, default=generate_id)
    description = Column(Text, nullable=True)
    alt_description = Column(Text, nullable=True)
    likes = Column(Integer, nullable=False)
    # nested sub-documents, validated by the schemas layer
    urls = Column(JSON, nullable=False)
    links = Column(JSON, nullable=False)
    user = Column(JSON, nullable=False)

    tag_rows = relationship(
        "ProductTag",
        order_by="ProductTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self):
        return [{"title": row.title} for row in self.tag_rows]


class ProductTag(Base):
    __tablename__ = "product_tags"
    id = Column(Integer, primary_key=True)
    product_id = Column(String(32), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    title = Column(String, nullable=False, index=True)


class Order(Base):
    __tablename__ = "orders"
    id = Column(String(32), primary_key=True, default=generate_id)
    buyer_email = Column(String, nullable=False)
    status = Column(SAEnum(OrderStatus), nullable=False, default=OrderStatus.CREATED, index=True)

    product_refs = relationship(
        "OrderProduct",
        order_by="OrderProduct.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def product_ids(self):
        return [ref.product_id for ref in self.product_refs]


class OrderProduct(Base):
    """One entry of an order's product list.

    `product_id` has no foreign key: orders only reference products, and
    deleting a product leaves existing orders untouched.
    """

    __tablename__ = "order_products"
    id = Column(Integer, primary_key=True)
    order_id = Column(String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(String, nullable=False, index=True)
