"""Order records.

Orders hold product ids only. `get`, `create` and `edit` return the order
with every id expanded into its product; ids whose product has since been
deleted expand to None.
"""
import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..exceptions import NotFoundError
from .base import Service
from .products import ProductService

logger = logging.getLogger(__name__)


def _product_refs(product_ids):
    return [models.OrderProduct(position=position, product_id=product_id) for position, product_id in enumerate(product_ids)]


def _to_order(db_order: models.Order) -> schemas.Order:
    return schemas.Order(
        id=db_order.id,
        buyerEmail=db_order.buyer_email,
        products=db_order.product_ids,
        status=db_order.status,
    )


class OrderService(Service):

    def __init__(self, db: Session, products: ProductService = None):
        super().__init__(db)
        self.products = products if products is not None else ProductService(db)

    def _query(self, criteria: schemas.OrderFilter):
        query = self.db.query(models.Order)
        if criteria.product_id:
            query = query.filter(models.Order.product_refs.any(models.OrderProduct.product_id == criteria.product_id))
        if criteria.status is not None:
            query = query.filter(models.Order.status == criteria.status)
        return query

    def _expand(self, db_order: models.Order) -> schemas.OrderDetail:
        product_ids = db_order.product_ids
        found = self.products.get_many(product_ids)
        return schemas.OrderDetail(
            id=db_order.id,
            buyerEmail=db_order.buyer_email,
            status=db_order.status,
            products=[found.get(product_id) for product_id in product_ids],
        )

    def list(self, criteria=None):
        """Return orders ordered by id; `product_id` and `status` filters are AND-ed."""
        criteria = schemas.validate_payload(schemas.OrderFilter, criteria if criteria is not None else {})
        rows = (
            self._query(criteria)
            .order_by(models.Order.id.asc())
            .offset(criteria.offset)
            .limit(criteria.limit)
            .all()
        )
        return [_to_order(row) for row in rows]

    def count(self, criteria=None) -> int:
        criteria = schemas.validate_payload(schemas.OrderFilter, criteria if criteria is not None else {})
        return self._query(criteria).count()

    def get_row(self, order_id: str):
        return self.db.get(models.Order, order_id)

    def get(self, order_id: str):
        db_order = self.get_row(order_id)
        if db_order is None:
            logger.debug("Order %s not found", order_id)
            return None
        return self._expand(db_order)

    def create(self, fields):
        order = schemas.validate_payload(schemas.OrderCreate, fields)
        db_order = models.Order(
            id=models.generate_id(),
            buyer_email=order.buyerEmail,
            status=order.status,
            product_refs=_product_refs(order.products),
        )
        self.db.add(db_order)
        self._commit()
        self.db.refresh(db_order)
        logger.info("Created order %s with %d product(s)", db_order.id, len(order.products))
        return self._expand(db_order)

    def edit(self, order_id: str, changes):
        """Overwrite each field present in `changes`, re-validate and save.

        Status is only checked against the enum; any status may follow any other.
        """
        changes = schemas.validate_payload(schemas.OrderUpdate, changes)
        db_order = self.get_row(order_id)
        if db_order is None:
            raise NotFoundError("Order", order_id)

        fields = changes.model_fields_set
        merged = {
            "buyerEmail": db_order.buyer_email,
            "products": db_order.product_ids,
            "status": db_order.status,
        }
        merged.update({field: getattr(changes, field) for field in fields})
        order = schemas.validate_payload(schemas.OrderCreate, merged)

        if "buyerEmail" in fields:
            db_order.buyer_email = order.buyerEmail
        if "products" in fields:
            db_order.product_refs = _product_refs(order.products)
        if "status" in fields:
            db_order.status = order.status

        self._commit()
        self.db.refresh(db_order)
        logger.info("Edited order %s (%s)", order_id, ", ".join(sorted(fields)) or "no fields")
        return self._expand(db_order)

    def destroy(self, order_id: str) -> int:
        db_order = self.get_row(order_id)
        if db_order is None:
            logger.debug("Delete of missing order %s ignored", order_id)
            return 0
        self.db.delete(db_order)
        self._commit()
        logger.info("Deleted order %s", order_id)
        return 1
