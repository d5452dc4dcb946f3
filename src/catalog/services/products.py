"""Product records: paged/tag-filtered listing, lookup, create, partial edit and delete."""
import logging

from .. import models, schemas
from ..exceptions import NotFoundError
from .base import Service

logger = logging.getLogger(__name__)


def _tag_rows(tags):
    return [models.ProductTag(position=position, title=tag.title) for position, tag in enumerate(tags)]


class ProductService(Service):

    def _query(self, criteria: schemas.ProductFilter):
        query = self.db.query(models.Product)
        if criteria.tag:
            # exact, case-sensitive match on any tag title
            query = query.filter(models.Product.tag_rows.any(models.ProductTag.title == criteria.tag))
        return query

    def list(self, criteria=None):
        """Return products ordered by id, skipping `offset` and returning at most `limit`."""
        criteria = schemas.validate_payload(schemas.ProductFilter, criteria if criteria is not None else {})
        rows = (
            self._query(criteria)
            .order_by(models.Product.id.asc())
            .offset(criteria.offset)
            .limit(criteria.limit)
            .all()
        )
        return [schemas.Product.model_validate(row) for row in rows]

    def count(self, criteria=None) -> int:
        criteria = schemas.validate_payload(schemas.ProductFilter, criteria if criteria is not None else {})
        return self._query(criteria).count()

    def get_row(self, product_id: str):
        return self.db.get(models.Product, product_id)

    def get(self, product_id: str):
        """Return the product, or None if there is no product with that id."""
        db_product = self.get_row(product_id)
        if db_product is None:
            logger.debug("Product %s not found", product_id)
            return None
        return schemas.Product.model_validate(db_product)

    def get_many(self, product_ids):
        """Map each id that still exists to its product; missing ids are left out."""
        if not product_ids:
            return {}
        rows = self.db.query(models.Product).filter(models.Product.id.in_(list(set(product_ids)))).all()
        return {row.id: schemas.Product.model_validate(row) for row in rows}

    def create(self, fields):
        product = schemas.validate_payload(schemas.ProductCreate, fields)
        db_product = models.Product(
            id=models.generate_id(),
            description=product.description,
            alt_description=product.alt_description,
            likes=product.likes,
            urls=product.urls.model_dump(),
            links=product.links.model_dump(),
            user=product.user.model_dump(),
            tag_rows=_tag_rows(product.tags),
        )
        self.db.add(db_product)
        self._commit()
        self.db.refresh(db_product)
        logger.info("Created product %s", db_product.id)
        return schemas.Product.model_validate(db_product)

    def edit(self, product_id: str, changes):
        """Overwrite each field present in `changes`, re-validate and save.

        Fields are replaced whole: `{"user": {...}}` swaps the entire user
        object, it is not merged into the stored one.
        """
        changes = schemas.validate_payload(schemas.ProductUpdate, changes)
        db_product = self.get_row(product_id)
        if db_product is None:
            raise NotFoundError("Product", product_id)

        fields = changes.model_fields_set
        merged = schemas.Product.model_validate(db_product).model_dump(exclude={"id"})
        merged.update({field: getattr(changes, field) for field in fields})
        product = schemas.validate_payload(schemas.ProductCreate, merged)

        if "description" in fields:
            db_product.description = product.description
        if "alt_description" in fields:
            db_product.alt_description = product.alt_description
        if "likes" in fields:
            db_product.likes = product.likes
        if "urls" in fields:
            db_product.urls = product.urls.model_dump()
        if "links" in fields:
            db_product.links = product.links.model_dump()
        if "user" in fields:
            db_product.user = product.user.model_dump()
        if "tags" in fields:
            db_product.tag_rows = _tag_rows(product.tags)

        self._commit()
        self.db.refresh(db_product)
        logger.info("Edited product %s (%s)", product_id, ", ".join(sorted(fields)) or "no fields")
        return schemas.Product.model_validate(db_product)

    def destroy(self, product_id: str) -> int:
        """Delete the product if it exists. Returns the number of records removed."""
        db_product = self.get_row(product_id)
        if db_product is None:
            logger.debug("Delete of missing product %s ignored", product_id)
            return 0
        self.db.delete(db_product)
        self._commit()
        logger.info("Deleted product %s", product_id)
        return 1
