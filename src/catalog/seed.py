"""Bulk-load products from a JSON file (an array of product payloads)."""
import json
import logging
import os
from pathlib import Path

from .exceptions import ValidationError
from .services import ProductService

logger = logging.getLogger(__name__)

SEED_FILE = os.getenv("SEED_FILE")


def load_seed_file(path):
    with Path(path).open(encoding="utf-8") as fh:
        records = json.load(fh)
    if not isinstance(records, list):
        raise ValidationError(f"Seed file {path} must contain a JSON array of products")
    return records


def seed_products(db, records) -> int:
    """Create a product per record, skipping (and logging) records that fail validation."""
    service = ProductService(db)
    loaded = 0
    for index, record in enumerate(records):
        try:
            service.create(record)
        except ValidationError as exc:
            logger.warning("Skipping seed record %d: %s", index, exc.message)
            continue
        loaded += 1
    logger.info("Seeded %d of %d product(s)", loaded, len(records))
    return loaded
