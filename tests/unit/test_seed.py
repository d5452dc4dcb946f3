"""Unit tests for the product seed loader."""
import json

import pytest

from src.catalog.exceptions import ValidationError
from src.catalog.seed import load_seed_file, seed_products
from src.catalog.services import ProductService


def test_seed_products_loads_valid_records(db, product_payload):
    records = [product_payload(likes=1), product_payload(likes=2)]
    assert seed_products(db, records) == 2
    assert sorted(p.likes for p in ProductService(db).list()) == [1, 2]


def test_seed_products_skips_invalid_records(db, product_payload):
    bad = product_payload()
    del bad["links"]
    assert seed_products(db, [bad, product_payload()]) == 1
    assert ProductService(db).count() == 1


def test_load_seed_file(tmp_path, product_payload):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([product_payload()]), encoding="utf-8")
    records = load_seed_file(path)
    assert records[0]["likes"] == 42


def test_load_seed_file_requires_array(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"likes": 1}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_seed_file(path)
