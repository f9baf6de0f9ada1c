import json
from pathlib import Path

import pytest

from rainforest.core import CategoryQueries, ProductQueries
from rainforest.database import CatalogStore

@pytest.fixture(scope="session")
def store() -> CatalogStore:
    return CatalogStore.load()

@pytest.fixture(scope="session")
def products(store) -> ProductQueries:
    return ProductQueries(store)

@pytest.fixture(scope="session")
def categories(store) -> CategoryQueries:
    return CategoryQueries(store)

@pytest.fixture
def write_catalog(tmp_path: Path):
    """Write products/categories JSON into a temp dir and return the dir."""

    def _write(products, categories) -> Path:
        for fname, payload in (("products.json", products), ("categories.json", categories)):
            text = payload if isinstance(payload, str) else json.dumps(payload)
            (tmp_path / fname).write_text(text)
        return tmp_path

    return _write
