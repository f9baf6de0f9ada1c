import json
import logging
from pathlib import Path
from typing import Any, List, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import CatalogLoadError
from .models import Category, Product

# This file holds the in-memory catalog, loaded once from the static JSON files.

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent / "data"
PRODUCTS_FILE = "products.json"
CATEGORIES_FILE = "categories.json"

M = TypeVar("M", bound=BaseModel)


def _read_records(path: Path, model: Type[M]) -> Tuple[M, ...]:
    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogLoadError(f"catalog file not found: {path}")
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"malformed JSON in {path}: {e}")

    if not isinstance(raw, list):
        raise CatalogLoadError(f"{path} must contain a JSON array of records")

    records: List[M] = []
    for i, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raise CatalogLoadError(f"invalid record #{i} in {path}: {e}")
    return tuple(records)


class CatalogStore:
    """Immutable product and category collections.

    Built once by :meth:`load` at startup and shared read-only by every
    request; there are no mutation methods.
    """

    def __init__(self, products: Tuple[Product, ...], categories: Tuple[Category, ...]):
        self._products = tuple(products)
        self._categories = tuple(categories)

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    def orphaned_products(self) -> List[Product]:
        """Products whose category names no known category."""
        names = {c.name for c in self._categories}
        return [p for p in self._products if p.category not in names]

    @classmethod
    def load(cls, data_dir: Union[str, Path] = DATA_DIR, strict: bool = False) -> "CatalogStore":
        data_dir = Path(data_dir)
        store = cls(
            products=_read_records(data_dir / PRODUCTS_FILE, Product),
            categories=_read_records(data_dir / CATEGORIES_FILE, Category),
        )

        orphans = store.orphaned_products()
        for p in orphans:
            logger.warning("product %s (%s) references unknown category %r", p.id, p.name, p.category)
        if orphans and strict:
            raise CatalogLoadError(
                f"{len(orphans)} product(s) reference unknown categories: "
                + ", ".join(sorted({p.category for p in orphans}))
            )

        logger.info(
            "catalog loaded from %s: %d products, %d categories",
            data_dir, len(store.products), len(store.categories),
        )
        return store
