from typing import List, Optional

from .database import CatalogStore
from .models import Category, Product

# Read-only queries over the catalog. Nothing here mutates the store, and
# "not found" is returned as None rather than raised.


class ProductQueries:
    def __init__(self, store: CatalogStore):
        self.store = store

    def get_all(self) -> List[Product]:
        return list(self.store.products)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        for p in self.store.products:
            if p.id == product_id:
                return p
        return None

    def get_by_category(self, category: str) -> List[Product]:
        return [p for p in self.store.products if p.category == category]

    def get_featured(self) -> List[Product]:
        return [p for p in self.store.products if p.featured is True]

    def search(self, term: str) -> List[Product]:
        # matches name or description, case-insensitive
        term = term.lower()
        return [
            p for p in self.store.products
            if term in p.name.lower() or term in p.description.lower()
        ]

    def get_in_stock(self) -> List[Product]:
        return [p for p in self.store.products if p.in_stock]


class CategoryQueries:
    def __init__(self, store: CatalogStore):
        self.store = store

    def get_all(self) -> List[Category]:
        return list(self.store.categories)

    def get_by_name(self, name: str) -> Optional[Category]:
        return next((c for c in self.store.categories if c.name == name), None)

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return next((c for c in self.store.categories if c.id == category_id), None)

    def exists(self, name: str) -> bool:
        return any(c.name == name for c in self.store.categories)
