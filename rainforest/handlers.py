import functools
import logging
import re
from typing import Any, Callable, Optional

from fastapi.responses import JSONResponse

from .core import CategoryQueries, ProductQueries
from .errors import CatalogError, InvalidInput, NotFound
from .models import ApiResponse, to_json

# This file contains the logic behind every catalog endpoint. Handlers return
# plain data or raise a CatalogError; the `enveloped` decorator is the one
# place where results and faults become HTTP responses.

logger = logging.getLogger(__name__)


def envelope(status_code: int = 200, data: Any = None, error: Optional[str] = None) -> JSONResponse:
    body = ApiResponse(success=error is None, data=to_json(data), error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def enveloped(failure_message: str) -> Callable[[Callable[..., Any]], Callable[..., JSONResponse]]:
    """Wrap a handler so it always answers with an envelope.

    Success -> 200 with ``data``. CatalogError -> its own status and message.
    Anything else is logged and answered with a 500 carrying
    ``failure_message``, so internals never reach the client.
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., JSONResponse]:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> JSONResponse:
            try:
                result = fn(*args, **kwargs)
            except CatalogError as e:
                return envelope(e.status_code, error=e.message)
            except Exception:
                logger.exception("%s failed", fn.__name__)
                return envelope(500, error=failure_message)
            return envelope(200, data=result)

        return wrapper

    return decorator


_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_id(raw: str, message: str = "Invalid product ID") -> Optional[int]:
    """Parse a path id. Only ASCII digits with an optional sign are accepted.

    Returns None for a well-formed integer too long to convert; it can match
    no record, so callers treat it as not found.
    """
    raw = raw.strip() if isinstance(raw, str) else ""
    if not _INTEGER.fullmatch(raw):
        raise InvalidInput(message)
    try:
        return int(raw)
    except ValueError:
        return None


# ---------------------------
# Product handlers
# ---------------------------
@enveloped("Failed to fetch products")
def list_products(products: ProductQueries, available_only: bool = False):
    if available_only:
        return products.get_in_stock()
    return products.get_all()


@enveloped("Failed to fetch product")
def get_product(products: ProductQueries, raw_id: str):
    product_id = parse_id(raw_id)
    product = products.get_by_id(product_id) if product_id is not None else None
    if product is None:
        raise NotFound("Product not found")
    return product


@enveloped("Failed to fetch products by category")
def products_by_category(products: ProductQueries, category: str):
    return products.get_by_category(category)


@enveloped("Failed to fetch featured products")
def featured_products(products: ProductQueries):
    return products.get_featured()


@enveloped("Failed to search products")
def search_products(products: ProductQueries, term: Optional[str]):
    if not term:
        raise InvalidInput("Search term is required")
    return products.search(term)


# ---------------------------
# Category handlers
# ---------------------------
@enveloped("Failed to fetch categories")
def list_categories(categories: CategoryQueries):
    return categories.get_all()


@enveloped("Failed to fetch category")
def get_category(categories: CategoryQueries, name: str):
    category = categories.get_by_name(name)
    if category is None:
        raise NotFound("Category not found")
    return category
