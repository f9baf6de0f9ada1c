# rainforest/main.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import handlers
from .config import Settings, configure_logging
from .core import CategoryQueries, ProductQueries
from .database import CatalogStore
from .handlers import envelope

logger = logging.getLogger(__name__)


# ---------------------------
# Dependencies
# ---------------------------
def get_products(request: Request) -> ProductQueries:
    return request.app.state.products


def get_categories(request: Request) -> CategoryQueries:
    return request.app.state.categories


# ---------------------------
# Product endpoints
# ---------------------------
products_router = APIRouter(prefix="/products")


@products_router.get("")
def list_products(available_only: bool = False, products: ProductQueries = Depends(get_products)):
    return handlers.list_products(products, available_only)


# /featured and /search must be registered before /{product_id}
@products_router.get("/featured")
def featured_products(products: ProductQueries = Depends(get_products)):
    return handlers.featured_products(products)


@products_router.get("/search")
def search_products(q: Optional[str] = Query(None), products: ProductQueries = Depends(get_products)):
    return handlers.search_products(products, q)


@products_router.get("/category/{category}")
def products_by_category(category: str, products: ProductQueries = Depends(get_products)):
    return handlers.products_by_category(products, category)


@products_router.get("/{product_id}")
def get_product(product_id: str, products: ProductQueries = Depends(get_products)):
    return handlers.get_product(products, product_id)


# ---------------------------
# Category endpoints
# ---------------------------
categories_router = APIRouter(prefix="/categories")


@categories_router.get("")
def list_categories(categories: CategoryQueries = Depends(get_categories)):
    return handlers.list_categories(categories)


@categories_router.get("/{name}")
def get_category(name: str, categories: CategoryQueries = Depends(get_categories)):
    return handlers.get_category(categories, name)


# ---------------------------
# Health
# ---------------------------
health_router = APIRouter()


@health_router.get("/health")
def health():
    return {
        "success": True,
        "message": "Server is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    """Build the API around an explicitly loaded catalog.

    When ``store`` is not given the catalog is read from ``settings.data_dir``;
    a CatalogLoadError propagates and aborts startup.
    """
    settings = settings or Settings.from_env()
    if store is None:
        store = CatalogStore.load(settings.data_dir, strict=settings.strict_categories)

    app = FastAPI(title="Rainforest Foods API (read-only catalog)")
    app.state.settings = settings
    app.state.store = store
    app.state.products = ProductQueries(store)
    app.state.categories = CategoryQueries(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    prefix = settings.api_prefix
    app.include_router(products_router, prefix=prefix)
    app.include_router(categories_router, prefix=prefix)
    app.include_router(health_router, prefix=prefix)

    @app.get("/")
    def root():
        return {
            "message": "Welcome to Rainforest Foods API",
            "endpoints": {
                "health": f"{prefix}/health",
                "products": f"{prefix}/products",
                "categories": f"{prefix}/categories",
            },
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return envelope(404, error="Route not found")
        return envelope(exc.status_code, error=str(exc.detail))

    # bad query parameters (e.g. ?available_only=maybe); the raw input is not echoed back
    @app.exception_handler(RequestValidationError)
    async def invalid_params(request: Request, exc: RequestValidationError):
        names = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        return envelope(400, error="Invalid parameter: " + ", ".join(names) if names else "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return envelope(500, error="Internal server error")

    return app


def build_app() -> FastAPI:
    """uvicorn factory: settings from the environment, logging configured, catalog loaded."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)
