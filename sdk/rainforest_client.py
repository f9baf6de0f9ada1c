# sdk/rainforest_client.py
import httpx
import requests
from urllib.parse import quote
from typing import Any, Dict, List, Optional


class CatalogAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _segment(value: Any) -> str:
    # one path segment: "/", "?" and "#" must not leak into the route
    return quote(str(value), safe="")


def _unwrap(status_code: int, body: Any) -> Any:
    """Return the envelope's data, or raise with its error message."""
    if isinstance(body, dict) and body.get("success"):
        return body.get("data")
    if isinstance(body, dict) and body.get("error"):
        raise CatalogAPIError(status_code, body["error"])
    raise CatalogAPIError(status_code, "unexpected response")


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:5000/api", timeout: int = 10, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # anything with a requests-style .get() works here (e.g. a TestClient)
        self.session = session if session is not None else requests.Session()

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        r = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        try:
            body = r.json()
        except ValueError:
            raise CatalogAPIError(r.status_code, r.text or "empty response")
        return _unwrap(r.status_code, body)

    def health(self) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self, available_only: bool = False) -> List[Dict[str, Any]]:
        params = {}
        if available_only:
            params["available_only"] = "true"
        return self._get("/products", params=params)

    def featured_products(self) -> List[Dict[str, Any]]:
        return self._get("/products/featured")

    def search_products(self, term: str) -> List[Dict[str, Any]]:
        return self._get("/products/search", params={"q": term})

    def products_by_category(self, category: str) -> List[Dict[str, Any]]:
        return self._get(f"/products/category/{_segment(category)}")

    def get_product(self, product_id: Any) -> Dict[str, Any]:
        return self._get(f"/products/{_segment(product_id)}")

    # Categories
    def list_categories(self) -> List[Dict[str, Any]]:
        return self._get("/categories")

    def get_category(self, name: str) -> Dict[str, Any]:
        return self._get(f"/categories/{_segment(name)}")

    # Async search (example)
    async def search_products_async(self, term: str) -> List[Dict[str, Any]]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.get(f"{self.base_url}/products/search", params={"q": term})
            return _unwrap(r.status_code, r.json())
