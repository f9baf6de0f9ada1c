from fastapi.testclient import TestClient

from rainforest.config import Settings
from rainforest import main
from rainforest.main import build_app, create_app

client = TestClient(create_app(Settings()))


def test_health():
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Server is running!"
    assert "timestamp" in body


def test_root_lists_endpoints():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["endpoints"]["products"] == "/api/products"


def test_list_products():
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert "error" not in body
    assert [p["id"] for p in body["data"]] == list(range(1, 13))
    # camelCase on the wire, absent featured flag stays absent
    first, second = body["data"][0], body["data"][1]
    assert first["inStock"] is True and first["featured"] is True
    assert "featured" not in second


def test_list_products_available_only():
    r = client.get("/api/products", params={"available_only": "true"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data and all(p["inStock"] for p in data)
    assert 3 not in {p["id"] for p in data}


def test_featured_route_is_not_treated_as_id():
    r = client.get("/api/products/featured")
    assert r.status_code == 200
    data = r.json()["data"]
    assert [p["id"] for p in data] == [1, 3, 7, 11]
    assert all(p["featured"] is True for p in data)


def test_get_product_by_id():
    r = client.get("/api/products/1")
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "data": {
            "id": 1,
            "name": "Maca Root Powder",
            "price": 18.99,
            "category": "powders",
            "description": "Gelatinized Peruvian maca with a malty, nutty flavour. Great in oat milk lattes.",
            "image": "/images/maca-root-powder.jpg",
            "inStock": True,
            "featured": True,
        },
    }


def test_get_product_not_found():
    r = client.get("/api/products/999999")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Product not found"}


def test_get_product_invalid_id():
    r = client.get("/api/products/abc")
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Invalid product ID"}


def test_search():
    r = client.get("/api/products/search", params={"q": "MACA"})
    assert r.status_code == 200
    assert [p["id"] for p in r.json()["data"]] == [1, 3, 9]


def test_search_without_term():
    r = client.get("/api/products/search")
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Search term is required"}


def test_search_with_empty_term():
    r = client.get("/api/products/search", params={"q": ""})
    assert r.status_code == 400


def test_search_no_results_is_empty_list():
    r = client.get("/api/products/search", params={"q": "durian"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": []}


def test_products_by_category():
    r = client.get("/api/products/category/teas")
    assert r.status_code == 200
    data = r.json()["data"]
    assert [p["id"] for p in data] == [4, 5, 6]


def test_products_by_unknown_category_is_not_an_error():
    r = client.get("/api/products/category/nonexistent")
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": []}


def test_list_categories():
    r = client.get("/api/categories")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()["data"]] == ["powders", "teas", "snacks", "oils"]


def test_get_category_by_name():
    r = client.get("/api/categories/powders")
    assert r.status_code == 200
    assert r.json()["data"] == {
        "id": 1,
        "name": "powders",
        "displayName": "Superfood Powders",
        "description": "Finely milled roots, leaves and fruits to blend into smoothies, juices and baking.",
    }


def test_get_category_not_found():
    r = client.get("/api/categories/Powders")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Category not found"}


def test_unknown_route():
    for path in ("/api/nope", "/nope", "/api/products/1/extra"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.json() == {"success": False, "error": "Route not found"}


def test_method_not_allowed_uses_envelope():
    r = client.post("/api/products")
    assert r.status_code == 405
    assert r.json()["success"] is False


class _BrokenProducts:
    def get_all(self):
        raise RuntimeError("disk on fire")

    def get_by_id(self, product_id):
        raise RuntimeError("disk on fire")


def test_internal_fault_maps_to_generic_500(store):
    broken_app = create_app(Settings(), store=store)
    broken_app.state.products = _BrokenProducts()
    broken = TestClient(broken_app)

    r = broken.get("/api/products")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Failed to fetch products"}
    assert "disk on fire" not in r.text

    # invalid input is still reported before the query runs
    assert broken.get("/api/products/abc").status_code == 400
    assert broken.get("/api/products/5").json() == {"success": False, "error": "Failed to fetch product"}


def test_unhandled_exception_reaches_generic_handler(store):
    app2 = create_app(Settings(), store=store)

    @app2.get("/boom")
    def boom():
        raise ValueError("secret detail")

    r = TestClient(app2, raise_server_exceptions=False).get("/boom")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error"}


def test_custom_prefix(store):
    c = TestClient(create_app(Settings(api_prefix="v1/"), store=store))
    assert c.get("/v1/products/2").json()["data"]["name"] == "Camu Camu Powder"
    assert c.get("/api/products/2").status_code == 404


def test_invalid_boolean_param_uses_envelope():
    r = client.get("/api/products", params={"available_only": "maybe"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Invalid parameter: available_only"}
    assert "maybe" not in r.text


def test_python_only_integer_literals_are_invalid_ids():
    for raw in ("1_0", "١", "0x1", "1.0", "+"):
        r = client.get(f"/api/products/{raw}")
        assert r.status_code == 400, raw
        assert r.json() == {"success": False, "error": "Invalid product ID"}


def test_signed_and_padded_ids_parse():
    assert client.get("/api/products/+7").json()["data"]["name"] == "Brazil Nuts"
    assert client.get("/api/products/007").json()["data"]["id"] == 7
    assert client.get("/api/products/-1").status_code == 404


def test_oversized_integer_id_is_not_found():
    r = client.get("/api/products/" + "9" * 5000)
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Product not found"}


def test_importing_main_builds_no_app():
    assert not hasattr(main, "app")


def test_build_app_reads_environment(monkeypatch, write_catalog):
    data_dir = write_catalog(
        [{"id": 5, "name": "Solo", "price": 2, "category": "x", "description": "", "image": "", "inStock": False}],
        [{"id": 1, "name": "x", "displayName": "X", "description": ""}],
    )
    monkeypatch.setenv("CATALOG_DATA_DIR", str(data_dir))
    monkeypatch.setenv("API_PREFIX", "/v2")
    c = TestClient(build_app())
    assert [p["name"] for p in c.get("/v2/products").json()["data"]] == ["Solo"]
