import pytest
from fastapi.testclient import TestClient
from rich.console import Console

import cli
from rainforest.config import Settings
from rainforest.main import create_app
from sdk.rainforest_client import CatalogClient


@pytest.fixture
def console(monkeypatch) -> Console:
    rec = Console(record=True, width=140)
    monkeypatch.setattr(cli, "console", rec)
    return rec


@pytest.fixture
def sdk() -> CatalogClient:
    return CatalogClient(base_url="http://testserver/api", session=TestClient(create_app(Settings())))


def _run(argv, sdk):
    return cli.run(cli.build_parser().parse_args(argv), sdk)


def test_search_renders_matching_products(console, sdk):
    assert _run(["search", "--q", "maca"], sdk) == 0
    out = console.export_text()
    assert "Maca Root Powder" in out
    assert "Cacao Maca Energy Bar" in out
    assert "Brazil Nuts" not in out


def test_list_categories(console, sdk):
    assert _run(["list-categories"], sdk) == 0
    out = console.export_text()
    for name in ("powders", "teas", "snacks", "oils"):
        assert name in out


def test_get_product_not_found_exits_nonzero(console, sdk):
    assert _run(["get-product", "--product-id", "424242"], sdk) == 1
    assert "Product not found" in console.export_text()


def test_empty_category_message(console, sdk):
    assert _run(["category", "--name", "nothing"], sdk) == 0
    assert "No products found" in console.export_text()


def test_try_api_reports_errors(console, sdk):
    assert cli.try_api(sdk.get_category, "ghost") is None
    assert cli.status_message == "Error: Category not found"
