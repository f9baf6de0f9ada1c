#!/usr/bin/env python
from sdk.rainforest_client import CatalogClient, CatalogAPIError


def main():
    c = CatalogClient(base_url="http://127.0.0.1:5000/api")

    print("Health check...")
    print(c.health())

    print("\nListing categories...")
    for cat in c.list_categories():
        print(f"  {cat['name']:<10} {cat['displayName']}")

    print("\nListing products...")
    print(c.list_products())

    print("\nIn-stock only...")
    print([p["name"] for p in c.list_products(available_only=True)])

    print("\nFeatured products...")
    print([p["name"] for p in c.featured_products()])

    print("\nSearching for 'maca'...")
    print([p["name"] for p in c.search_products("maca")])

    print("\nProducts in 'powders'...")
    print([p["name"] for p in c.products_by_category("powders")])

    print("\nProduct #1...")
    print(c.get_product(1))

    print("\nCategory 'teas'...")
    print(c.get_category("teas"))

    # error envelopes surface as CatalogAPIError
    for bad in ("abc", 999999):
        try:
            c.get_product(bad)
        except CatalogAPIError as e:
            print(f"\nget_product({bad!r}) -> {e}")


if __name__ == "__main__":
    main()
