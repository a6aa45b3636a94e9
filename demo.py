#!/usr/bin/env python
from sdk.pycatalog import CatalogClient


def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")

    # -----------------------------
    # Health
    # -----------------------------
    print("Checking service...")
    print(c.health())

    # -----------------------------
    # Create a product
    # -----------------------------
    print("\nCreating a pen...")
    pen = c.create_product("https://example.com/pen.png", "Pen", "A pen", 10, 20, "Office")
    print(pen)

    # -----------------------------
    # Category filter is case-insensitive
    # -----------------------------
    print("\nListing 'OFFICE'...")
    print(c.list_products("OFFICE"))

    print("\nListing 'books'...")
    books = c.list_products("books")
    print(f"{len(books)} book(s)")

    # -----------------------------
    # Lookup by id
    # -----------------------------
    print("\nFetching the pen by id...")
    print(c.get_product(pen["id"]))
    print("Fetching a missing id:", c.get_product("nonexistent"))

    # -----------------------------
    # Reseed
    # -----------------------------
    print("\nReseeding...")
    print(c.reseed())
    print("Pen after reseed:", c.get_product(pen["id"]))


if __name__ == "__main__":
    main()
