# sdk/pycatalog.py
import requests
import httpx
from typing import Optional


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    # Products
    def list_products(self, category: Optional[str] = None):
        params = {}
        if category is not None:
            params["category"] = category
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        # a missing product is an answer, not a failure
        if r.status_code == 404:
            return None
        r.raise_for_status()
        return r.json()

    def create_product(self, img: str, name: str, description: str, price: int,
                       initial_quantity: int, category: str):
        r = self.session.post(f"{self.base_url}/products", json={
            "img": img,
            "name": name,
            "description": description,
            "price": price,
            "initialQuantity": initial_quantity,
            "category": category,
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Utility
    def reseed(self):
        r = self.session.post(f"{self.base_url}/seed", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async list (used by the concurrent demo)
    async def list_products_async(self, category: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        params = {"category": category} if category is not None else {}
        if client is not None:
            r = await client.get(f"{self.base_url}/products", params=params)
            r.raise_for_status()
            return r.json()
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            r = await ac.get(f"{self.base_url}/products", params=params)
            r.raise_for_status()
            return r.json()
