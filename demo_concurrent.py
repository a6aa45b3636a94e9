import asyncio

import httpx

from sdk.pycatalog import CatalogClient

READERS = 20


async def read_during_reseed(client: CatalogClient, ac: httpx.AsyncClient, name: str):
    products = await client.list_products_async(client=ac)
    if not products:
        print(f"⚠️  {name} saw an empty catalog")
    return len(products)


async def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085")
    print(f"\n📦 Catalog before: {c.health()['products']} products")

    async with httpx.AsyncClient(timeout=c.timeout) as ac:
        reseed = ac.post(f"{c.base_url}/seed")
        readers = [read_during_reseed(c, ac, f"reader-{i}") for i in range(READERS)]
        print("\n⚡ Reading while reseeding...")
        results = await asyncio.gather(reseed, *readers)

    seeded, counts = results[0], results[1:]
    print("🔄 Reseed:", seeded.json())
    print("👀 Reader counts:", counts)
    empty = sum(1 for n in counts if n == 0)
    print(f"{'❌' if empty else '✅'} {empty} reader(s) observed an empty catalog")


if __name__ == "__main__":
    asyncio.run(main())
