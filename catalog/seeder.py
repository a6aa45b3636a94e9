# catalog/seeder.py
import logging
from typing import List, Optional, Sequence

from faker import Faker
from faker.providers import BaseProvider

from .database import CatalogStore
from .exceptions import CatalogError, StoreFailure
from .models import Descriptor, Product

logger = logging.getLogger(__name__)

SEED_COUNT = 50
CATEGORIES = ("electronics", "clothing", "books", "home", "sports")
IMAGE_POOL = (
    "https://png.pngtree.com/png-clipart/20190516/original/pngtree-cleaning-products-on-transparent-background-png-image_4017269.jpg",
    "https://png.pngtree.com/png-clipart/20250429/original/pngtree-3d-melting-cheese-pizza-slice-on-png-image_20899183.png",
    "https://png.pngtree.com/png-clipart/20250819/original/pngtree-black-unisex-t-shirt-front-and-back-mockup-png-image_22104229.png",
)

MIN_PRICE, MAX_PRICE = 5, 500
MIN_STOCK, MAX_STOCK = 10, 100


class CommerceProvider(BaseProvider):
    """Product names and blurbs for demo data."""

    adjectives = (
        "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
        "Fantastic", "Practical", "Sleek", "Awesome", "Generic", "Handcrafted",
        "Handmade", "Licensed", "Refined", "Unbranded", "Tasty", "Modern",
    )
    materials = (
        "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
        "Metal", "Soft", "Fresh", "Frozen", "Bronze", "Silk", "Leather",
    )
    products = (
        "Chair", "Car", "Computer", "Keyboard", "Mouse", "Bike", "Ball", "Gloves",
        "Pants", "Shirt", "Table", "Shoes", "Hat", "Towels", "Soap", "Tuna",
        "Chicken", "Fish", "Cheese", "Bacon", "Pizza", "Salad", "Sausages", "Chips",
    )
    descriptions = (
        "The slim & simple design of the {name} makes it a great fit for everyday use.",
        "Experience the {adjective} quality of our {name}, built to last season after season.",
        "Our {material}-inspired {product} brings comfort and style to your home.",
        "The {name} combines {material} craftsmanship with a {adjective} finish.",
        "Designed with care, the {product} is the {adjective} choice for any occasion.",
        "New {name} with a {material} build, available now in limited quantities.",
    )

    def product_adjective(self) -> str:
        return self.random_element(self.adjectives)

    def product_material(self) -> str:
        return self.random_element(self.materials)

    def product_noun(self) -> str:
        return self.random_element(self.products)

    def product_name(self) -> str:
        return f"{self.product_adjective()} {self.product_material()} {self.product_noun()}"

    def product_description(self) -> str:
        template = self.random_element(self.descriptions)
        return template.format(
            name=self.product_name(),
            adjective=self.product_adjective().lower(),
            material=self.product_material().lower(),
            product=self.product_noun().lower(),
        )


def make_faker(seed: Optional[int] = None) -> Faker:
    fake = Faker()
    fake.add_provider(CommerceProvider)
    if seed is not None:
        fake.seed_instance(seed)
    return fake


def generate_descriptors(
    count: int = SEED_COUNT,
    categories: Sequence[str] = CATEGORIES,
    images: Sequence[str] = IMAGE_POOL,
    fake: Optional[Faker] = None,
) -> List[Descriptor]:
    """Build `count` random product descriptors.

    Roughly half come out of stock (quantity 0); the rest carry between
    MIN_STOCK and MAX_STOCK units. Nothing here touches a store, so the same
    seeded Faker always yields the same batch.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if count and (not categories or not images):
        raise ValueError("categories and images must not be empty")
    fake = fake or make_faker()

    out = []
    for _ in range(count):
        in_stock = fake.boolean(chance_of_getting_true=50)
        out.append(Descriptor(
            img=fake.random_element(images),
            name=fake.product_name(),
            description=fake.product_description(),
            quantity=fake.random_int(MIN_STOCK, MAX_STOCK) if in_stock else 0,
            price=fake.random_int(MIN_PRICE, MAX_PRICE),
            category=fake.random_element(categories),
        ))
    return out


async def seed_catalog(
    store: CatalogStore,
    count: int = SEED_COUNT,
    atomic: bool = True,
    seed: Optional[int] = None,
) -> List[Product]:
    """Wipe the store and fill it with a fresh random batch.

    With ``atomic`` the new batch is swapped in as one snapshot, so readers see
    either the old catalog or the new one. Without it the store is cleared
    first and readers can observe an empty catalog until the insert lands.
    """
    descriptors = generate_descriptors(count, fake=make_faker(seed))
    try:
        if atomic:
            products = await store.replace_all(descriptors)
        else:
            removed = await store.delete_all()
            logger.info("Cleared %d product(s) before reseeding", removed)
            products = await store.bulk_insert(descriptors)
    except CatalogError:
        raise
    except Exception as e:
        logger.exception("Seeding failed")
        raise StoreFailure("failed to seed catalog") from e

    logger.info("Seeded catalog with %d product(s)", len(products))
    return products
