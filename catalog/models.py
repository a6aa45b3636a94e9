# catalog/models.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Descriptor(BaseModel):
    """Field set of a product that has not been stored yet (no id)."""

    model_config = ConfigDict(frozen=True)

    img: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: StrictInt
    quantity: StrictInt = Field(ge=0)
    category: str = Field(min_length=1)


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    img: str
    name: str
    description: str
    price: int
    quantity: int
    category: str
