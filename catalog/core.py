from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import Descriptor, Product


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    img: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: StrictInt
    initial_quantity: StrictInt = Field(alias="initialQuantity", ge=0)
    category: str = Field(min_length=1)

    def to_descriptor(self) -> Descriptor:
        return Descriptor(
            img=self.img,
            name=self.name,
            description=self.description,
            price=self.price,
            quantity=self.initial_quantity,
            category=self.category,
        )


def _validation_details(exc: PydanticValidationError) -> Mapping[str, Any]:
    return {
        "errors": [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
    }


def parse_product_in(fields: Union[ProductIn, Mapping[str, Any]]) -> ProductIn:
    if isinstance(fields, ProductIn):
        return fields
    try:
        return ProductIn.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError("invalid product payload", details=_validation_details(e)) from e


def parse_descriptor(record: Union[Descriptor, Mapping[str, Any]]) -> Descriptor:
    if isinstance(record, Descriptor):
        return record
    try:
        return Descriptor.model_validate(record)
    except PydanticValidationError as e:
        raise ValidationError("invalid product descriptor", details=_validation_details(e)) from e


def _make_product(product_id: str, d: Descriptor) -> Product:
    return Product(
        id=product_id,
        img=d.img,
        name=d.name,
        description=d.description,
        price=d.price,
        quantity=d.quantity,
        category=d.category.lower(),
    )
