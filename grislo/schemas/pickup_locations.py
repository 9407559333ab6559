# grislo/schemas/pickup_locations.py

from pydantic import AliasGenerator, BaseModel
from pydantic.alias_generators import to_camel


class PickupLocationCreate(BaseModel):
    name: str
    address: str = ""


class PickupLocation(BaseModel):
    id: str
    name: str
    address: str = ""
    sort_order: int = 0

    model_config = {
        "from_attributes": True,
        "alias_generator": AliasGenerator(validation_alias=to_camel),
        "populate_by_name": True,
        "extra": "ignore",
    }
