# grislo/schemas/schedule.py

from datetime import date
from typing import Optional
from pydantic import AliasGenerator, BaseModel, field_validator
from pydantic.alias_generators import to_camel

from .service_config import TIME_RE


class OperatingDay(BaseModel):
    date: date
    # None → fall back to ServiceConfig.time_slots
    time_slots: Optional[list[str]] = None
    available: bool = True

    model_config = {
        "from_attributes": True,
        "alias_generator": AliasGenerator(validation_alias=to_camel),
        "populate_by_name": True,
        "extra": "ignore",
    }


class OperatingDayUpsert(BaseModel):
    time_slots: list[str]

    @field_validator("time_slots")
    @classmethod
    def validate_time_slots(cls, v: list[str]) -> list[str]:
        for slot in v:
            if not TIME_RE.match(slot):
                raise ValueError("Time must be in HH:MM format")
        return v
