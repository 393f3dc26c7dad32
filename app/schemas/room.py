from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AvailableRoomOut(CamelModel):
    id: int
    room_number: str
    room_type: str
    price_per_night: Decimal


class RoomOut(AvailableRoomOut):
    property_id: int
