from datetime import date

from app.schemas.room import CamelModel


class PropertyOut(CamelModel):
    id: int
    name: str
    location: str = ""


class DayOccupancyOut(CamelModel):
    date: date
    available_rooms: int
    total_rooms: int
    occupancy_rate: int


class RoomOccupancyOut(CamelModel):
    room_id: int
    room_number: str
    room_type: str
    occupied_dates: list[date]


class OccupancyOut(CamelModel):
    property_id: int
    year: int
    month: int
    days: list[DayOccupancyOut]
    rooms: list[RoomOccupancyOut]
