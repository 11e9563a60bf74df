"""Hotel API Pydantic models.

Field names on the wire follow the upstream API (camelCase / Spanish booking
fields). Unknown fields are kept so the gateway proxies them untouched.

Hotel and room fields are lenient: a room missing its price or type, or
carrying a day that is not an ISO date, is still proxied as upstream sent it
instead of failing the whole aggregate.
"""

import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from lib.hotel_api.utils import parse_day

Number = Union[int, float]


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict:
        """Dump with upstream field names for JSON responses."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class AvailabilityEntry(_WireModel):
    """One calendar day's open/closed status for a room."""
    date: Union[datetime.date, str, None] = Field(default=None, union_mode="left_to_right")
    available: Optional[bool] = None

    @property
    def day(self) -> Optional[datetime.date]:
        """Calendar day of the entry, None when upstream sent no usable date."""
        return parse_day(self.date)


class Room(_WireModel):
    id: Optional[Union[str, int]] = None
    room_type: Optional[str] = Field(default=None, alias="roomType")
    price: Optional[Number] = None
    availability: List[AvailabilityEntry] = Field(default_factory=list)

    def is_available_between(self, start: datetime.date, end: datetime.date) -> bool:
        """True if no entry inside [start, end] is marked unavailable.

        Entries outside the range, or without a usable date, are ignored, so
        a room with no entries for the range counts as available.
        """
        for entry in self.availability:
            day = entry.day
            if day is not None and start <= day <= end and not entry.available:
                return False
        return True

    def unavailable_dates(self) -> set:
        days = set()
        for entry in self.availability:
            if not entry.available and entry.day is not None:
                days.add(entry.day)
        return days


class Hotel(_WireModel):
    id: Optional[Union[str, int]] = None
    rating: Optional[Number] = None
    rooms: List[Room] = Field(default_factory=list)

    def find_room(self, room_id: str) -> Optional[Room]:
        """Find a room by id, comparing ids as strings."""
        for room in self.rooms:
            if room.id is not None and str(room.id) == str(room_id):
                return room
        return None

    def find_room_by_type(self, room_type: str) -> Optional[Room]:
        """First room whose roomType matches, in upstream order."""
        for room in self.rooms:
            if room.room_type == room_type:
                return room
        return None


class Reservation(_WireModel):
    """Reservation as stored upstream. Identity is assigned by the upstream API."""
    id: Optional[Union[str, int]] = None
    user_id: Optional[Union[str, int]] = Field(default=None, alias="usuarioId")
    property_id: Optional[Union[str, int]] = Field(default=None, alias="propiedadId")
    start_date: Optional[str] = Field(default=None, alias="fechaInicio")
    end_date: Optional[str] = Field(default=None, alias="fechaFin")
    room_type: Optional[str] = Field(default=None, alias="roomType")
