"""Gateway request models."""

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


BOOKING_FIELDS = ("usuarioId", "propiedadId", "fechaInicio", "fechaFin", "roomType")


def _is_blank(value) -> bool:
    if isinstance(value, str):
        return value.strip() == ""
    return not value


class BookingRequest(BaseModel):
    """Booking as submitted by a client.

    Every field is optional at parse time; presence is checked by the
    service so that a missing field is a 400, not a framework 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[Union[str, int]] = Field(default=None, alias="usuarioId")
    property_id: Optional[Union[str, int]] = Field(default=None, alias="propiedadId")
    start_date: Optional[str] = Field(default=None, alias="fechaInicio")
    end_date: Optional[str] = Field(default=None, alias="fechaFin")
    room_type: Optional[str] = Field(default=None, alias="roomType")

    def missing_fields(self) -> List[str]:
        """Wire names of required fields that are absent, blank or falsy (0, false)."""
        data = self.model_dump(by_alias=True)
        return [name for name in BOOKING_FIELDS if _is_blank(data.get(name))]

    def to_reservation_data(self) -> dict:
        """Fields forwarded to the upstream reservation create, unchanged."""
        return self.model_dump(by_alias=True)


class SearchCriteria(BaseModel):
    """Room search filters. Anything left as None is not applied."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    room_type: Optional[str] = None
    location: Optional[str] = None
    max_price: Optional[float] = None
    min_rating: Optional[float] = None
