"""Hotel API shared library.

Client, models and helpers for the upstream hotel-data API.
"""

from lib.hotel_api.api_client import HotelApiClient
from lib.hotel_api.errors import HotelApiError, RoomNotFound, UpstreamUnavailable
from lib.hotel_api.models import AvailabilityEntry, Hotel, Reservation, Room
from lib.hotel_api.utils import expand_date_range, parse_day

__all__ = [
    # Client
    "HotelApiClient",
    # Errors
    "HotelApiError",
    "RoomNotFound",
    "UpstreamUnavailable",
    # Models
    "AvailabilityEntry",
    "Hotel",
    "Reservation",
    "Room",
    # Utils
    "expand_date_range",
    "parse_day",
]
