"""Hotel API client errors."""

from typing import Optional


class HotelApiError(Exception):
    """Base class for upstream hotel API failures."""


class UpstreamUnavailable(HotelApiError):
    """Network failure, timeout, non-2xx status or unreadable body from upstream."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code


class RoomNotFound(HotelApiError):
    """Room id unknown, either locally in the hotel graph or to the upstream API."""

    def __init__(self, room_id):
        super().__init__(f"Room not found: {room_id}")
        self.room_id = room_id
