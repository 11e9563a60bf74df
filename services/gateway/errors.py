"""Booking and search errors raised by the gateway service."""

from typing import List


class GatewayError(Exception):
    """Client-side error in a gateway operation (maps to a 4xx)."""


class MissingFields(GatewayError):
    def __init__(self, fields: List[str]):
        super().__init__(f"Missing required booking fields: {', '.join(fields)}")
        self.fields = fields


class InvalidBookingDates(GatewayError):
    def __init__(self, start, end):
        super().__init__(f"Booking dates are not ISO calendar days: {start!r}, {end!r}")
        self.start = start
        self.end = end


class RoomTypeNotFound(GatewayError):
    def __init__(self, room_type: str):
        super().__init__(f"No room with roomType={room_type!r}")
        self.room_type = room_type
