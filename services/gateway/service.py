"""Gateway service: hotel reads, room search and the booking write-path.

Every operation re-fetches the hotel aggregate from upstream; nothing is
cached between requests.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from loguru import logger

from lib.hotel_api import (
    AvailabilityEntry,
    Hotel,
    HotelApiClient,
    Reservation,
    Room,
    RoomNotFound,
    expand_date_range,
    parse_day,
)
from services.gateway.errors import InvalidBookingDates, MissingFields, RoomTypeNotFound
from services.gateway.models import BookingRequest, SearchCriteria
from services.gateway.sync import OTASyncService


class IService(ABC):
    """Gateway Service - Proxy hotel data and take bookings."""

    @abstractmethod
    async def get_hotel(self) -> Hotel:
        """Full hotel aggregate from upstream."""
        pass

    @abstractmethod
    async def get_room_availability(self, room_id: str) -> List[AvailabilityEntry]:
        """Availability entries for one room.

        Raises:
            RoomNotFound: no room with that id
        """
        pass

    @abstractmethod
    async def search_rooms(self, criteria: SearchCriteria) -> List[Room]:
        """Rooms matching the criteria, in upstream order."""
        pass

    @abstractmethod
    async def create_booking(self, request: BookingRequest) -> Reservation:
        """Mark the stay unavailable, create the reservation, then sync the OTA.

        Raises:
            MissingFields, InvalidBookingDates: before any upstream call
            RoomTypeNotFound: no room of the requested type
        """
        pass

    @abstractmethod
    async def list_reservations(self, user_id: Optional[str] = None) -> List[Reservation]:
        """All reservations, or only those of one user."""
        pass


def filter_rooms(hotel: Hotel, criteria: SearchCriteria) -> List[Room]:
    """Apply search criteria to a hotel's rooms.

    The availability check only looks at entries inside
    [start_date, end_date] and is skipped unless both bounds are given.
    Rating is hotel-level, so it keeps or drops every room at once. A room or
    hotel without a price or rating fails the corresponding bound.
    `location` is not applied: rooms carry no location.
    """
    if criteria.min_rating is not None:
        if hotel.rating is None or hotel.rating < criteria.min_rating:
            return []

    rooms = []
    for room in hotel.rooms:
        if criteria.start_date is not None and criteria.end_date is not None:
            if not room.is_available_between(criteria.start_date, criteria.end_date):
                continue
        if criteria.room_type and room.room_type != criteria.room_type:
            continue
        if criteria.max_price is not None and (room.price is None or room.price > criteria.max_price):
            continue
        rooms.append(room)
    return rooms


class Service(IService):
    def __init__(self, hotel_client: HotelApiClient, sync_service: OTASyncService):
        self.hotel_client = hotel_client
        self.sync_service = sync_service

    async def get_hotel(self) -> Hotel:
        return await self.hotel_client.fetch_hotel()

    async def get_room_availability(self, room_id: str) -> List[AvailabilityEntry]:
        hotel = await self.hotel_client.fetch_hotel()
        room = hotel.find_room(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room.availability

    async def search_rooms(self, criteria: SearchCriteria) -> List[Room]:
        hotel = await self.hotel_client.fetch_hotel()
        rooms = filter_rooms(hotel, criteria)
        logger.debug(f"Search matched {len(rooms)}/{len(hotel.rooms)} rooms")
        return rooms

    async def create_booking(self, request: BookingRequest) -> Reservation:
        missing = request.missing_fields()
        if missing:
            raise MissingFields(missing)

        start = parse_day(request.start_date)
        end = parse_day(request.end_date)
        if start is None or end is None:
            raise InvalidBookingDates(request.start_date, request.end_date)

        hotel = await self.hotel_client.fetch_hotel()
        room = hotel.find_room_by_type(request.room_type)
        if room is None:
            raise RoomTypeNotFound(request.room_type)

        days = expand_date_range(start, end)
        await self.hotel_client.set_room_availability(room.id, days, False)

        try:
            reservation = await self.hotel_client.create_reservation(request.to_reservation_data())
        except Exception:
            await self._release_hold(room, days)
            raise

        logger.info(
            f"Booked {request.room_type} (room {room.id}) for user {request.user_id}: "
            f"{request.start_date} -> {request.end_date} ({len(days)} days)"
        )

        await self.sync_service.sync(trigger="booking")
        return reservation

    async def _release_hold(self, room: Room, days: List[str]) -> None:
        """Re-open days marked unavailable by a booking whose reservation create failed.

        Days the hotel snapshot already showed as unavailable stay closed.
        """
        already_closed = room.unavailable_dates()
        to_reopen = [day for day in days if parse_day(day) not in already_closed]
        if not to_reopen:
            return

        logger.warning(f"Reservation create failed, re-opening {len(to_reopen)} days on room {room.id}")
        try:
            await self.hotel_client.set_room_availability(room.id, to_reopen, True)
        except Exception as e:
            logger.error(f"Could not re-open days on room {room.id}, hold left in place: {e}")

    async def list_reservations(self, user_id: Optional[str] = None) -> List[Reservation]:
        return await self.hotel_client.list_reservations(user_id)
