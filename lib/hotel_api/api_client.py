"""Hotel API Client.

Async client for the hotel's own backend (system of record for rooms,
availability and reservations):

    GET  /hotel
    PUT  /room/{id}/availability
    POST /reservations
    GET  /reservations[?usuarioId=]

No retries and no idempotency keys: a retried write can be applied twice.

Usage:
    async with HotelApiClient(base_url) as client:
        hotel = await client.fetch_hotel()
"""

from typing import Any, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from lib.hotel_api.errors import RoomNotFound, UpstreamUnavailable
from lib.hotel_api.models import Hotel, Reservation


DEFAULT_TIMEOUT = 30.0


class HotelApiClient:
    """Thin wrapper over httpx for the upstream hotel-data API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        """Initialize HTTP client."""
        if self._http_client is None:
            kwargs = {"base_url": self.base_url, "timeout": self.timeout}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._http_client = httpx.AsyncClient(**kwargs)

    async def close(self):
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HotelApiClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> httpx.Response:
        """Send a request, turning transport errors and non-2xx into UpstreamUnavailable."""
        await self.initialize()
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Upstream timeout: {method} {url}: {e}")
            raise UpstreamUnavailable(f"Timeout calling {method} {path}", method=method, url=url) from e
        except httpx.HTTPError as e:
            logger.error(f"Upstream request failed: {method} {url}: {e}")
            raise UpstreamUnavailable(f"Error calling {method} {path}: {e}", method=method, url=url) from e

        if response.is_success:
            return response

        logger.error(
            f"Upstream returned {response.status_code} for {method} {url}: {response.text[:200]}"
        )
        raise UpstreamUnavailable(
            f"Upstream returned {response.status_code} for {method} {path}",
            method=method,
            url=url,
            status_code=response.status_code,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            url = str(response.request.url)
            logger.error(f"Upstream sent invalid JSON for {response.request.method} {url}")
            raise UpstreamUnavailable(
                "Invalid JSON from upstream",
                method=response.request.method,
                url=url,
                status_code=response.status_code,
            ) from e

    async def fetch_hotel(self) -> Hotel:
        """Fetch the full hotel aggregate (hotel, rooms, availability)."""
        response = await self._request("GET", "/hotel")
        try:
            return Hotel.model_validate(self._json(response))
        except ValidationError as e:
            logger.error(f"Unexpected hotel payload from upstream: {e}")
            raise UpstreamUnavailable("Unexpected hotel payload from upstream", method="GET") from e

    async def set_room_availability(self, room_id, dates: List[str], available: bool) -> Any:
        """Mark each of `dates` as available/unavailable for a room.

        Raises:
            RoomNotFound: upstream answered 404 for the room
            UpstreamUnavailable: any other failure
        """
        try:
            response = await self._request(
                "PUT",
                f"/room/{room_id}/availability",
                json={"dates": list(dates), "isAvailable": available},
            )
        except UpstreamUnavailable as e:
            if e.status_code == 404:
                raise RoomNotFound(room_id) from e
            raise

        logger.debug(f"Room {room_id}: {len(dates)} days set available={available}")
        if not response.content:
            return None
        return self._json(response)

    async def create_reservation(self, data: dict) -> Reservation:
        """Persist a reservation upstream. `data` uses the wire field names."""
        response = await self._request("POST", "/reservations", json=data)
        body = self._json(response)
        try:
            return Reservation.model_validate(body)
        except ValidationError as e:
            logger.error(f"Unexpected reservation payload from upstream: {e}")
            raise UpstreamUnavailable("Unexpected reservation payload from upstream", method="POST") from e

    async def list_reservations(self, user_id: Optional[str] = None) -> List[Reservation]:
        """List reservations, optionally filtered server-side by user."""
        params = {"usuarioId": user_id} if user_id is not None else None
        response = await self._request("GET", "/reservations", params=params)
        body = self._json(response)
        try:
            return [Reservation.model_validate(item) for item in body]
        except (TypeError, ValidationError) as e:
            logger.error(f"Unexpected reservations payload from upstream: {e}")
            raise UpstreamUnavailable("Unexpected reservations payload from upstream", method="GET") from e
