"""OTA inventory sync.

Idle -> Fetching -> Transforming -> Pushing -> Idle

Pulls the full hotel from upstream, projects each room to
{roomType, price, availability} and pushes {hotelId, rooms} to the OTA.
Every failure is logged and swallowed: OTA instability must never reach
the serving path or the scheduler.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from loguru import logger

from infra.ota import OTAClient
from lib.hotel_api import Hotel, HotelApiClient


class SyncState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    TRANSFORMING = "transforming"
    PUSHING = "pushing"


@dataclass
class SyncResult:
    """Outcome of one sync run."""

    ok: bool
    trigger: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    stage_failed: Optional[SyncState] = None
    error: Optional[str] = None
    response: Any = None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "trigger": self.trigger,
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
            "stageFailed": self.stage_failed.value if self.stage_failed else None,
            "error": self.error,
        }


OTA_ROOM_FIELDS = ("roomType", "price", "availability")


def build_ota_payload(hotel: Hotel) -> dict:
    """Project the hotel aggregate to the OTA inventory shape.

    Room fields upstream did not send are left out rather than pushed as null.
    """
    rooms = []
    for room in hotel.rooms:
        wire = room.to_wire()
        rooms.append({name: wire[name] for name in OTA_ROOM_FIELDS if name in wire})
    return {"hotelId": hotel.id, "rooms": rooms}


class OTASyncService:
    """Runs the fetch -> transform -> push cycle against the OTA partner.

    Each run tracks its own stage, so a booking sync overlapping a scheduled
    one cannot mislabel where the other failed. `state` is the stage most
    recently entered by any run, and only returns to IDLE once no run is in
    flight.
    """

    def __init__(self, hotel_client: HotelApiClient, ota_client: OTAClient):
        self.hotel_client = hotel_client
        self.ota_client = ota_client
        self.state = SyncState.IDLE
        self.last_result: Optional[SyncResult] = None
        self._in_flight = 0

    def _enter(self, stage: SyncState) -> SyncState:
        self.state = stage
        return stage

    async def sync(self, trigger: str = "manual") -> SyncResult:
        """Run one sync. Never raises."""
        result = SyncResult(ok=False, trigger=trigger, started_at=datetime.now(timezone.utc))
        logger.info(f"Running OTA sync ({trigger})")
        self._in_flight += 1
        stage = SyncState.IDLE

        try:
            stage = self._enter(SyncState.FETCHING)
            hotel = await self.hotel_client.fetch_hotel()

            stage = self._enter(SyncState.TRANSFORMING)
            payload = build_ota_payload(hotel)

            stage = self._enter(SyncState.PUSHING)
            result.response = await self.ota_client.push_inventory(payload)

            result.ok = True
            logger.info(f"Synced with OTA: {len(payload['rooms'])} rooms, response={result.response}")
        except Exception as e:
            result.stage_failed = stage
            result.error = str(e) or type(e).__name__
            logger.error(f"Error syncing with OTA during {stage.value}: {e}")
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self.state = SyncState.IDLE
            result.finished_at = datetime.now(timezone.utc)
            self.last_result = result

        return result
