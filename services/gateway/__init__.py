"""Gateway service: public interface."""

from services.gateway.config import GatewayConfig, load_config, setup_logging
from services.gateway.errors import (
    GatewayError,
    InvalidBookingDates,
    MissingFields,
    RoomTypeNotFound,
)
from services.gateway.models import BookingRequest, SearchCriteria
from services.gateway.scheduler import SyncScheduler
from services.gateway.service import IService, Service, filter_rooms
from services.gateway.sync import OTASyncService, SyncResult, SyncState, build_ota_payload

__all__ = [
    "GatewayConfig",
    "load_config",
    "setup_logging",
    "GatewayError",
    "InvalidBookingDates",
    "MissingFields",
    "RoomTypeNotFound",
    "BookingRequest",
    "SearchCriteria",
    "SyncScheduler",
    "IService",
    "Service",
    "filter_rooms",
    "OTASyncService",
    "SyncResult",
    "SyncState",
    "build_ota_payload",
]
