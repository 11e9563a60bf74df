"""API routes: hotel data, availability, search and reservations.

Client errors come back as 4xx with a short message; anything that failed
upstream is a 500 with a generic message. Error bodies are {"error": "..."}.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from lib.hotel_api import HotelApiError, RoomNotFound
from services.gateway import (
    BookingRequest,
    IService,
    InvalidBookingDates,
    MissingFields,
    OTASyncService,
    RoomTypeNotFound,
    SearchCriteria,
)

router = APIRouter()

BOOKING_CREATED_MESSAGE = "Tu reserva ha sido creada!"


def get_service(request: Request) -> IService:
    return request.app.state.service


def get_sync_service(request: Request) -> Optional[OTASyncService]:
    return getattr(request.app.state, "sync_service", None)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# Hotel data
# ---------------------------------------------------------------------------


@router.get("/api/hotel-data")
async def hotel_data(service: IService = Depends(get_service)):
    try:
        hotel = await service.get_hotel()
    except HotelApiError as e:
        logger.error(f"Error fetching hotel data: {e}")
        return _error(500, "Error al obtener datos del hotel")
    return hotel.to_wire()


@router.get("/propiedades/{room_id}/disponibilidad")
async def room_availability(room_id: str, service: IService = Depends(get_service)):
    try:
        availability = await service.get_room_availability(room_id)
    except RoomNotFound:
        return _error(404, "Habitación no encontrada")
    except HotelApiError as e:
        logger.error(f"Error al obtener disponibilidad de la habitación {room_id}: {e}")
        return _error(500, "Error al obtener disponibilidad de la habitación")
    return [entry.to_wire() for entry in availability]


@router.get("/buscar")
async def search(
    fecha_inicio: Optional[date] = Query(None, alias="fechaInicio"),
    fecha_fin: Optional[date] = Query(None, alias="fechaFin"),
    tipo: Optional[str] = Query(None),
    ubicacion: Optional[str] = Query(None),
    max_precio: Optional[float] = Query(None, alias="maxPrecio"),
    min_calificacion: Optional[float] = Query(None, alias="minCalificacion"),
    service: IService = Depends(get_service),
):
    criteria = SearchCriteria(
        start_date=fecha_inicio,
        end_date=fecha_fin,
        room_type=tipo or None,
        location=ubicacion or None,
        max_price=max_precio,
        min_rating=min_calificacion,
    )
    try:
        rooms = await service.search_rooms(criteria)
    except HotelApiError as e:
        logger.error(f"Error al buscar propiedades: {e}")
        return _error(500, "Error al buscar propiedades")
    return [room.to_wire() for room in rooms]


# ---------------------------------------------------------------------------
# Reservations
# ---------------------------------------------------------------------------


@router.post("/reservas", status_code=201)
async def create_reservation(
    body: Optional[BookingRequest] = None,
    service: IService = Depends(get_service),
):
    try:
        reservation = await service.create_booking(body or BookingRequest())
    except MissingFields as e:
        logger.info(f"Rejected booking: {e}")
        return _error(400, "Faltan datos de reserva obligatorios")
    except InvalidBookingDates as e:
        logger.info(f"Rejected booking: {e}")
        return _error(400, "Fechas de reserva inválidas")
    except RoomTypeNotFound as e:
        logger.info(f"Rejected booking: {e}")
        return _error(404, "Tipo de habitación no encontrada")
    except HotelApiError as e:
        logger.error(f"Error al crear la reserva: {e}")
        return _error(500, "Error al crear la reserva")

    return {"message": BOOKING_CREATED_MESSAGE, "reservation": reservation.to_wire()}


@router.get("/reservas")
async def list_reservations(service: IService = Depends(get_service)):
    try:
        reservations = await service.list_reservations()
    except HotelApiError as e:
        logger.error(f"Error al obtener reservas: {e}")
        return _error(500, "Error al obtener reservas")
    return [r.to_wire() for r in reservations]


@router.get("/usuarios/{usuario_id}/reservas")
async def list_user_reservations(usuario_id: str, service: IService = Depends(get_service)):
    try:
        reservations = await service.list_reservations(usuario_id)
    except HotelApiError as e:
        logger.error(f"Error al obtener reservas del usuario {usuario_id}: {e}")
        return _error(500, "Error al obtener reservas de usuario")
    return [r.to_wire() for r in reservations]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
async def health(sync_service: Optional[OTASyncService] = Depends(get_sync_service)):
    last_sync = None
    if sync_service and sync_service.last_result:
        last_sync = sync_service.last_result.to_dict()
    return {"status": "ok", "lastOtaSync": last_sync}
