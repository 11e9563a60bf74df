"""Tests for the recurring OTA sync scheduler."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from services.gateway.models import BookingRequest
from services.gateway.scheduler import JOB_ID, SyncScheduler
from services.gateway.service import Service
from services.gateway.sync import OTASyncService


@pytest.mark.asyncio
async def test_start_registers_hourly_job():
    scheduler = SyncScheduler(MagicMock())
    scheduler.start()
    try:
        job = scheduler.scheduler.get_job(JOB_ID)
        assert job is not None
        assert "minute='0'" in str(job.trigger)
        assert job.max_instances == 1
        assert job.coalesce is True

        next_run = scheduler.next_run_time()
        assert next_run.minute == 0
        assert next_run.second == 0
    finally:
        scheduler.shutdown()


@pytest.mark.asyncio
async def test_custom_cron_expression():
    scheduler = SyncScheduler(MagicMock(), cron_expression="*/15 * * * *")
    scheduler.start()
    try:
        assert scheduler.next_run_time().minute % 15 == 0
    finally:
        scheduler.shutdown()


def test_next_run_time_without_job():
    assert SyncScheduler(MagicMock()).next_run_time() is None


@pytest.mark.asyncio
async def test_tick_runs_scheduled_sync():
    sync_service = MagicMock()
    sync_service.sync = AsyncMock()

    await SyncScheduler(sync_service).run_tick()

    sync_service.sync.assert_awaited_once_with(trigger="schedule")


@pytest.mark.asyncio
async def test_failing_ota_push_does_not_reach_scheduler(hotel_client, ota_client, fake_ota):
    fake_ota.status = 500
    sync_service = OTASyncService(hotel_client, ota_client)

    # Must not raise
    await SyncScheduler(sync_service).run_tick()

    assert sync_service.last_result.ok is False
    assert sync_service.last_result.trigger == "schedule"


@pytest.mark.asyncio
async def test_failing_scheduled_sync_does_not_affect_inflight_booking(
    hotel_client, ota_client, fake_ota, upstream, booking_data
):
    fake_ota.status = 500
    sync_service = OTASyncService(hotel_client, ota_client)
    service = Service(hotel_client, sync_service)
    scheduler = SyncScheduler(sync_service)

    _, reservation = await asyncio.gather(
        scheduler.run_tick(),
        service.create_booking(BookingRequest(**booking_data())),
    )

    assert reservation.id == "res-1"
    assert upstream.count("POST", "/reservations") == 1
