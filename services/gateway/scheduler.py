"""Recurring OTA sync on a fixed wall-clock schedule (default: top of every hour)."""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from services.gateway.sync import OTASyncService

JOB_ID = "ota_sync"


class SyncScheduler:
    """Owns the APScheduler job that triggers OTASyncService.sync().

    Scheduled ticks never overlap: a tick that fires while the previous one
    is still running is skipped (max_instances=1), and missed ticks are
    collapsed into one (coalesce=True).
    """

    def __init__(
        self,
        sync_service: OTASyncService,
        cron_expression: str = "0 * * * *",
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        self.sync_service = sync_service
        self.cron_expression = cron_expression
        self._scheduler = scheduler or AsyncIOScheduler()

    @property
    def scheduler(self) -> AsyncIOScheduler:
        return self._scheduler

    async def run_tick(self) -> None:
        """Job body. sync() swallows its own errors, nothing reaches APScheduler."""
        await self.sync_service.sync(trigger="schedule")

    def start(self) -> None:
        """Register the job and start the scheduler. Must run inside the event loop."""
        self._scheduler.add_job(
            self.run_tick,
            trigger=CronTrigger.from_crontab(self.cron_expression),
            id=JOB_ID,
            name="OTA inventory sync",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info(f"OTA sync scheduled ({self.cron_expression})")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("OTA sync scheduler shut down")

    def next_run_time(self):
        job = self._scheduler.get_job(JOB_ID)
        if job is None:
            return None
        return getattr(job, "next_run_time", None)
