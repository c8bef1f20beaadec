"""Background worker — runs the daily renewal alert check using APScheduler."""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from contract_manager.models.stats import AlertRun
from contract_manager.services.alerts import AlertService
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)

JOB_ID = "renewal_alerts"


class WorkerJob(BaseModel):
    """A scheduled job"""
    id: str
    name: str
    next_run: Optional[datetime] = None
    trigger: str = ""


class WorkerStatus(BaseModel):
    """Current worker state"""
    is_running: bool = False
    jobs: List[WorkerJob] = []
    last_run: Optional[AlertRun] = None
    last_check: datetime


def parse_alert_time(value: str) -> tuple[int, int]:
    """Parse HH:MM, falling back to 08:00"""
    try:
        hour, minute = value.split(":")
        hour, minute = int(hour), int(minute)
    except (ValueError, AttributeError):
        return 8, 0
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return 8, 0
    return hour, minute


class RenewalAlertWorker:
    """Background worker that runs the renewal alert check every day."""

    def __init__(self, alerts: Optional[AlertService] = None):
        self.settings = get_settings()
        self._scheduler = None
        self._alerts = alerts
        self.last_run: Optional[AlertRun] = None

    @property
    def scheduler(self):
        """Lazy-load APScheduler."""
        if self._scheduler is None:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            self._scheduler = AsyncIOScheduler()
        return self._scheduler

    @property
    def alerts(self) -> AlertService:
        if self._alerts is None:
            self._alerts = AlertService()
        return self._alerts

    async def start(self) -> None:
        """Create the daily cron job and start the scheduler."""
        if self._scheduler and self._scheduler.running:
            logger.warning("Worker already running")
            return

        from apscheduler.triggers.cron import CronTrigger

        hour, minute = parse_alert_time(self.settings.alert_time)
        self.scheduler.add_job(
            self.run_once,
            trigger=CronTrigger(hour=hour, minute=minute),
            id=JOB_ID,
            name="Renewal alerts",
            replace_existing=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info(f"Worker started: renewal alerts daily at {hour:02d}:{minute:02d}")

    def stop(self) -> None:
        """Gracefully shutdown scheduler, wait for running jobs."""
        if self._scheduler and self._scheduler.running:
            logger.info("Stopping renewal alert worker...")
            self._scheduler.shutdown(wait=True)
            logger.info("Worker stopped")
        else:
            logger.info("Worker not running")

    async def run_once(self) -> Optional[AlertRun]:
        """Run one alert check off the event loop; failures are logged, never raised into the scheduler."""
        try:
            self.last_run = await asyncio.to_thread(self.alerts.run)
        except Exception as e:
            logger.error(f"Renewal alert check failed: {e}")
            return None
        logger.info(
            f"Renewal alert check done: {len(self.last_run.alerts)} alerts, "
            f"{len(self.last_run.errors)} errors"
        )
        return self.last_run

    def get_status(self) -> WorkerStatus:
        """Return current worker state + job schedule."""
        is_running = bool(self._scheduler and self._scheduler.running)
        jobs = []
        if is_running:
            for job in self._scheduler.get_jobs():
                jobs.append(WorkerJob(
                    id=job.id,
                    name=job.name or job.id,
                    next_run=job.next_run_time,
                    trigger=str(job.trigger),
                ))
        return WorkerStatus(
            is_running=is_running,
            jobs=jobs,
            last_run=self.last_run,
            last_check=datetime.now(),
        )


# Singleton
_worker: Optional[RenewalAlertWorker] = None


def get_worker() -> RenewalAlertWorker:
    """Get or create worker singleton."""
    global _worker
    if _worker is None:
        _worker = RenewalAlertWorker()
    return _worker
