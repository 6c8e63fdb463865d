"""In-process periodic trigger for the notification checks."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from django.db import close_old_connections
from django.utils import timezone

from core.utils.config import get_setting
from .orchestrator import run_all_checks

logger = logging.getLogger(__name__)

JOB_ID = "notification-checks"


class NotificationScheduler:
    """
    Runs ``run_all_checks`` on a fixed interval in a background thread.

    Owned by the process that serves the application: create it at start-up,
    call ``start()`` and call ``shutdown()`` on exit. A trigger that fires while
    the previous run is still going is skipped.
    """

    def __init__(
        self,
        run: Optional[Callable] = None,
        interval_minutes: Optional[int] = None,
        initial_delay_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = timezone.now,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        config = get_setting()
        self._run = run or run_all_checks
        self.interval_minutes = interval_minutes or config.NOTIFICATION_CHECK_INTERVAL_MINUTES
        self.initial_delay_seconds = (
            config.NOTIFICATION_INITIAL_DELAY_SECONDS
            if initial_delay_seconds is None
            else initial_delay_seconds
        )
        self._clock = clock
        self._scheduler = scheduler or BackgroundScheduler(timezone="UTC")
        self._in_flight = threading.Lock()

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        if self.running:
            return
        first_run = self._clock() + timedelta(seconds=self.initial_delay_seconds)
        self._scheduler.add_job(
            self._scheduled_run,
            trigger="interval",
            minutes=self.interval_minutes,
            next_run_time=first_run,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            "Notification scheduler started. Checks will run every %s minutes, first at %s.",
            self.interval_minutes,
            first_run.isoformat(),
        )

    def shutdown(self, wait: bool = True) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=wait)
        logger.info("Notification scheduler stopped")

    def run_once(self):
        """Run the checks now unless a run is already in flight."""
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Previous notification check still running; skipping this trigger")
            return None
        try:
            summary = self._run()
            logger.info("Scheduled notification checks finished: %s", summary)
            return summary
        except Exception as exc:
            logger.error("Error in scheduled notification checks: %s", exc, exc_info=True)
            return None
        finally:
            self._in_flight.release()

    def _scheduled_run(self):
        # Worker threads hold their own connections; drop stale ones each run
        close_old_connections()
        try:
            return self.run_once()
        finally:
            close_old_connections()


def build_scheduler() -> Optional[NotificationScheduler]:
    """Return a scheduler when the environment enables it, otherwise ``None``."""
    config = get_setting()
    if not config.scheduler_enabled:
        logger.info(
            "Notification scheduler disabled in %s. "
            "Set ENABLE_NOTIFICATION_SCHEDULER=true to enable.",
            config.DJANGO_ENV,
        )
        return None
    return NotificationScheduler()
