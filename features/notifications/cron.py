import logging

from django_cron import CronJobBase, Schedule

from .orchestrator import run_all_checks

logger = logging.getLogger(__name__)


class NotificationCheckJob(CronJobBase):
    """Hourly notification checks for deployments driven by ``manage.py runcrons``."""

    RUN_EVERY_MINS = 60
    schedule = Schedule(run_every_mins=RUN_EVERY_MINS)
    code = "features.notifications.cron.NotificationCheckJob"

    def do(self):
        summary = run_all_checks()
        if summary.aborted:
            logger.error("Notification cron run aborted: %s", summary.abort_reason)
        return f"Notification checks: {summary}"
