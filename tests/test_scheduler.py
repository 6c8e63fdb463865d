import os
from datetime import datetime, timedelta, timezone as dt_timezone
from io import StringIO
from unittest.mock import patch

from django.core.management import CommandError, call_command
from django.test import SimpleTestCase
from django.utils import timezone

from features.notifications.cron import NotificationCheckJob
from features.notifications.orchestrator import RunSummary
from features.notifications.scheduler import JOB_ID, NotificationScheduler, build_scheduler

NOW = datetime(2025, 3, 13, 9, 0, tzinfo=dt_timezone.utc)


class NotificationSchedulerTests(SimpleTestCase):
    def test_run_once_returns_summary(self):
        summary = RunSummary(started_at=NOW, created=2)
        scheduler = NotificationScheduler(run=lambda: summary)

        self.assertIs(scheduler.run_once(), summary)

    def test_overlapping_trigger_is_skipped(self):
        nested = []

        def run():
            nested.append(scheduler.run_once())
            return "done"

        scheduler = NotificationScheduler(run=run)

        self.assertEqual(scheduler.run_once(), "done")
        self.assertEqual(nested, [None])

    def test_failed_run_is_logged_and_released(self):
        calls = []

        def run():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return "recovered"

        scheduler = NotificationScheduler(run=run)

        with self.assertLogs("features.notifications.scheduler", level="ERROR"):
            self.assertIsNone(scheduler.run_once())
        self.assertEqual(scheduler.run_once(), "recovered")

    def test_start_and_shutdown(self):
        started = timezone.now()
        scheduler = NotificationScheduler(
            run=lambda: None,
            interval_minutes=30,
            initial_delay_seconds=3600,
            clock=lambda: started,
        )
        scheduler.start()
        try:
            self.assertTrue(scheduler.running)
            job = scheduler._scheduler.get_job(JOB_ID)
            self.assertEqual(job.next_run_time, started + timedelta(hours=1))
            self.assertEqual(job.max_instances, 1)
            self.assertTrue(job.coalesce)
        finally:
            scheduler.shutdown(wait=False)
        self.assertFalse(scheduler.running)

    def test_disabled_outside_production(self):
        env = {"DJANGO_ENV": "development", "ENABLE_NOTIFICATION_SCHEDULER": "false"}
        with patch.dict(os.environ, env):
            self.assertIsNone(build_scheduler())

    def test_enabled_by_flag(self):
        env = {"DJANGO_ENV": "development", "ENABLE_NOTIFICATION_SCHEDULER": "true"}
        with patch.dict(os.environ, env):
            scheduler = build_scheduler()
        self.assertIsInstance(scheduler, NotificationScheduler)
        self.assertFalse(scheduler.running)

    def test_enabled_in_production(self):
        env = {"DJANGO_ENV": "production", "ENABLE_NOTIFICATION_SCHEDULER": "false"}
        with patch.dict(os.environ, env):
            self.assertIsNotNone(build_scheduler())


class CronAndCommandTests(SimpleTestCase):
    @patch("features.notifications.cron.run_all_checks")
    def test_cron_job_runs_checks(self, run_all_checks):
        run_all_checks.return_value = RunSummary(started_at=NOW, evaluated=4, created=2)

        message = NotificationCheckJob().do()

        run_all_checks.assert_called_once_with()
        self.assertIn("created=2", message)

    @patch("features.notifications.management.commands.check_notifications.run_all_checks")
    def test_command_prints_summary(self, run_all_checks):
        run_all_checks.return_value = RunSummary(started_at=NOW, evaluated=3, created=1)
        out = StringIO()

        call_command("check_notifications", stdout=out)

        self.assertIn("evaluated=3 created=1", out.getvalue())

    @patch("features.notifications.management.commands.check_notifications.run_all_checks")
    def test_command_fails_on_abort(self, run_all_checks):
        run_all_checks.return_value = RunSummary(
            started_at=NOW, aborted=True, abort_reason="connection lost"
        )

        with self.assertRaises(CommandError):
            call_command("check_notifications", stdout=StringIO())
