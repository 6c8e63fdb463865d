"""Run the notification checks once from the command line."""

import json

from django.core.management.base import BaseCommand, CommandError

from features.notifications.orchestrator import run_all_checks


class Command(BaseCommand):
    help = "Evaluate every notification rule once and write any new notifications."

    def add_arguments(self, parser):
        parser.add_argument(
            "--json", action="store_true", help="Print the full run summary as JSON."
        )

    def handle(self, *args, **options):
        summary = run_all_checks()
        if options["json"]:
            self.stdout.write(json.dumps(summary.to_dict(), default=str, indent=2))
        else:
            self.stdout.write(f"Notification checks: {summary}")
            for failure in summary.failures:
                self.stdout.write(
                    f"  {failure.kind} {failure.entity_id}: {failure.error_kind}: {failure.reason}"
                )
        if summary.aborted:
            raise CommandError(f"Notification checks aborted: {summary.abort_reason}")
