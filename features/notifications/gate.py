"""Deduplication gate: at most one notification per (user, type, source, period)."""

import logging

from core.models import NotificationMarker
from .candidates import NotificationCandidate

logger = logging.getLogger(__name__)


class DeduplicationGate:
    """
    Checks the marker table for an earlier notification of the same occurrence.

    Evaluators re-judge the full current state on every run, so without this
    check every still-due item would be notified again each hour. The unique
    constraint on ``NotificationMarker`` remains the final arbiter when two runs
    race past this check.
    """

    def should_emit(self, candidate: NotificationCandidate) -> bool:
        user_id, notification_type, source_id, period_key = candidate.dedup_key
        exists = NotificationMarker.objects.filter(
            user_id=user_id,
            notification_type=notification_type,
            source_id=source_id,
            period_key=period_key,
        ).exists()
        if exists:
            logger.debug(
                "Skipping %s for source %s, period %s already notified",
                notification_type,
                source_id,
                period_key,
            )
        return not exists
