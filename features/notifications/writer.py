"""Notification writer: persists a candidate and its bookkeeping as one unit."""

import logging
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.models import Notification, NotificationMarker
from .candidates import NotificationCandidate
from .exceptions import DuplicateNotification, PersistenceError

logger = logging.getLogger(__name__)


class NotificationWriter:
    def commit(
        self, candidate: NotificationCandidate, transaction_id: Optional[int] = None
    ) -> Notification:
        """
        Insert the notification, its dedup marker and any source-row updates.

        Everything happens in one atomic block: either all three land or none
        do. A marker collision means another run already notified this period
        and is reported as ``DuplicateNotification``.
        """
        source_field = candidate.source_field
        try:
            with transaction.atomic():
                notification = Notification.objects.create(
                    user_id=candidate.user_id,
                    notification_type=candidate.notification_type,
                    title=candidate.title,
                    message=candidate.message,
                    priority=candidate.priority,
                    scheduled_at=candidate.scheduled_at,
                    transaction_id=transaction_id,
                    **{f"{source_field}_id": candidate.source_id},
                )
                NotificationMarker.objects.create(
                    user_id=candidate.user_id,
                    notification_type=candidate.notification_type,
                    source_id=candidate.source_id,
                    period_key=candidate.period_key,
                    notification=notification,
                )
                if candidate.source_updates:
                    source_model = Notification._meta.get_field(source_field).related_model
                    source_model.objects.filter(pk=candidate.source_id).update(
                        updated_at=timezone.now(), **candidate.source_updates
                    )
        except IntegrityError as exc:
            if self._already_marked(candidate):
                raise DuplicateNotification(
                    f"{candidate.notification_type} for source {candidate.source_id} "
                    f"already issued for {candidate.period_key}"
                ) from exc
            raise PersistenceError(f"Failed to write notification: {exc}") from exc
        except DatabaseError as exc:
            raise PersistenceError(f"Failed to write notification: {exc}") from exc

        logger.info(
            "Created %s notification %s for user %s (source %s, period %s)",
            candidate.notification_type,
            notification.id,
            candidate.user_id,
            candidate.source_id,
            candidate.period_key,
        )
        return notification

    def _already_marked(self, candidate: NotificationCandidate) -> bool:
        user_id, notification_type, source_id, period_key = candidate.dedup_key
        return NotificationMarker.objects.filter(
            user_id=user_id,
            notification_type=notification_type,
            source_id=source_id,
            period_key=period_key,
        ).exists()
