"""Notification endpoints: inbox, preferences and on-demand checks."""

import logging
from typing import Optional

from django.db.models import Case, IntegerField, Value, When
from django.utils import timezone
from ninja import Query, Router

from core.models import Notification
from core.utils.responses import error_response, pagination_block, success_response
from features.auth.api import AuthBearer
from .orchestrator import run_all_checks
from .preferences import get_or_create_preferences
from .schemas import (
    ErrorResponse,
    MarkAllReadResponse,
    NotificationCreateSchema,
    NotificationListResponse,
    NotificationResponse,
    PreferencesResponse,
    PreferencesUpdateSchema,
    RunSummaryResponse,
)

logger = logging.getLogger(__name__)
router = Router(auth=AuthBearer())

MAX_PAGE_SIZE = 100

# Highest priority first; CharField ordering would sort alphabetically
PRIORITY_RANK = Case(
    When(priority=Notification.Priority.HIGH, then=Value(3)),
    When(priority=Notification.Priority.MEDIUM, then=Value(2)),
    When(priority=Notification.Priority.LOW, then=Value(1)),
    default=Value(0),
    output_field=IntegerField(),
)


@router.get("/", response=NotificationListResponse)
def list_notifications(
    request,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    unread_only: bool = Query(False),
    notification_type: Optional[str] = Query(None, alias="type"),
):
    """List the user's notifications, highest priority and newest first."""
    queryset = Notification.objects.filter(user=request.user)
    if unread_only:
        queryset = queryset.filter(is_read=False)
    if notification_type:
        queryset = queryset.filter(notification_type=notification_type)

    total = queryset.count()
    offset = (page - 1) * limit
    notifications = list(
        queryset.annotate(priority_rank=PRIORITY_RANK).order_by(
            "-priority_rank", "-created_at", "-id"
        )[offset : offset + limit]
    )
    unread_count = Notification.objects.filter(user=request.user, is_read=False).count()

    return success_response(
        {
            "data": notifications,
            "unread_count": unread_count,
            "pagination": pagination_block(page, limit, total),
        }
    )


@router.post("/", response={200: NotificationResponse, 400: ErrorResponse})
def create_notification(request, payload: NotificationCreateSchema):
    """Create a manual notification for the current user."""
    if payload.notification_type not in Notification.NotificationType.values:
        return 400, error_response(f"Unknown notification type: {payload.notification_type}")

    notification = Notification.objects.create(
        user=request.user,
        title=payload.title,
        message=payload.message,
        notification_type=payload.notification_type,
        priority=payload.priority,
        scheduled_at=payload.scheduled_at,
    )
    return success_response(notification, "Notification created successfully")


@router.post("/mark-all-read", response=MarkAllReadResponse)
def mark_all_read(request):
    """Mark every unread notification as read."""
    updated = Notification.objects.filter(user=request.user, is_read=False).update(
        is_read=True, read_at=timezone.now()
    )
    return success_response(
        {"updated_count": updated}, f"Marked {updated} notifications as read"
    )


@router.post(
    "/{notification_id}/read", response={200: NotificationResponse, 404: ErrorResponse}
)
def mark_as_read(request, notification_id: int):
    """Mark a notification as read."""
    notification = Notification.objects.filter(id=notification_id, user=request.user).first()
    if notification is None:
        return 404, error_response("Notification not found", code=404)

    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=["is_read", "read_at"])
    return success_response(notification, "Notification marked as read")


@router.get("/preferences", response=PreferencesResponse)
def get_preferences(request):
    """Return the user's preferences, creating defaults on first access."""
    preferences = get_or_create_preferences(request.user)
    return success_response(preferences)


@router.put("/preferences", response=PreferencesResponse)
def update_preferences(request, payload: PreferencesUpdateSchema):
    """Update any subset of the user's notification preferences."""
    updates = payload.dict(exclude_unset=True, exclude_none=True)
    preferences = get_or_create_preferences(request.user)
    for field_name, value in updates.items():
        setattr(preferences, field_name, value)
    preferences.save()
    return success_response(preferences, "Notification preferences updated successfully")


@router.post("/check", response={200: RunSummaryResponse, 403: ErrorResponse})
def run_checks(request):
    """Run every notification check now (staff only)."""
    if not request.user.is_staff:
        return 403, error_response("Only staff users can run notification checks", code=403)

    summary = run_all_checks()
    if summary.aborted:
        logger.error("Manual notification check aborted: %s", summary.abort_reason)
        return success_response(summary.to_dict(), "Notification checks aborted")
    return success_response(summary.to_dict(), "Notification checks completed successfully")
