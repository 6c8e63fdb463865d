"""Resolve the notification preferences a user's rules run against."""

import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError

from core.models import NotificationPreferences
from core.utils.config import get_setting
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def default_preferences(user) -> NotificationPreferences:
    """Unsaved preferences carrying the configured defaults."""
    config = get_setting()
    return NotificationPreferences(
        user=user,
        budget_threshold=config.DEFAULT_BUDGET_THRESHOLD,
        reminder_days_before=config.DEFAULT_REMINDER_DAYS_BEFORE,
    )


def validate_preferences(preferences: NotificationPreferences) -> NotificationPreferences:
    try:
        preferences.clean_fields(exclude=["user"])
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid notification preferences for user {preferences.user_id}: {exc.message_dict}"
        ) from exc
    return preferences


def resolve_preferences(user) -> NotificationPreferences:
    """
    Return the user's stored preferences, or defaults when they are missing
    or invalid. Bad preferences never stop a user's notifications.
    """
    try:
        preferences = user.notification_preferences
    except ObjectDoesNotExist:
        return default_preferences(user)

    try:
        return validate_preferences(preferences)
    except ConfigurationError as exc:
        logger.warning("%s; falling back to defaults", exc)
        return default_preferences(user)


def get_or_create_preferences(user) -> NotificationPreferences:
    config = get_setting()
    preferences, created = NotificationPreferences.objects.get_or_create(
        user=user,
        defaults={
            "budget_threshold": config.DEFAULT_BUDGET_THRESHOLD,
            "reminder_days_before": config.DEFAULT_REMINDER_DAYS_BEFORE,
        },
    )
    if created:
        logger.info("Created default notification preferences for user %s", user.id)
    return preferences
