"""Notification preference model."""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.contrib.auth.models import User


# category -> (email toggle, push toggle)
CATEGORY_TOGGLES = {
    "budget_alerts": ("email_budget_alerts", "push_budget_alerts"),
    "payment_reminders": ("email_payment_reminders", "push_payment_reminders"),
    "goal_reminders": ("email_goal_reminders", "push_goal_reminders"),
    "security_alerts": ("email_security_alerts", "push_security_alerts"),
}


class NotificationPreferences(models.Model):
    user = models.OneToOneField(
        User, models.CASCADE, related_name="notification_preferences"
    )
    email_budget_alerts = models.BooleanField(default=True)
    push_budget_alerts = models.BooleanField(default=False)
    email_payment_reminders = models.BooleanField(default=True)
    push_payment_reminders = models.BooleanField(default=True)
    email_goal_reminders = models.BooleanField(default=True)
    push_goal_reminders = models.BooleanField(default=False)
    email_security_alerts = models.BooleanField(default=True)
    push_security_alerts = models.BooleanField(default=True)
    budget_threshold = models.SmallIntegerField(
        default=80, validators=[MinValueValidator(1), MaxValueValidator(100)]
    )
    reminder_days_before = models.SmallIntegerField(
        default=3, validators=[MinValueValidator(0), MaxValueValidator(30)]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "core"
        verbose_name_plural = "notification preferences"

    def is_enabled(self, category: str) -> bool:
        """A category is on when any of its delivery channels is on."""
        email_field, push_field = CATEGORY_TOGGLES[category]
        return bool(getattr(self, email_field) or getattr(self, push_field))

    def __str__(self):
        return f"Preferences for {self.user}"
