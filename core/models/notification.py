"""Notification and notification marker models."""

from django.db import models
from django.conf import settings


class Notification(models.Model):
    class NotificationType(models.TextChoices):
        BUDGET_THRESHOLD = "budget-threshold", "Budget threshold"
        LOAN_PAYMENT_DUE = "loan-payment-due", "Loan payment due"
        RECURRING_EXPENSE_DUE = "recurring-expense-due", "Recurring expense due"
        GOAL_MILESTONE = "goal-milestone", "Savings goal milestone"
        GOAL_ACHIEVED = "goal-achieved", "Savings goal achieved"
        SAVINGS_REMINDER = "savings-reminder", "Savings reminder"
        INFO = "info", "Info"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications"
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    notification_type = models.CharField(
        max_length=50, choices=NotificationType.choices, default=NotificationType.INFO
    )
    priority = models.CharField(
        max_length=10, choices=Priority.choices, default=Priority.MEDIUM
    )
    # null means "deliver immediately"
    scheduled_at = models.DateTimeField(blank=True, null=True)
    read_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    budget = models.ForeignKey(
        "core.Budget", models.SET_NULL, blank=True, null=True, related_name="notifications"
    )
    loan = models.ForeignKey(
        "core.Loan", models.SET_NULL, blank=True, null=True, related_name="notifications"
    )
    savings_goal = models.ForeignKey(
        "core.SavingsGoal",
        models.SET_NULL,
        blank=True,
        null=True,
        related_name="notifications",
    )
    recurring_expense = models.ForeignKey(
        "core.RecurringExpense",
        models.SET_NULL,
        blank=True,
        null=True,
        related_name="notifications",
    )
    transaction = models.ForeignKey(
        "core.Transaction",
        models.SET_NULL,
        blank=True,
        null=True,
        related_name="notifications",
    )

    class Meta:
        app_label = "core"
        indexes = [
            models.Index(fields=["user", "-created_at"], name="core_notifi_user_id_9a3e52_idx"),
            models.Index(fields=["is_read"], name="core_notifi_is_read_4b8c1d_idx"),
            models.Index(fields=["scheduled_at"], name="core_notifi_schedul_7f2a60_idx"),
        ]

    def __str__(self):
        return f"{self.title} - {self.user}"


class NotificationMarker(models.Model):
    """Records that a notification was issued for one logical occurrence.

    One row per (user, type, source entity, period key). The unique constraint
    is what keeps two concurrent scheduler runs from notifying twice.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_markers",
    )
    notification_type = models.CharField(max_length=50)
    source_id = models.BigIntegerField()
    period_key = models.CharField(max_length=64)
    notification = models.OneToOneField(
        Notification, models.CASCADE, related_name="marker"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "core"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "notification_type", "source_id", "period_key"],
                name="notification_marker_unique_period",
            )
        ]

    def __str__(self):
        return f"{self.notification_type}:{self.source_id}:{self.period_key}"
