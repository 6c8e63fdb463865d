"""Recurring expense model."""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.contrib.auth.models import User


class RecurringExpense(models.Model):
    class Frequency(models.TextChoices):
        WEEKLY = "weekly", "Weekly"
        MONTHLY = "monthly", "Monthly"
        YEARLY = "yearly", "Yearly"

    user = models.ForeignKey(User, models.CASCADE, related_name="recurring_expenses")
    name = models.TextField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.TextField()
    frequency = models.TextField(choices=Frequency.choices, default=Frequency.MONTHLY)
    next_due_date = models.DateField()
    last_paid_date = models.DateField(blank=True, null=True)
    is_active = models.BooleanField(default=True)
    description = models.TextField(blank=True, null=True)
    reminder_days = models.SmallIntegerField(
        default=3, validators=[MinValueValidator(0), MaxValueValidator(30)]
    )
    auto_create_transaction = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        app_label = "core"
        indexes = [
            models.Index(fields=["next_due_date"], name="core_recurr_next_du_0b5f1e_idx"),
            models.Index(fields=["is_active"], name="core_recurr_is_acti_6c2d7a_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.frequency})"
