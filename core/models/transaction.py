"""Transaction model."""

from django.db import models
from django.contrib.auth.models import User
from .budget import Budget


class Transaction(models.Model):
    class TransactionType(models.TextChoices):
        EXPENSE = "EXPENSE", "Expense"
        DEPOSIT = "DEPOSIT", "Deposit"

    transaction_type = models.TextField(
        choices=TransactionType.choices, default=TransactionType.EXPENSE
    )
    date = models.DateField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    category = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    user = models.ForeignKey(User, models.CASCADE, related_name="transactions")
    budget = models.ForeignKey(
        Budget, models.SET_NULL, blank=True, null=True, related_name="transactions"
    )
    recurring_expense = models.ForeignKey(
        "core.RecurringExpense",
        models.SET_NULL,
        blank=True,
        null=True,
        related_name="transactions",
    )
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        app_label = "core"
        indexes = [
            models.Index(fields=["user", "date"], name="core_transa_user_id_4e1c9b_idx")
        ]
