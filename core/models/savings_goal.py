"""Savings goal model."""

from django.db import models
from django.contrib.auth.models import User


class SavingsGoal(models.Model):
    user = models.ForeignKey(User, models.CASCADE, related_name="savings_goals")
    name = models.TextField()
    target_amount = models.DecimalField(max_digits=12, decimal_places=2)
    current_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    target_date = models.DateField(blank=True, null=True)
    monthly_contribution = models.DecimalField(
        max_digits=12, decimal_places=2, default=0
    )
    last_contribution_date = models.DateField(blank=True, null=True)
    achieved_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        app_label = "core"

    def __str__(self):
        return self.name
