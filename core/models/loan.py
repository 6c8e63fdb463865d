"""Loan model."""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.contrib.auth.models import User


class Loan(models.Model):
    user = models.ForeignKey(User, models.CASCADE, related_name="loans")
    name = models.TextField()
    initial_amount = models.DecimalField(max_digits=12, decimal_places=2)
    current_balance = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    monthly_payment = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0.01)]
    )
    interest_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    start_date = models.DateField()
    last_payment_date = models.DateField(blank=True, null=True)
    projected_payoff_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        app_label = "core"

    def __str__(self):
        return self.name
