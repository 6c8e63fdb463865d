"""Budget model."""

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from django.contrib.auth.models import User


MONTH_VALIDATOR = RegexValidator(
    regex=r"^\d{4}-\d{2}$", message="Month must use the YYYY-MM format."
)


class Budget(models.Model):
    user = models.ForeignKey(User, models.CASCADE, related_name="budgets")
    category = models.TextField()
    monthly_limit = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0.01)]
    )
    month = models.CharField(max_length=7, validators=[MONTH_VALIDATOR])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        app_label = "core"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "category", "month"], name="budget_user_category_month"
            )
        ]

    def __str__(self):
        return f"{self.category} ({self.month})"
