"""Admin configuration for core models."""

from django.contrib import admin
from .models import (
    Budget,
    Transaction,
    Loan,
    RecurringExpense,
    SavingsGoal,
    NotificationPreferences,
    Notification,
    NotificationMarker,
)

# Register models
admin.site.register(Budget)
admin.site.register(Transaction)
admin.site.register(Loan)
admin.site.register(RecurringExpense)
admin.site.register(SavingsGoal)
admin.site.register(NotificationPreferences)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "notification_type", "priority", "is_read", "created_at")
    list_filter = ("notification_type", "priority", "is_read")


@admin.register(NotificationMarker)
class NotificationMarkerAdmin(admin.ModelAdmin):
    list_display = ("notification_type", "source_id", "period_key", "user", "created_at")
    readonly_fields = ("notification",)
