from datetime import datetime
from typing import Any, List, Optional

from ninja import Schema
from pydantic import Field, model_validator


class NotificationSchema(Schema):
    id: int
    title: str
    message: str
    is_read: bool
    notification_type: str
    priority: str
    scheduled_at: Optional[datetime] = None
    read_at: Optional[datetime] = None
    created_at: datetime
    budget_id: Optional[int] = None
    loan_id: Optional[int] = None
    savings_goal_id: Optional[int] = None
    recurring_expense_id: Optional[int] = None
    transaction_id: Optional[int] = None


class NotificationCreateSchema(Schema):
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    notification_type: str = "info"
    priority: str = Field(default="medium", pattern="^(low|medium|high)$")
    scheduled_at: Optional[datetime] = None


class PaginationSchema(Schema):
    page: int
    limit: int
    total: int
    total_pages: int


class NotificationPageSchema(Schema):
    data: List[NotificationSchema]
    unread_count: int
    pagination: PaginationSchema


class NotificationListResponse(Schema):
    status: str
    message: str
    data: NotificationPageSchema


class NotificationResponse(Schema):
    status: str
    message: str
    data: Optional[NotificationSchema] = None


class MarkAllReadResponse(Schema):
    status: str
    message: str
    data: dict


class PreferencesSchema(Schema):
    email_budget_alerts: bool
    push_budget_alerts: bool
    email_payment_reminders: bool
    push_payment_reminders: bool
    email_goal_reminders: bool
    push_goal_reminders: bool
    email_security_alerts: bool
    push_security_alerts: bool
    budget_threshold: int
    reminder_days_before: int


class PreferencesUpdateSchema(Schema):
    email_budget_alerts: Optional[bool] = None
    push_budget_alerts: Optional[bool] = None
    email_payment_reminders: Optional[bool] = None
    push_payment_reminders: Optional[bool] = None
    email_goal_reminders: Optional[bool] = None
    push_goal_reminders: Optional[bool] = None
    email_security_alerts: Optional[bool] = None
    push_security_alerts: Optional[bool] = None
    budget_threshold: Optional[int] = Field(default=None, ge=1, le=100)
    reminder_days_before: Optional[int] = Field(default=None, ge=0, le=30)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if all(getattr(self, name) is None for name in type(self).model_fields):
            raise ValueError("At least one field must be provided for update.")
        return self


class PreferencesResponse(Schema):
    status: str
    message: str
    data: PreferencesSchema


class RunSummaryResponse(Schema):
    status: str
    message: str
    data: Any


class ErrorResponse(Schema):
    status: str
    message: str
    code: int
