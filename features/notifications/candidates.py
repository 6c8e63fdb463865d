"""Value objects passed between evaluators, the gate and the writer."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from core.models import Notification

NotificationType = Notification.NotificationType
Priority = Notification.Priority


# notification type -> Notification FK field that points at the source row
SOURCE_FIELDS = {
    NotificationType.BUDGET_THRESHOLD: "budget",
    NotificationType.LOAN_PAYMENT_DUE: "loan",
    NotificationType.RECURRING_EXPENSE_DUE: "recurring_expense",
    NotificationType.GOAL_MILESTONE: "savings_goal",
    NotificationType.GOAL_ACHIEVED: "savings_goal",
    NotificationType.SAVINGS_REMINDER: "savings_goal",
}


@dataclass(frozen=True)
class TransactionRequest:
    """Ask an external collaborator to book a recurring expense payment."""

    recurring_expense_id: int
    user_id: int
    amount: Decimal
    category: str
    due_date: date
    description: str


@dataclass(frozen=True)
class NotificationCandidate:
    """A notification an evaluator wants to emit, not yet checked for duplicates."""

    user_id: int
    notification_type: str
    source_id: int
    period_key: str
    title: str
    message: str
    priority: str = Priority.MEDIUM
    scheduled_at: Optional[datetime] = None
    # field updates applied to the source row when the notification is written
    source_updates: Dict[str, Any] = field(default_factory=dict)
    transaction_request: Optional[TransactionRequest] = None
    # False when the user muted the category but a transaction is still due
    notify: bool = True

    @property
    def dedup_key(self) -> Tuple[int, str, int, str]:
        return (self.user_id, self.notification_type, self.source_id, self.period_key)

    @property
    def source_field(self) -> str:
        return SOURCE_FIELDS[self.notification_type]
