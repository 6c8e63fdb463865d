"""Core models package."""

from .budget import Budget
from .transaction import Transaction
from .loan import Loan
from .recurring_expense import RecurringExpense
from .savings_goal import SavingsGoal
from .preferences import NotificationPreferences, CATEGORY_TOGGLES
from .notification import Notification, NotificationMarker

__all__ = [
    "Budget",
    "Transaction",
    "Loan",
    "RecurringExpense",
    "SavingsGoal",
    "NotificationPreferences",
    "Notification",
    "NotificationMarker",
    "CATEGORY_TOGGLES",
]
