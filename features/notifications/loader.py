"""Batched loading of everything the evaluators need for one run."""

from datetime import date
from typing import Dict, List

from dateutil.relativedelta import relativedelta
from django.db.models import DecimalField, Q, Sum
from django.db.models.functions import Coalesce

from core.models import Budget, Loan, RecurringExpense, SavingsGoal, Transaction
from core.utils.dates import month_key

USER_RELATIONS = ("user", "user__notification_preferences")


def load_budgets(today: date) -> List[Budget]:
    """Current-month budgets with their spend annotated as ``spent``."""
    month_start = today.replace(day=1)
    month_end = month_start + relativedelta(months=1)

    # Only active expenses dated inside the budget month count
    budgets = (
        Budget.objects.filter(month=month_key(today), user__is_active=True)
        .select_related(*USER_RELATIONS)
        .annotate(
            spent=Coalesce(
                Sum(
                    "transactions__amount",
                    filter=Q(
                        transactions__date__gte=month_start,
                        transactions__date__lt=month_end,
                        transactions__active=True,
                        transactions__transaction_type=Transaction.TransactionType.EXPENSE,
                    ),
                ),
                0,
                output_field=DecimalField(),
            )
        )
        .order_by("id")
    )
    return list(budgets)


def load_loans() -> List[Loan]:
    return list(
        Loan.objects.filter(current_balance__gt=0, user__is_active=True)
        .select_related(*USER_RELATIONS)
        .order_by("id")
    )


def load_recurring_expenses() -> List[RecurringExpense]:
    return list(
        RecurringExpense.objects.filter(is_active=True, user__is_active=True)
        .select_related(*USER_RELATIONS)
        .order_by("next_due_date", "id")
    )


def load_savings_goals() -> List[SavingsGoal]:
    return list(
        SavingsGoal.objects.filter(achieved_at__isnull=True, user__is_active=True)
        .select_related(*USER_RELATIONS)
        .order_by("id")
    )


def load_candidates(today: date) -> Dict[str, list]:
    """
    Load every notification-relevant entity in four queries.

    The querysets are evaluated here so a storage outage surfaces before any
    evaluation starts.
    """
    return {
        "budget": load_budgets(today),
        "loan": load_loans(),
        "recurring_expense": load_recurring_expenses(),
        "savings_goal": load_savings_goals(),
    }
