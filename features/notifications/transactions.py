"""Default collaborator that books auto-created recurring expense payments."""

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from core.models import Budget, RecurringExpense, Transaction
from core.utils.dates import advance_due_date, month_key
from .candidates import TransactionRequest

logger = logging.getLogger(__name__)


def record_recurring_payment(request: TransactionRequest) -> Optional[Transaction]:
    """
    Book the payment for one due cycle and move the expense to its next cycle.

    The update only applies while ``next_due_date`` still equals the requested
    due date, so a cycle is booked at most once even when runs overlap.
    Returns ``None`` when the cycle was already booked.
    """
    with transaction.atomic():
        expense = (
            RecurringExpense.objects.select_for_update()
            .filter(
                pk=request.recurring_expense_id,
                next_due_date=request.due_date,
                is_active=True,
            )
            .first()
        )
        if expense is None:
            logger.info(
                "Recurring expense %s already booked for %s",
                request.recurring_expense_id,
                request.due_date,
            )
            return None

        budget = Budget.objects.filter(
            user_id=request.user_id,
            category=request.category,
            month=month_key(request.due_date),
        ).first()

        txn = Transaction.objects.create(
            user_id=request.user_id,
            transaction_type=Transaction.TransactionType.EXPENSE,
            date=request.due_date,
            amount=request.amount,
            category=request.category,
            description=request.description,
            budget=budget,
            recurring_expense=expense,
        )

        expense.last_paid_date = request.due_date
        expense.next_due_date = advance_due_date(request.due_date, expense.frequency)
        expense.updated_at = timezone.now()
        expense.save(update_fields=["last_paid_date", "next_due_date", "updated_at"])

    logger.info(
        "Booked recurring expense %s for %s, next due %s",
        expense.id,
        request.due_date,
        expense.next_due_date,
    )
    return txn
