"""
Rule evaluators for scheduled notifications.

Each evaluator is a pure function ``(user, preferences, entity, now)`` that
returns a ``NotificationCandidate``, a list of them, or ``None``. Evaluators
never touch the database: everything they need (including a budget's spend)
is loaded up front by the orchestrator, so the same inputs always produce the
same candidates.
"""

import re
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from django.utils import timezone

from core.utils.dates import (
    month_key,
    next_anchored_date,
    previous_anchored_date,
)
from .candidates import (
    NotificationCandidate,
    NotificationType,
    Priority,
    TransactionRequest,
)
from .exceptions import EvaluationError

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")

# Percentages of a savings target that earn a milestone notification
GOAL_MILESTONES = (25, 50, 75)

EXCEEDED_TIER = "exceeded"
ACHIEVED_KEY = "achieved"


def local_today(now: datetime):
    if timezone.is_aware(now):
        return timezone.localtime(now).date()
    return now.date()


def _decimal(value, label: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise EvaluationError(f"{label} is not a number: {value!r}") from None


def _money(value: Decimal) -> str:
    return f"{value:,.2f}"


def _due_text(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    return f"in {days} days"


def evaluate_budget(user, preferences, budget, now):
    """Alert when this month's spend crosses the user's threshold or the limit."""
    if not preferences.is_enabled("budget_alerts"):
        return None

    limit = _decimal(budget.monthly_limit, "monthly limit")
    if limit <= 0:
        raise EvaluationError(f"Budget {budget.pk} has a non-positive monthly limit")
    if not MONTH_PATTERN.match(budget.month or ""):
        raise EvaluationError(f"Budget {budget.pk} has a malformed month {budget.month!r}")
    if budget.month != month_key(local_today(now)):
        return None

    spent = getattr(budget, "spent", None)
    if spent is None:
        raise EvaluationError(f"Spend for budget {budget.pk} was not loaded")
    spent = _decimal(spent, "spend")

    utilization = spent / limit * 100
    threshold = preferences.budget_threshold

    if utilization > 100:
        tier = EXCEEDED_TIER
        priority = Priority.HIGH
        title = f"Budget Exceeded: {budget.category}"
        message = (
            f"You've exceeded your {budget.category} budget by "
            f"{utilization - 100:.1f}%. Current spending: {_money(spent)}"
        )
    elif utilization >= threshold:
        tier = str(threshold)
        priority = Priority.MEDIUM
        title = f"Budget Alert: {budget.category}"
        message = (
            f"You've used {utilization:.1f}% of your {budget.category} budget. "
            f"{_money(limit - spent)} remaining."
        )
    else:
        return None

    return NotificationCandidate(
        user_id=user.pk,
        notification_type=NotificationType.BUDGET_THRESHOLD,
        source_id=budget.pk,
        period_key=f"{budget.month}:{tier}",
        title=title,
        message=message,
        priority=priority,
    )


def loan_due_date(loan, today):
    """Next monthly payment date, anchored on the day of the loan's start date."""
    anchor = loan.start_date.day
    due = next_anchored_date(today, anchor)
    if due <= loan.start_date:
        due = next_anchored_date(loan.start_date + timedelta(days=1), anchor)
    return due


def loan_cycle_paid(loan, due) -> bool:
    """
    A payment settles the cycle whose due date it lies closest to, so a late
    payment for last month never covers the one coming up.
    """
    paid = loan.last_payment_date
    if paid is None:
        return False
    if paid >= due:
        return True
    previous_due = previous_anchored_date(due, loan.start_date.day)
    return (due - paid) < (paid - previous_due)


def evaluate_loan(user, preferences, loan, now):
    """Remind about a loan payment falling due within the reminder window."""
    if not preferences.is_enabled("payment_reminders"):
        return None

    payment = _decimal(loan.monthly_payment, "monthly payment")
    if payment <= 0:
        raise EvaluationError(f"Loan {loan.pk} has a non-positive monthly payment")
    if loan.start_date is None:
        raise EvaluationError(f"Loan {loan.pk} has no start date")
    if _decimal(loan.current_balance, "current balance") <= 0:
        return None

    today = local_today(now)
    due = loan_due_date(loan, today)

    if loan_cycle_paid(loan, due):
        return None

    days_until_due = (due - today).days
    if days_until_due > preferences.reminder_days_before:
        return None

    return NotificationCandidate(
        user_id=user.pk,
        notification_type=NotificationType.LOAN_PAYMENT_DUE,
        source_id=loan.pk,
        period_key=due.isoformat(),
        title=f"Payment Due: {loan.name}",
        message=(
            f"Your {loan.name} payment of {_money(payment)} is due "
            f"{_due_text(days_until_due)}."
        ),
        priority=Priority.HIGH if days_until_due <= 1 else Priority.MEDIUM,
    )


def evaluate_recurring_expense(user, preferences, expense, now):
    """Remind once the expense enters its reminder window; request auto-booking when due."""
    if not expense.is_active:
        return None
    if expense.next_due_date is None:
        raise EvaluationError(f"Recurring expense {expense.pk} has no due date")
    if expense.reminder_days is None or expense.reminder_days < 0:
        raise EvaluationError(
            f"Recurring expense {expense.pk} has invalid reminder days {expense.reminder_days!r}"
        )
    amount = _decimal(expense.amount, "amount")

    today = local_today(now)
    due = expense.next_due_date
    if today < due - timedelta(days=expense.reminder_days):
        return None

    request = None
    if expense.auto_create_transaction and today >= due:
        request = TransactionRequest(
            recurring_expense_id=expense.pk,
            user_id=user.pk,
            amount=amount,
            category=expense.category,
            due_date=due,
            description=f"{expense.name} (recurring)",
        )

    notify = preferences.is_enabled("payment_reminders")
    if not notify and request is None:
        return None

    days = (due - today).days
    if days < 0:
        message = (
            f"Your {expense.name} payment of {_money(amount)} is overdue by "
            f"{-days} day{'s' if days < -1 else ''}."
        )
    else:
        message = f"Your {expense.name} payment of {_money(amount)} is due {_due_text(days)}."
    if request is not None:
        message += " It will be recorded automatically."

    return NotificationCandidate(
        user_id=user.pk,
        notification_type=NotificationType.RECURRING_EXPENSE_DUE,
        source_id=expense.pk,
        period_key=due.isoformat(),
        title=f"Upcoming Expense: {expense.name}" if days > 0 else f"Expense Due: {expense.name}",
        message=message,
        priority=Priority.HIGH if days <= 0 else Priority.MEDIUM,
        transaction_request=request,
        notify=notify,
    )


def evaluate_savings_goal(user, preferences, goal, now):
    """Celebrate reaching the target, or every milestone crossed so far."""
    if not preferences.is_enabled("goal_reminders"):
        return None
    if goal.achieved_at is not None:
        return None

    target = _decimal(goal.target_amount, "target amount")
    if target <= 0:
        raise EvaluationError(f"Savings goal {goal.pk} has a non-positive target")
    current = _decimal(goal.current_amount, "current amount")
    progress = current / target * 100

    if progress >= 100:
        return NotificationCandidate(
            user_id=user.pk,
            notification_type=NotificationType.GOAL_ACHIEVED,
            source_id=goal.pk,
            period_key=ACHIEVED_KEY,
            title=f"Goal Achieved: {goal.name}",
            message=(
                f"Congratulations! You've successfully saved {_money(target)} "
                f'for your "{goal.name}" goal.'
            ),
            priority=Priority.HIGH,
            source_updates={"achieved_at": now},
        )

    # One candidate per milestone crossed; the gate drops those already sent
    milestones = [
        NotificationCandidate(
            user_id=user.pk,
            notification_type=NotificationType.GOAL_MILESTONE,
            source_id=goal.pk,
            period_key=f"milestone-{milestone}",
            title=f"Milestone Reached: {goal.name}",
            message=(
                f"Great progress! You've reached {milestone}% of your "
                f'"{goal.name}" savings goal. Keep it up!'
            ),
            priority=Priority.LOW,
        )
        for milestone in GOAL_MILESTONES
        if progress >= milestone
    ]
    return milestones or None


def evaluate_savings_reminder(user, preferences, goal, now):
    """Nudge once a month when no contribution has been made yet."""
    if not preferences.is_enabled("goal_reminders"):
        return None
    if goal.achieved_at is not None:
        return None

    contribution = _decimal(goal.monthly_contribution, "monthly contribution")
    if contribution <= 0:
        return None

    current_month = month_key(local_today(now))
    last = goal.last_contribution_date
    if last is not None and month_key(last) == current_month:
        return None

    return NotificationCandidate(
        user_id=user.pk,
        notification_type=NotificationType.SAVINGS_REMINDER,
        source_id=goal.pk,
        period_key=current_month,
        title=f"Savings Reminder: {goal.name}",
        message=(
            f"Don't forget to contribute {_money(contribution)} to your "
            f'"{goal.name}" savings goal.'
        ),
        priority=Priority.MEDIUM,
    )


# entity kind -> evaluators run against every loaded entity of that kind
EVALUATORS = {
    "budget": (evaluate_budget,),
    "loan": (evaluate_loan,),
    "recurring_expense": (evaluate_recurring_expense,),
    "savings_goal": (evaluate_savings_goal, evaluate_savings_reminder),
}
