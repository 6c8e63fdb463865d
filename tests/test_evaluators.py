from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import SimpleTestCase

from core.models import (
    Budget,
    Loan,
    Notification,
    NotificationPreferences,
    RecurringExpense,
    SavingsGoal,
)
from features.notifications.evaluators import (
    evaluate_budget,
    evaluate_loan,
    evaluate_recurring_expense,
    evaluate_savings_goal,
    evaluate_savings_reminder,
)
from features.notifications.exceptions import EvaluationError

NOW = datetime(2025, 3, 13, 9, 0, tzinfo=dt_timezone.utc)


def at(day):
    return datetime(day.year, day.month, day.day, 9, 0, tzinfo=dt_timezone.utc)


class EvaluatorTestCase(SimpleTestCase):
    def setUp(self):
        self.user = User(pk=1, username="alice")
        self.preferences = NotificationPreferences(user=self.user)


class BudgetEvaluatorTests(EvaluatorTestCase):
    def make_budget(self, spent, limit="1000", month="2025-03"):
        budget = Budget(
            pk=10,
            user=self.user,
            category="Food",
            monthly_limit=Decimal(limit),
            month=month,
        )
        budget.spent = Decimal(spent)
        return budget

    def test_threshold_crossed(self):
        candidate = evaluate_budget(self.user, self.preferences, self.make_budget("850"), NOW)

        self.assertEqual(candidate.notification_type, Notification.NotificationType.BUDGET_THRESHOLD)
        self.assertEqual(candidate.period_key, "2025-03:80")
        self.assertEqual(candidate.priority, Notification.Priority.MEDIUM)
        self.assertEqual(candidate.dedup_key, (1, "budget-threshold", 10, "2025-03:80"))
        self.assertIn("85.0%", candidate.message)
        self.assertIn("150.00 remaining", candidate.message)

    def test_exceeded(self):
        candidate = evaluate_budget(self.user, self.preferences, self.make_budget("1100"), NOW)

        self.assertEqual(candidate.period_key, "2025-03:exceeded")
        self.assertEqual(candidate.priority, Notification.Priority.HIGH)
        self.assertEqual(candidate.title, "Budget Exceeded: Food")

    def test_exactly_at_limit_is_not_exceeded(self):
        candidate = evaluate_budget(self.user, self.preferences, self.make_budget("1000"), NOW)
        self.assertEqual(candidate.period_key, "2025-03:80")

    def test_below_threshold(self):
        self.assertIsNone(
            evaluate_budget(self.user, self.preferences, self.make_budget("500"), NOW)
        )

    def test_user_threshold_applies(self):
        self.preferences.budget_threshold = 90
        self.assertIsNone(
            evaluate_budget(self.user, self.preferences, self.make_budget("850"), NOW)
        )

    def test_other_month_ignored(self):
        budget = self.make_budget("950", month="2025-02")
        self.assertIsNone(evaluate_budget(self.user, self.preferences, budget, NOW))

    def test_muted_category(self):
        self.preferences.email_budget_alerts = False
        self.preferences.push_budget_alerts = False
        self.assertIsNone(
            evaluate_budget(self.user, self.preferences, self.make_budget("950"), NOW)
        )

    def test_push_only_still_enabled(self):
        self.preferences.email_budget_alerts = False
        self.preferences.push_budget_alerts = True
        self.assertIsNotNone(
            evaluate_budget(self.user, self.preferences, self.make_budget("950"), NOW)
        )

    def test_non_positive_limit(self):
        with self.assertRaises(EvaluationError):
            evaluate_budget(self.user, self.preferences, self.make_budget("10", limit="0"), NOW)

    def test_malformed_month(self):
        with self.assertRaises(EvaluationError):
            evaluate_budget(
                self.user, self.preferences, self.make_budget("950", month="March"), NOW
            )


class LoanEvaluatorTests(EvaluatorTestCase):
    def make_loan(self, **kwargs):
        fields = {
            "pk": 20,
            "user": self.user,
            "name": "Car Loan",
            "initial_amount": Decimal("12000"),
            "current_balance": Decimal("8000"),
            "monthly_payment": Decimal("350"),
            "start_date": date(2024, 1, 15),
        }
        fields.update(kwargs)
        return Loan(**fields)

    def test_due_within_window(self):
        candidate = evaluate_loan(self.user, self.preferences, self.make_loan(), NOW)

        self.assertEqual(candidate.notification_type, Notification.NotificationType.LOAN_PAYMENT_DUE)
        self.assertEqual(candidate.period_key, "2025-03-15")
        self.assertEqual(candidate.priority, Notification.Priority.MEDIUM)
        self.assertIn("due in 2 days", candidate.message)

    def test_due_tomorrow_is_high_priority(self):
        candidate = evaluate_loan(
            self.user, self.preferences, self.make_loan(), at(date(2025, 3, 14))
        )
        self.assertEqual(candidate.priority, Notification.Priority.HIGH)

    def test_outside_window(self):
        self.assertIsNone(
            evaluate_loan(self.user, self.preferences, self.make_loan(), at(date(2025, 3, 5)))
        )

    def test_paid_this_cycle(self):
        loan = self.make_loan(last_payment_date=date(2025, 3, 10))
        self.assertIsNone(evaluate_loan(self.user, self.preferences, loan, NOW))

    def test_late_payment_settles_previous_cycle_only(self):
        loan = self.make_loan(last_payment_date=date(2025, 3, 20))
        candidate = evaluate_loan(self.user, self.preferences, loan, at(date(2025, 4, 13)))

        self.assertEqual(candidate.period_key, "2025-04-15")

    def test_payment_from_previous_cycle_does_not_count(self):
        loan = self.make_loan(last_payment_date=date(2025, 2, 15))
        self.assertIsNotNone(evaluate_loan(self.user, self.preferences, loan, NOW))

    def test_paid_off_loan(self):
        loan = self.make_loan(current_balance=Decimal("0"))
        self.assertIsNone(evaluate_loan(self.user, self.preferences, loan, NOW))

    def test_muted_payment_reminders(self):
        self.preferences.email_payment_reminders = False
        self.preferences.push_payment_reminders = False
        self.assertIsNone(evaluate_loan(self.user, self.preferences, self.make_loan(), NOW))

    def test_invalid_monthly_payment(self):
        with self.assertRaises(EvaluationError):
            evaluate_loan(
                self.user, self.preferences, self.make_loan(monthly_payment=Decimal("0")), NOW
            )


class RecurringExpenseEvaluatorTests(EvaluatorTestCase):
    def make_expense(self, **kwargs):
        fields = {
            "pk": 30,
            "user": self.user,
            "name": "Rent",
            "amount": Decimal("1200"),
            "category": "Housing",
            "frequency": RecurringExpense.Frequency.MONTHLY,
            "next_due_date": date(2025, 3, 15),
            "reminder_days": 3,
        }
        fields.update(kwargs)
        return RecurringExpense(**fields)

    def test_inside_reminder_window(self):
        candidate = evaluate_recurring_expense(
            self.user, self.preferences, self.make_expense(), NOW
        )

        self.assertEqual(candidate.period_key, "2025-03-15")
        self.assertEqual(candidate.priority, Notification.Priority.MEDIUM)
        self.assertIsNone(candidate.transaction_request)
        self.assertTrue(candidate.notify)

    def test_outside_reminder_window(self):
        expense = self.make_expense(reminder_days=1)
        self.assertIsNone(evaluate_recurring_expense(self.user, self.preferences, expense, NOW))

    def test_auto_create_when_due(self):
        expense = self.make_expense(next_due_date=date(2025, 3, 13), auto_create_transaction=True)
        candidate = evaluate_recurring_expense(self.user, self.preferences, expense, NOW)

        self.assertEqual(candidate.priority, Notification.Priority.HIGH)
        request = candidate.transaction_request
        self.assertEqual(request.recurring_expense_id, 30)
        self.assertEqual(request.due_date, date(2025, 3, 13))
        self.assertEqual(request.amount, Decimal("1200"))
        self.assertEqual(request.category, "Housing")

    def test_auto_create_waits_for_due_date(self):
        expense = self.make_expense(auto_create_transaction=True)
        candidate = evaluate_recurring_expense(self.user, self.preferences, expense, NOW)
        self.assertIsNone(candidate.transaction_request)

    def test_overdue(self):
        expense = self.make_expense(next_due_date=date(2025, 3, 10))
        candidate = evaluate_recurring_expense(self.user, self.preferences, expense, NOW)

        self.assertIn("overdue by 3 days", candidate.message)
        self.assertEqual(candidate.priority, Notification.Priority.HIGH)

    def test_muted_still_requests_transaction(self):
        self.preferences.email_payment_reminders = False
        self.preferences.push_payment_reminders = False
        expense = self.make_expense(next_due_date=date(2025, 3, 13), auto_create_transaction=True)
        candidate = evaluate_recurring_expense(self.user, self.preferences, expense, NOW)

        self.assertFalse(candidate.notify)
        self.assertIsNotNone(candidate.transaction_request)

    def test_muted_without_transaction(self):
        self.preferences.email_payment_reminders = False
        self.preferences.push_payment_reminders = False
        self.assertIsNone(
            evaluate_recurring_expense(self.user, self.preferences, self.make_expense(), NOW)
        )

    def test_inactive_expense(self):
        expense = self.make_expense(is_active=False)
        self.assertIsNone(evaluate_recurring_expense(self.user, self.preferences, expense, NOW))


class SavingsGoalEvaluatorTests(EvaluatorTestCase):
    def make_goal(self, current, **kwargs):
        fields = {
            "pk": 40,
            "user": self.user,
            "name": "Holiday",
            "target_amount": Decimal("1000"),
            "current_amount": Decimal(current),
        }
        fields.update(kwargs)
        return SavingsGoal(**fields)

    def test_achieved(self):
        candidate = evaluate_savings_goal(self.user, self.preferences, self.make_goal("1000"), NOW)

        self.assertEqual(candidate.notification_type, Notification.NotificationType.GOAL_ACHIEVED)
        self.assertEqual(candidate.period_key, "achieved")
        self.assertEqual(candidate.source_updates, {"achieved_at": NOW})
        self.assertEqual(candidate.source_field, "savings_goal")

    def test_already_achieved(self):
        goal = self.make_goal("1200", achieved_at=NOW)
        self.assertIsNone(evaluate_savings_goal(self.user, self.preferences, goal, NOW))

    def test_every_crossed_milestone(self):
        candidates = evaluate_savings_goal(self.user, self.preferences, self.make_goal("600"), NOW)

        self.assertEqual([c.period_key for c in candidates], ["milestone-25", "milestone-50"])
        for candidate in candidates:
            self.assertEqual(candidate.notification_type, Notification.NotificationType.GOAL_MILESTONE)
            self.assertEqual(candidate.priority, Notification.Priority.LOW)

    def test_no_milestone_yet(self):
        self.assertIsNone(
            evaluate_savings_goal(self.user, self.preferences, self.make_goal("100"), NOW)
        )

    def test_invalid_target(self):
        goal = self.make_goal("10", target_amount=Decimal("0"))
        with self.assertRaises(EvaluationError):
            evaluate_savings_goal(self.user, self.preferences, goal, NOW)

    def test_monthly_reminder(self):
        goal = self.make_goal(
            "100",
            monthly_contribution=Decimal("200"),
            last_contribution_date=date(2025, 2, 10),
        )
        candidate = evaluate_savings_reminder(self.user, self.preferences, goal, NOW)

        self.assertEqual(candidate.notification_type, Notification.NotificationType.SAVINGS_REMINDER)
        self.assertEqual(candidate.period_key, "2025-03")

    def test_no_reminder_after_contribution_this_month(self):
        goal = self.make_goal(
            "100",
            monthly_contribution=Decimal("200"),
            last_contribution_date=date(2025, 3, 2),
        )
        self.assertIsNone(evaluate_savings_reminder(self.user, self.preferences, goal, NOW))

    def test_no_reminder_without_planned_contribution(self):
        goal = self.make_goal("100", monthly_contribution=Decimal("0"))
        self.assertIsNone(evaluate_savings_reminder(self.user, self.preferences, goal, NOW))
