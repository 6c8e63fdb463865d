from django.contrib.auth.models import User
from django.test import TestCase
from ninja.testing import TestClient

from config.api import api
from core.models import Notification, NotificationPreferences
from features.auth.utils import create_token_pair


class ApiTestCase(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password")
        self.other = User.objects.create_user(username="other", password="password")
        self.client = TestClient(api)
        self.headers = self.auth_headers(self.user)

    def auth_headers(self, user):
        token = create_token_pair(user)["access"]
        return {"Authorization": f"Bearer {token}"}

    def notify(self, user=None, **kwargs):
        fields = {
            "user": user or self.user,
            "title": "Heads up",
            "message": "Something happened",
        }
        fields.update(kwargs)
        return Notification.objects.create(**fields)


class NotificationInboxTests(ApiTestCase):
    def test_requires_authentication(self):
        response = self.client.get("/notifications/")
        self.assertEqual(response.status_code, 401)

    def test_list_orders_by_priority(self):
        self.notify(title="low", priority=Notification.Priority.LOW)
        self.notify(title="high", priority=Notification.Priority.HIGH)
        self.notify(title="medium", priority=Notification.Priority.MEDIUM)
        self.notify(user=self.other, title="not mine")

        response = self.client.get("/notifications/", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        body = response.json()["data"]
        self.assertEqual([n["title"] for n in body["data"]], ["high", "medium", "low"])
        self.assertEqual(body["unread_count"], 3)
        self.assertEqual(body["pagination"]["total"], 3)
        self.assertEqual(body["pagination"]["total_pages"], 1)

    def test_filters_and_pagination(self):
        self.notify(notification_type=Notification.NotificationType.BUDGET_THRESHOLD)
        self.notify(notification_type=Notification.NotificationType.BUDGET_THRESHOLD, is_read=True)
        self.notify(notification_type=Notification.NotificationType.GOAL_MILESTONE)

        response = self.client.get(
            "/notifications/?type=budget-threshold&unread_only=true", headers=self.headers
        )
        self.assertEqual(response.json()["data"]["pagination"]["total"], 1)

        response = self.client.get("/notifications/?page=2&limit=2", headers=self.headers)
        body = response.json()["data"]
        self.assertEqual(len(body["data"]), 1)
        self.assertEqual(body["pagination"]["total_pages"], 2)

    def test_mark_as_read(self):
        notification = self.notify()

        response = self.client.post(
            f"/notifications/{notification.id}/read", headers=self.headers
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["data"]["is_read"])
        notification.refresh_from_db()
        self.assertIsNotNone(notification.read_at)

    def test_cannot_read_someone_elses_notification(self):
        notification = self.notify(user=self.other)

        response = self.client.post(
            f"/notifications/{notification.id}/read", headers=self.headers
        )

        self.assertEqual(response.status_code, 404)

    def test_mark_all_read(self):
        self.notify()
        self.notify()
        self.notify(user=self.other)

        response = self.client.post("/notifications/mark-all-read", headers=self.headers)

        self.assertEqual(response.json()["data"]["updated_count"], 2)
        self.assertEqual(Notification.objects.filter(is_read=False).count(), 1)

    def test_create_notification(self):
        response = self.client.post(
            "/notifications/",
            json={"title": "Reminder", "message": "Review your budget", "priority": "high"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        notification = Notification.objects.get(user=self.user)
        self.assertEqual(notification.notification_type, Notification.NotificationType.INFO)
        self.assertEqual(notification.priority, Notification.Priority.HIGH)

    def test_create_rejects_unknown_type(self):
        response = self.client.post(
            "/notifications/",
            json={"title": "x", "message": "y", "notification_type": "lottery-win"},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 400)
        self.assertFalse(Notification.objects.exists())


class PreferencesApiTests(ApiTestCase):
    def test_get_creates_defaults(self):
        response = self.client.get("/notifications/preferences", headers=self.headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["budget_threshold"], 80)
        self.assertFalse(data["push_budget_alerts"])
        self.assertTrue(NotificationPreferences.objects.filter(user=self.user).exists())

    def test_partial_update(self):
        response = self.client.put(
            "/notifications/preferences",
            json={"budget_threshold": 90, "push_goal_reminders": True},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 200)
        preferences = NotificationPreferences.objects.get(user=self.user)
        self.assertEqual(preferences.budget_threshold, 90)
        self.assertTrue(preferences.push_goal_reminders)
        self.assertTrue(preferences.email_budget_alerts)

    def test_rejects_out_of_range_threshold(self):
        response = self.client.put(
            "/notifications/preferences",
            json={"budget_threshold": 150},
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 422)
        self.assertFalse(NotificationPreferences.objects.exists())


class RunChecksApiTests(ApiTestCase):
    def test_staff_only(self):
        response = self.client.post("/notifications/check", headers=self.headers)
        self.assertEqual(response.status_code, 403)

    def test_staff_runs_checks(self):
        staff = User.objects.create_user(username="admin", password="password", is_staff=True)

        response = self.client.post("/notifications/check", headers=self.auth_headers(staff))

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertFalse(data["aborted"])
        self.assertEqual(data["created"], 0)


class AuthApiTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="testuser", password="password")
        self.client = TestClient(api)

    def test_login(self):
        response = self.client.post(
            "/auth/login", json={"username": "testuser", "password": "password"}
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["user_id"], self.user.id)
        self.assertIn("access", body)

    def test_login_rejects_bad_password(self):
        response = self.client.post(
            "/auth/login", json={"username": "testuser", "password": "wrong"}
        )
        self.assertEqual(response.status_code, 401)

    def test_refresh(self):
        refresh = create_token_pair(self.user)["refresh"]

        response = self.client.post("/auth/refresh", json={"refresh": refresh})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["username"], "testuser")

    def test_refresh_rejects_garbage(self):
        response = self.client.post("/auth/refresh", json={"refresh": "not-a-token"})
        self.assertEqual(response.status_code, 401)
