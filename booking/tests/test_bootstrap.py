# booking/tests/test_bootstrap.py

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from booking.models import Business, StaffProfile, User


class BootstrapApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_first_call_creates_business_owner_and_profile(self):
        resp = self.client.post("/api/bootstrap", format="json")
        self.assertEqual(resp.status_code, 200)

        body = resp.json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["business"]["name"], "Demo Business")
        self.assertEqual(body["business"]["timezone"], "America/Chicago")
        self.assertEqual(body["owner"]["email"], "owner@example.com")
        self.assertEqual(body["owner"]["role"], "OWNER")
        self.assertEqual(body["owner"]["staff"]["displayName"], "Owner")

        self.assertEqual(Business.objects.count(), 1)
        self.assertEqual(User.objects.filter(role=User.Role.OWNER).count(), 1)
        self.assertEqual(StaffProfile.objects.count(), 1)

    def test_second_call_is_a_noop_reporting_first_business(self):
        """Idempotence: one Business, and the second call echoes its id."""
        first = self.client.post("/api/bootstrap", format="json").json()
        second = self.client.post("/api/bootstrap", format="json").json()

        self.assertEqual(Business.objects.count(), 1)
        self.assertTrue(second["ok"])
        self.assertEqual(second["message"], "Already bootstrapped")
        self.assertEqual(second["businessId"], first["business"]["id"])
        self.assertEqual(User.objects.count(), 1)

    def test_trailing_slash_is_accepted(self):
        resp = self.client.post("/api/bootstrap/", format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["ok"])

    @override_settings(APP_ENV="production")
    def test_refused_in_production(self):
        resp = self.client.post("/api/bootstrap", format="json")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"ok": False, "error": "Not allowed"})
        self.assertEqual(Business.objects.count(), 0)

    @override_settings(BOOTSTRAP_BUSINESS_NAME="Corner Salon", BOOTSTRAP_TIMEZONE="Europe/Lisbon")
    def test_defaults_come_from_settings(self):
        body = self.client.post("/api/bootstrap", format="json").json()
        self.assertEqual(body["business"]["name"], "Corner Salon")
        self.assertEqual(body["business"]["timezone"], "Europe/Lisbon")

    def test_get_is_not_allowed(self):
        resp = self.client.get("/api/bootstrap")
        self.assertEqual(resp.status_code, 405)
        self.assertFalse(resp.json()["ok"])


class DiagnosticsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_lists_businesses(self):
        self.client.post("/api/bootstrap", format="json")
        body = self.client.get("/api/test-db").json()
        self.assertTrue(body["ok"])
        self.assertEqual(len(body["businesses"]), 1)
        self.assertEqual(body["businesses"][0]["name"], "Demo Business")

    def test_empty_database_is_still_ok(self):
        body = self.client.get("/api/test-db").json()
        self.assertEqual(body, {"ok": True, "businesses": []})

    @override_settings(APP_ENV="production")
    def test_refused_in_production(self):
        resp = self.client.get("/api/test-db")
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(resp.json()["ok"])
