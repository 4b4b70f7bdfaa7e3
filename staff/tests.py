from unittest import mock

from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APIClient

from booking.models import StaffProfile, User
from booking.services.bootstrap import BootstrapManager


class StaffApiTests(TestCase):
    """GET/POST /api/staff and PATCH /api/staff/{id}."""

    def setUp(self):
        self.client = APIClient()
        self.business = BootstrapManager().bootstrap()["business"]

    def create(self, **body):
        return self.client.post("/api/staff", data=body, format="json")

    def test_create_staff_returns_user_with_profile(self):
        resp = self.create(email="alice@example.com", displayName="Alice", phone="5551234")
        self.assertEqual(resp.status_code, 200)

        user = resp.json()["user"]
        self.assertEqual(user["email"], "alice@example.com")
        self.assertEqual(user["role"], "STAFF")
        self.assertEqual(user["staff"]["displayName"], "Alice")
        self.assertEqual(user["staff"]["phone"], "5551234")
        self.assertTrue(user["staff"]["isActive"])
        self.assertEqual(user["staff"]["sortOrder"], 0)

        profile = StaffProfile.objects.get(pk=user["staff"]["id"])
        self.assertEqual(profile.business, self.business)
        self.assertEqual(str(profile.user_id), user["id"])

    def test_phone_is_optional(self):
        resp = self.create(email="bob@example.com", displayName="Bob")
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["user"]["staff"]["phone"])

    def test_email_and_display_name_required(self):
        for body in ({"displayName": "Alice"}, {"email": "alice@example.com"}, {"email": "", "displayName": "A"}):
            resp = self.create(**body)
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json(), {"ok": False, "error": "email and displayName required"})
        # Only the bootstrap owner exists
        self.assertEqual(User.objects.count(), 1)

    def test_duplicate_email_is_a_storage_error(self):
        self.create(email="alice@example.com", displayName="Alice")
        resp = self.create(email="alice@example.com", displayName="Alice Again")

        self.assertEqual(resp.status_code, 500)
        self.assertFalse(resp.json()["ok"])
        self.assertTrue(resp.json()["error"])
        # Nothing half-created: one Alice user, one Alice profile
        self.assertEqual(User.objects.filter(email="alice@example.com").count(), 1)
        self.assertEqual(StaffProfile.objects.filter(display_name__startswith="Alice").count(), 1)

    def test_profile_failure_rolls_back_the_user(self):
        with mock.patch.object(StaffProfile.objects, "create", side_effect=IntegrityError("profile insert failed")):
            resp = self.create(email="zed@example.com", displayName="Zed")

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"ok": False, "error": "profile insert failed"})
        self.assertFalse(User.objects.filter(email="zed@example.com").exists())

    def test_list_orders_by_sort_order(self):
        owner = StaffProfile.objects.get(display_name="Owner")
        owner.sort_order = 5
        owner.save()
        self.create(email="alice@example.com", displayName="Alice")
        bob_id = self.create(email="bob@example.com", displayName="Bob").json()["user"]["staff"]["id"]
        self.client.patch(f"/api/staff/{bob_id}", data={"sortOrder": -1}, format="json")

        body = self.client.get("/api/staff").json()
        self.assertTrue(body["ok"])
        self.assertEqual([s["displayName"] for s in body["staff"]], ["Bob", "Alice", "Owner"])


class StaffPatchTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.business = BootstrapManager().bootstrap()["business"]
        user = User.objects.create(business=self.business, email="alice@example.com")
        self.staff = StaffProfile.objects.create(
            business=self.business, user=user, display_name="Alice", phone="5551234", sort_order=3
        )
        self.url = f"/api/staff/{self.staff.pk}"

    def test_null_phone_clears_it(self):
        resp = self.client.patch(self.url, data={"phone": None}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["staff"]["phone"])

        self.staff.refresh_from_db()
        self.assertIsNone(self.staff.phone)

    def test_empty_patch_changes_nothing(self):
        resp = self.client.patch(self.url, data={}, format="json")
        self.assertEqual(resp.status_code, 200)

        self.staff.refresh_from_db()
        self.assertEqual(self.staff.phone, "5551234")
        self.assertEqual(self.staff.display_name, "Alice")
        self.assertTrue(self.staff.is_active)
        self.assertEqual(self.staff.sort_order, 3)

    def test_deactivate_leaves_other_fields(self):
        resp = self.client.patch(self.url, data={"isActive": False}, format="json")
        self.assertEqual(resp.status_code, 200)

        staff = resp.json()["staff"]
        self.assertFalse(staff["isActive"])
        self.assertEqual(staff["displayName"], "Alice")
        self.assertEqual(staff["phone"], "5551234")
        self.assertEqual(staff["sortOrder"], 3)

    def test_rename_and_reorder(self):
        self.client.patch(self.url, data={"displayName": "Alicia", "sortOrder": 1}, format="json")
        self.staff.refresh_from_db()
        self.assertEqual(self.staff.display_name, "Alicia")
        self.assertEqual(self.staff.sort_order, 1)
        self.assertEqual(self.staff.phone, "5551234")

    def test_each_field_alone_leaves_the_others(self):
        new_values = {
            "displayName": ("display_name", "Alicia"),
            "phone": ("phone", None),
            "isActive": ("is_active", False),
            "sortOrder": ("sort_order", 7),
        }
        for key, (field, value) in new_values.items():
            with self.subTest(field=key):
                self.staff.refresh_from_db()
                before = {f: getattr(self.staff, f) for f, _ in new_values.values()}

                resp = self.client.patch(self.url, data={key: value}, format="json")
                self.assertEqual(resp.status_code, 200)

                self.staff.refresh_from_db()
                self.assertEqual(getattr(self.staff, field), value)
                for other, _ in new_values.values():
                    if other != field:
                        self.assertEqual(getattr(self.staff, other), before[other])

    def test_unknown_id_is_a_404(self):
        resp = self.client.patch(
            "/api/staff/00000000-0000-0000-0000-000000000000",
            data={"isActive": False},
            format="json",
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"ok": False, "error": "Staff not found"})

    def test_bad_value_is_a_400(self):
        resp = self.client.patch(self.url, data={"sortOrder": "first"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("sortOrder", resp.json()["error"])


class StaffWithoutBusinessTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_list_without_business_is_a_400(self):
        resp = self.client.get("/api/staff")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"ok": False, "error": "No business found (run bootstrap)"})

    def test_create_without_business_is_a_400(self):
        resp = self.client.post(
            "/api/staff", data={"email": "a@example.com", "displayName": "A"}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["ok"])
