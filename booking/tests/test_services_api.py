# booking/tests/test_services_api.py
#
# Covers GET/POST /api/services and PATCH /api/services/{id}:
# - required-field validation (priceCents=0 allowed, omitted rejected)
# - sparse patch leaves untouched fields alone
# - staffIds replace / clear / omit semantics
# - every failure is a 400 envelope

from django.test import TestCase
from rest_framework.test import APIClient

from booking.models import Business, Service, ServiceStaff, StaffProfile, User
from booking.services.bootstrap import BootstrapManager


def make_staff(business, email, display_name, sort_order=0):
    user = User.objects.create(business=business, email=email, role=User.Role.STAFF)
    return StaffProfile.objects.create(
        business=business, user=user, display_name=display_name, sort_order=sort_order
    )


class ServiceCreateTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.business = BootstrapManager().bootstrap()["business"]
        self.alice = make_staff(self.business, "alice@example.com", "Alice")

    def test_create_with_defaults(self):
        resp = self.client.post(
            "/api/services",
            data={"name": "Haircut", "durationMin": 30, "priceCents": 3500},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)

        service = resp.json()["service"]
        self.assertEqual(service["name"], "Haircut")
        self.assertEqual(service["durationMin"], 30)
        self.assertEqual(service["priceCents"], 3500)
        self.assertEqual(service["depositCents"], 0)
        self.assertEqual(service["bufferBeforeMin"], 0)
        self.assertEqual(service["bufferAfterMin"], 0)
        self.assertTrue(service["isActive"])
        self.assertTrue(service["isPublic"])
        self.assertIsNone(service["description"])
        self.assertEqual(service["staffLinks"], [])
        self.assertEqual(service["businessId"], str(self.business.pk))

    def test_zero_price_is_a_valid_price(self):
        resp = self.client.post(
            "/api/services",
            data={"name": "Consultation", "durationMin": 15, "priceCents": 0},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["service"]["priceCents"], 0)

    def test_missing_price_is_rejected(self):
        resp = self.client.post(
            "/api/services",
            data={"name": "Haircut", "durationMin": 30},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"ok": False, "error": "name, durationMin, priceCents required"})
        self.assertEqual(Service.objects.count(), 0)

    def test_missing_name_or_duration_is_rejected(self):
        for body in ({"durationMin": 30, "priceCents": 100}, {"name": "Haircut", "priceCents": 100}):
            resp = self.client.post("/api/services", data=body, format="json")
            self.assertEqual(resp.status_code, 400)
            self.assertFalse(resp.json()["ok"])

    def test_negative_price_is_rejected(self):
        resp = self.client.post(
            "/api/services",
            data={"name": "Haircut", "durationMin": 30, "priceCents": -1},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("priceCents", resp.json()["error"])

    def test_create_links_staff(self):
        resp = self.client.post(
            "/api/services",
            data={
                "name": "Haircut",
                "durationMin": 30,
                "priceCents": 3500,
                "depositCents": 500,
                "bufferAfterMin": 10,
                "isPublic": False,
                "staffIds": [str(self.alice.pk)],
            },
            format="json",
        )
        self.assertEqual(resp.status_code, 200)

        service = resp.json()["service"]
        self.assertEqual(service["depositCents"], 500)
        self.assertEqual(service["bufferAfterMin"], 10)
        self.assertFalse(service["isPublic"])
        self.assertEqual(len(service["staffLinks"]), 1)
        link = service["staffLinks"][0]
        self.assertEqual(link["staffId"], str(self.alice.pk))
        self.assertEqual(link["staff"]["displayName"], "Alice")
        self.assertEqual(link["businessId"], str(self.business.pk))

    def test_unknown_staff_id_rolls_back_the_create(self):
        resp = self.client.post(
            "/api/services",
            data={
                "name": "Haircut",
                "durationMin": 30,
                "priceCents": 3500,
                "staffIds": ["00000000-0000-0000-0000-000000000000"],
            },
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Unknown staff id", resp.json()["error"])
        self.assertEqual(Service.objects.count(), 0)

    def test_non_object_body_is_rejected(self):
        resp = self.client.post("/api/services", data=["Haircut"], format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["ok"])


class ServiceListTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_no_business_is_a_400(self):
        resp = self.client.get("/api/services")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"ok": False, "error": "No business found (run bootstrap)"})

    def test_newest_first_with_staff_links(self):
        business = BootstrapManager().bootstrap()["business"]
        alice = make_staff(business, "alice@example.com", "Alice")
        older = Service.objects.create(business=business, name="Older", duration_min=30, price_cents=100)
        newer = Service.objects.create(business=business, name="Newer", duration_min=30, price_cents=100)
        ServiceStaff.objects.create(business=business, service=older, staff=alice)

        body = self.client.get("/api/services").json()
        self.assertTrue(body["ok"])
        self.assertEqual([s["id"] for s in body["services"]], [str(newer.pk), str(older.pk)])
        self.assertEqual(body["services"][0]["staffLinks"], [])
        self.assertEqual(body["services"][1]["staffLinks"][0]["staff"]["displayName"], "Alice")


class ServicePatchTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.business = BootstrapManager().bootstrap()["business"]
        self.alice = make_staff(self.business, "alice@example.com", "Alice")
        self.bob = make_staff(self.business, "bob@example.com", "Bob")
        self.carol = make_staff(self.business, "carol@example.com", "Carol")
        self.service = Service.objects.create(
            business=self.business,
            name="Haircut",
            description="Cut and style",
            duration_min=30,
            price_cents=3500,
            deposit_cents=500,
            buffer_before_min=5,
            buffer_after_min=10,
        )
        ServiceStaff.objects.create(business=self.business, service=self.service, staff=self.carol)
        self.url = f"/api/services/{self.service.pk}"

    def linked_staff(self):
        return set(
            ServiceStaff.objects.filter(service=self.service).values_list("staff_id", flat=True)
        )

    def test_patch_one_field_leaves_the_rest(self):
        resp = self.client.patch(self.url, data={"isActive": False}, format="json")
        self.assertEqual(resp.status_code, 200)

        self.service.refresh_from_db()
        self.assertFalse(self.service.is_active)
        self.assertEqual(self.service.name, "Haircut")
        self.assertEqual(self.service.description, "Cut and style")
        self.assertEqual(self.service.duration_min, 30)
        self.assertEqual(self.service.price_cents, 3500)
        self.assertEqual(self.service.deposit_cents, 500)
        self.assertEqual(self.service.buffer_before_min, 5)
        self.assertEqual(self.service.buffer_after_min, 10)
        self.assertTrue(self.service.is_public)
        self.assertEqual(self.linked_staff(), {self.carol.pk})

    def test_each_field_alone_leaves_the_others(self):
        new_values = {
            "name": ("name", "Trim"),
            "description": ("description", None),
            "durationMin": ("duration_min", 45),
            "priceCents": ("price_cents", 0),
            "depositCents": ("deposit_cents", 0),
            "bufferBeforeMin": ("buffer_before_min", 0),
            "bufferAfterMin": ("buffer_after_min", 0),
            "isActive": ("is_active", False),
            "isPublic": ("is_public", False),
        }
        for key, (field, value) in new_values.items():
            with self.subTest(field=key):
                self.service.refresh_from_db()
                before = {f: getattr(self.service, f) for f, _ in new_values.values()}

                resp = self.client.patch(self.url, data={key: value}, format="json")
                self.assertEqual(resp.status_code, 200)

                self.service.refresh_from_db()
                self.assertEqual(getattr(self.service, field), value)
                for other, _ in new_values.values():
                    if other != field:
                        self.assertEqual(getattr(self.service, other), before[other])
                self.assertEqual(self.linked_staff(), {self.carol.pk})

    def test_patch_several_fields(self):
        resp = self.client.patch(
            self.url,
            data={"name": "Long Haircut", "durationMin": 45, "priceCents": 0, "description": None},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)

        service = resp.json()["service"]
        self.assertEqual(service["name"], "Long Haircut")
        self.assertEqual(service["durationMin"], 45)
        self.assertEqual(service["priceCents"], 0)
        self.assertIsNone(service["description"])
        self.assertEqual(service["depositCents"], 500)

    def test_staff_ids_replace_existing_links(self):
        resp = self.client.patch(
            self.url,
            data={"staffIds": [str(self.alice.pk), str(self.bob.pk)]},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.linked_staff(), {self.alice.pk, self.bob.pk})

        returned = {link["staffId"] for link in resp.json()["service"]["staffLinks"]}
        self.assertEqual(returned, {str(self.alice.pk), str(self.bob.pk)})

    def test_empty_staff_ids_clear_links(self):
        resp = self.client.patch(self.url, data={"staffIds": []}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.linked_staff(), set())
        self.assertEqual(resp.json()["service"]["staffLinks"], [])

    def test_omitted_or_null_staff_ids_keep_links(self):
        self.client.patch(self.url, data={"name": "Trim"}, format="json")
        self.assertEqual(self.linked_staff(), {self.carol.pk})

        self.client.patch(self.url, data={"staffIds": None}, format="json")
        self.assertEqual(self.linked_staff(), {self.carol.pk})

    def test_duplicate_staff_ids_collapse(self):
        resp = self.client.patch(
            self.url,
            data={"staffIds": [str(self.alice.pk), str(self.alice.pk)]},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(ServiceStaff.objects.filter(service=self.service).count(), 1)

    def test_field_patch_and_links_are_atomic(self):
        """A bad staff id must also roll back the field patch sent with it."""
        resp = self.client.patch(
            self.url,
            data={"name": "Should not stick", "staffIds": [str(self.alice.pk), "not-a-uuid"]},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

        self.service.refresh_from_db()
        self.assertEqual(self.service.name, "Haircut")
        self.assertEqual(self.linked_staff(), {self.carol.pk})

    def test_staff_of_another_business_is_rejected(self):
        other = Business.objects.create(name="Elsewhere")
        stranger = make_staff(other, "eve@example.com", "Eve")

        resp = self.client.patch(self.url, data={"staffIds": [str(stranger.pk)]}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn(str(stranger.pk), resp.json()["error"])
        self.assertEqual(self.linked_staff(), {self.carol.pk})

    def test_unknown_service_is_a_400(self):
        resp = self.client.patch(
            "/api/services/00000000-0000-0000-0000-000000000000",
            data={"name": "x"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"ok": False, "error": "Service not found"})

    def test_malformed_service_id_is_a_400(self):
        resp = self.client.patch("/api/services/abc", data={"name": "x"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["ok"])

    def test_invalid_duration_is_rejected(self):
        resp = self.client.patch(self.url, data={"durationMin": 0}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("durationMin", resp.json()["error"])
        self.service.refresh_from_db()
        self.assertEqual(self.service.duration_min, 30)
