from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.test import TestCase, override_settings

from booking.models import Business, Service, ServiceStaff, StaffProfile


class BootstrapCommandTests(TestCase):
    def test_creates_then_reports(self):
        out = StringIO()
        call_command("bootstrap", stdout=out)
        self.assertIn("Bootstrap complete", out.getvalue())

        out = StringIO()
        call_command("bootstrap", stdout=out)
        self.assertIn("Already bootstrapped", out.getvalue())
        self.assertEqual(Business.objects.count(), 1)

    @override_settings(APP_ENV="production")
    def test_refused_in_production(self):
        with self.assertRaises(CommandError):
            call_command("bootstrap", stdout=StringIO())
        self.assertEqual(Business.objects.count(), 0)


class SeedServicesCommandTests(TestCase):
    def test_needs_a_business(self):
        with self.assertRaises(CommandError):
            call_command("seed_services", stdout=StringIO())

    def test_seed_is_an_upsert(self):
        call_command("bootstrap", stdout=StringIO())
        call_command("seed_services", stdout=StringIO())
        count = Service.objects.count()
        self.assertGreater(count, 0)

        haircut = Service.objects.get(name="Haircut")
        self.assertEqual(haircut.price_cents, 3500)
        haircut.price_cents = 1
        haircut.save()

        out = StringIO()
        call_command("seed_services", stdout=out)
        self.assertEqual(Service.objects.count(), count)
        self.assertIn("Updated=1", out.getvalue())
        haircut.refresh_from_db()
        self.assertEqual(haircut.price_cents, 3500)

    def test_link_staff(self):
        call_command("bootstrap", stdout=StringIO())
        call_command("seed_services", "--link-staff", stdout=StringIO())
        owner = StaffProfile.objects.get()
        self.assertEqual(
            ServiceStaff.objects.filter(staff=owner).count(),
            Service.objects.count(),
        )

    def test_database_failure_becomes_a_command_error(self):
        call_command("bootstrap", stdout=StringIO())
        with mock.patch.object(Service.objects, "get_or_create", side_effect=DatabaseError("disk full")):
            with self.assertRaisesMessage(CommandError, "disk full"):
                call_command("seed_services", stdout=StringIO())
        self.assertEqual(Service.objects.count(), 0)
