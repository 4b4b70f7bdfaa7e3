"""
bootstrap.py
------------
Create the demo business, owner user and owner staff profile from the
command line. Same rules as POST /api/bootstrap: refused in production,
no-op when a business already exists.

Usage:
    python manage.py bootstrap
"""

from django.core.management.base import BaseCommand, CommandError

from booking.errors import BookingError
from booking.services.bootstrap import BootstrapManager


class Command(BaseCommand):
    help = "Create the demo business and its owner (development only)."

    def handle(self, *args, **options):
        try:
            result = BootstrapManager().bootstrap()
        except BookingError as exc:
            raise CommandError(exc.message) from exc

        business = result["business"]
        if not result["created"]:
            self.stdout.write(f"Already bootstrapped. Business={business.pk}")
            return

        self.stdout.write(
            self.style.SUCCESS(
                f"Bootstrap complete. Business={business.pk} Owner={result['owner'].email}"
            )
        )
