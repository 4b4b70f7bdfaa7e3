"""
seed_services.py
----------------
Seeds (creates or updates) a demo service catalog for the current business.
You can run this any time; it will upsert by name within the business.
Prices are written in dollars below and stored as cents.

Usage:
    python manage.py seed_services
    python manage.py seed_services --link-staff   # make every active staff member eligible
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from booking.errors import BookingError, storage_errors
from booking.models import Service, StaffProfile
from booking.services.bootstrap import ensure_dev_environment
from booking.services.catalog_manager import ServiceCatalogManager
from booking.services.price_display import PriceDisplayService
from booking.services.tenant import resolve_business


CATALOG = [
    {"name": "Haircut",             "description": "Cut and style",        "duration_min": 30,  "price": "35.00", "deposit": "0.00"},
    {"name": "Beard Trim",          "description": "Shape and line-up",    "duration_min": 15,  "price": "15.00", "deposit": "0.00"},
    {"name": "Color - Full",        "description": "Single-process color", "duration_min": 120, "price": "95.00", "deposit": "20.00", "buffer_after_min": 15},
    {"name": "Blow-dry",            "description": "Wash and blow-dry",    "duration_min": 45,  "price": "30.00", "deposit": "0.00"},
    {"name": "Consultation",        "description": "Free first visit",     "duration_min": 15,  "price": "0.00",  "deposit": "0.00", "is_public": False},
]


class Command(BaseCommand):
    help = "Seed or update the demo service catalog for the current business."

    def add_arguments(self, parser):
        parser.add_argument(
            "--link-staff",
            action="store_true",
            help="Replace each seeded service's staff links with every active staff member.",
        )

    def handle(self, *args, **options):
        try:
            ensure_dev_environment()
            business = resolve_business()
        except BookingError as exc:
            raise CommandError(exc.message) from exc

        catalog = ServiceCatalogManager(business)
        staff_ids = list(
            StaffProfile.objects.filter(business=business, is_active=True).values_list("pk", flat=True)
        )
        created = 0
        updated = 0

        try:
            with storage_errors(), transaction.atomic():
                for item in CATALOG:
                    values = {
                        "description": item["description"],
                        "duration_min": item["duration_min"],
                        "price_cents": PriceDisplayService.dollars_to_cents(item["price"]),
                        "deposit_cents": PriceDisplayService.dollars_to_cents(item["deposit"]),
                        "buffer_before_min": item.get("buffer_before_min", 0),
                        "buffer_after_min": item.get("buffer_after_min", 0),
                        "is_active": True,
                        "is_public": item.get("is_public", True),
                    }
                    svc, is_created = Service.objects.get_or_create(
                        business=business,
                        name=item["name"],
                        defaults=values,
                    )
                    if is_created:
                        created += 1
                    else:
                        changed = [field for field, value in values.items() if getattr(svc, field) != value]
                        if changed:
                            for field in changed:
                                setattr(svc, field, values[field])
                            svc.save(update_fields=changed + ["updated_at"])
                            updated += 1

                    if options["link_staff"]:
                        catalog.replace_staff_links(svc, staff_ids)

                    self.stdout.write(f"  {PriceDisplayService.format_service_display(svc)}")
        except BookingError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(self.style.SUCCESS(f"Seed complete. Created={created}, Updated={updated}"))
