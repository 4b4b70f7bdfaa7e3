"""
catalog_manager.py
------------------
Service catalog for one business: list, create and patch services together
with their staff eligibility links (ServiceStaff rows).

Patch contract:
1. Sparse field patch. Only keys present in ``changes`` are written.
2. Staff link replacement. Only when ``staff_ids`` is not None: every
   ServiceStaff row of (business, service) is deleted and one row per
   supplied id is inserted. An empty list clears all links.
Both steps run inside one transaction.atomic() block, so nobody reads the
field patch without the matching link set or the other way round.

Concurrency:
- The delete+insert pair runs at the database's default isolation level with
  no row lock. Two concurrent patches of the same service's links are
  last-write-wins.

Every read after a write goes through ``get_service`` so callers always get
the hydrated view (service + staffLinks + staff).
"""

import logging
import uuid

from django.db import transaction
from django.db.models import Prefetch

from ..errors import NotFoundError, ValidationError, storage_errors
from ..models import Service, ServiceStaff, StaffProfile
from .patching import apply_sparse_patch

logger = logging.getLogger(__name__)


class ServiceCatalogManager:
    PATCHABLE_FIELDS = (
        "name",
        "description",
        "duration_min",
        "price_cents",
        "deposit_cents",
        "buffer_before_min",
        "buffer_after_min",
        "is_active",
        "is_public",
    )

    def __init__(self, business):
        self.business = business

    # -------------------- reads --------------------
    def _hydrated(self):
        links = ServiceStaff.objects.select_related("staff").order_by("created_at")
        return Service.objects.filter(business=self.business).prefetch_related(
            Prefetch("staff_links", queryset=links)
        )

    def list_services(self):
        """Newest first, each with its staff links prefetched."""
        return self._hydrated().order_by("-created_at")

    def get_service(self, service_id):
        try:
            pk = uuid.UUID(str(service_id))
        except ValueError:
            raise NotFoundError("Service not found")
        service = self._hydrated().filter(pk=pk).first()
        if service is None:
            raise NotFoundError("Service not found")
        return service

    # -------------------- writes --------------------
    def create_service(self, fields, staff_ids=None):
        """
        Create a service and its initial staff links in one transaction.

        Args:
            fields: model field values (name, duration_min, price_cents, ...)
            staff_ids: iterable of StaffProfile ids, or None for no links
        """
        with storage_errors(), transaction.atomic():
            service = Service.objects.create(business=self.business, **fields)
            self.replace_staff_links(service, staff_ids or [])

        logger.info("Created service %s (%s) for business %s", service.pk, service.name, self.business.pk)
        return self.get_service(service.pk)

    def patch_service(self, service_id, changes, staff_ids=None):
        """
        Sparse-patch a service and, when ``staff_ids`` is given, replace its
        staff links. Returns the hydrated service.

        Raises:
            NotFoundError: unknown id, or a service of another business
            ValidationError: a staff id that is not a staff member of this business
            StorageError: the database rejected the write
        """
        with storage_errors(), transaction.atomic():
            service = self.get_service(service_id)
            changed = apply_sparse_patch(service, changes, self.PATCHABLE_FIELDS)
            if changed:
                service.save(update_fields=changed + ["updated_at"])
            if staff_ids is not None:
                self.replace_staff_links(service, staff_ids)

        logger.info(
            "Patched service %s fields=%s staff_links=%s",
            service.pk,
            changed or "none",
            "replaced" if staff_ids is not None else "unchanged",
        )
        return self.get_service(service.pk)

    def replace_staff_links(self, service, staff_ids):
        """
        Delete every link of ``service`` and insert one per staff id.

        Must be called inside a transaction. Duplicate ids collapse to one
        link. Ids that do not belong to this business raise ValidationError
        before anything is deleted.
        """
        wanted = self._checked_staff_ids(staff_ids)

        ServiceStaff.objects.filter(business=self.business, service=service).delete()
        ServiceStaff.objects.bulk_create(
            [ServiceStaff(business=self.business, service=service, staff_id=staff_id) for staff_id in wanted]
        )
        logger.debug("Service %s now linked to %d staff", service.pk, len(wanted))
        return wanted

    def _checked_staff_ids(self, staff_ids):
        wanted = []
        for raw in staff_ids:
            try:
                staff_id = uuid.UUID(str(raw))
            except ValueError:
                raise ValidationError(f"Invalid staff id: {raw}")
            if staff_id not in wanted:
                wanted.append(staff_id)

        if not wanted:
            return wanted

        known = set(
            StaffProfile.objects.filter(business=self.business, pk__in=wanted).values_list("pk", flat=True)
        )
        unknown = [str(staff_id) for staff_id in wanted if staff_id not in known]
        if unknown:
            raise ValidationError(f"Unknown staff id(s): {', '.join(unknown)}")
        return wanted
