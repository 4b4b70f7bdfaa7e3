"""
staff_manager.py
----------------
Staff listing, creation and sparse patching for one business.

Notes:
- A staff member is a User (role STAFF) plus a StaffProfile. Both rows are
  created in one transaction.
- Email uniqueness is left to the database constraint. A duplicate comes
  back as a plain StorageError carrying the driver message.
- Profiles are never deleted; clients deactivate them with isActive=false.
"""

import logging
import uuid

from django.db import transaction

from ..errors import NotFoundError, storage_errors
from ..models import StaffProfile, User
from .patching import apply_sparse_patch

logger = logging.getLogger(__name__)


class StaffManager:
    PATCHABLE_FIELDS = ("display_name", "phone", "is_active", "sort_order")

    def __init__(self, business):
        self.business = business

    def list_staff(self):
        return StaffProfile.objects.filter(business=self.business).order_by("sort_order", "created_at")

    def create_staff(self, email, display_name, phone=None):
        """
        Create a STAFF user and its profile.

        Returns:
            User with the new profile reachable as ``user.staff``.
        """
        with storage_errors(), transaction.atomic():
            user = User.objects.create(
                business=self.business,
                email=email,
                role=User.Role.STAFF,
            )
            StaffProfile.objects.create(
                business=self.business,
                user=user,
                display_name=display_name,
                phone=phone,
            )

        logger.info("Created staff %s (%s) for business %s", user.staff.pk, email, self.business.pk)
        return user

    def get_staff(self, staff_id):
        try:
            pk = uuid.UUID(str(staff_id))
        except ValueError:
            raise NotFoundError("Staff not found")
        staff = StaffProfile.objects.filter(business=self.business, pk=pk).first()
        if staff is None:
            raise NotFoundError("Staff not found")
        return staff

    def patch_staff(self, staff_id, changes):
        """
        Apply a sparse patch. Only keys present in ``changes`` are written;
        ``phone: None`` clears the phone.
        """
        with storage_errors(), transaction.atomic():
            staff = self.get_staff(staff_id)
            changed = apply_sparse_patch(staff, changes, self.PATCHABLE_FIELDS)
            if changed:
                staff.save(update_fields=changed + ["updated_at"])

        logger.info("Patched staff %s fields=%s", staff.pk, changed or "none")
        return staff
