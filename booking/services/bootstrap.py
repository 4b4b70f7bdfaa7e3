"""
bootstrap.py
------------
One-time setup of the demo tenant.

Creates the Business plus an OWNER user with a staff profile, all in one
transaction. Running it again is a no-op that reports the existing business.
Refuses to run when APP_ENV is "production".

Notes:
- Two bootstraps racing on an empty database can both see "no business"
  and both insert. Nothing locks here; the endpoint is a dev tool.
"""

import logging

from django.conf import settings
from django.db import transaction

from ..errors import Forbidden, storage_errors
from ..models import Business, StaffProfile, User

logger = logging.getLogger(__name__)


def is_production() -> bool:
    return settings.APP_ENV == "production"


def ensure_dev_environment():
    """Raise Forbidden for development-only operations in production."""
    if is_production():
        logger.warning("Blocked development-only operation (APP_ENV=production)")
        raise Forbidden()


class BootstrapManager:
    def bootstrap(self):
        """
        Create the demo business if none exists yet.

        Returns:
            dict with keys:
              - created: True when rows were inserted by this call
              - business: the Business (new or existing)
              - owner: the new OWNER User, or None when nothing was created

        Raises:
            Forbidden: in production
            StorageError: if the database rejects the inserts
        """
        ensure_dev_environment()

        existing = Business.objects.order_by("created_at").first()
        if existing is not None:
            logger.info("Bootstrap skipped; business %s already exists", existing.pk)
            return {"created": False, "business": existing, "owner": None}

        with storage_errors(), transaction.atomic():
            business = Business.objects.create(
                name=settings.BOOTSTRAP_BUSINESS_NAME,
                timezone=settings.BOOTSTRAP_TIMEZONE,
            )
            owner = User.objects.create(
                business=business,
                email=settings.BOOTSTRAP_OWNER_EMAIL,
                name=settings.BOOTSTRAP_OWNER_NAME,
                role=User.Role.OWNER,
            )
            StaffProfile.objects.create(
                business=business,
                user=owner,
                display_name=settings.BOOTSTRAP_OWNER_NAME,
            )

        logger.info("Bootstrapped business %s with owner %s", business.pk, owner.email)
        return {"created": True, "business": business, "owner": owner}
