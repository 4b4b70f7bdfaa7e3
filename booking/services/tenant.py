"""
tenant.py
---------
Works out which Business a request belongs to.

Views never query Business themselves. They call ``resolve_business(request)``,
which instantiates the class named by ``settings.BUSINESS_RESOLVER``. The
default resolver returns the first Business ever created, which is enough for
the single-tenant demo. A session or host based resolver can be dropped in
later without touching any view.
"""

import logging

from django.conf import settings
from django.utils.module_loading import import_string

from ..errors import MissingBusiness
from ..models import Business

logger = logging.getLogger(__name__)


class BusinessResolver:
    """Interface for tenant lookup."""

    def resolve(self, request=None) -> Business:
        raise NotImplementedError


class FirstBusinessResolver(BusinessResolver):
    """Single-tenant placeholder: the oldest Business wins."""

    def resolve(self, request=None) -> Business:
        business = Business.objects.order_by("created_at").first()
        if business is None:
            logger.warning("Tenant lookup failed: no Business row exists")
            raise MissingBusiness()
        return business


def get_business_resolver() -> BusinessResolver:
    resolver_cls = import_string(settings.BUSINESS_RESOLVER)
    return resolver_cls()


def resolve_business(request=None) -> Business:
    return get_business_resolver().resolve(request)
