# booking/views.py
#
# Purpose:
# - JSON endpoints for bootstrap, diagnostics and the service catalog.
# - Staff endpoints live in staff/views.py.
#
# Conventions:
# - Every response is an envelope: {"ok": true, ...} / {"ok": false, "error": "..."}.
# - The current business comes from booking.services.tenant.resolve_business,
#   never from a direct query.
# - Service endpoints answer 400 for every failure, including unknown ids and
#   storage errors. Clients only look at ok/status.
#
# Endpoints:
# - POST  /api/bootstrap
# - GET   /api/test-db
# - GET   /api/services
# - POST  /api/services
# - PATCH /api/services/{id}
#
from rest_framework import status

from .envelope import EnvelopeAPIView, ok
from .errors import ValidationError
from .models import Business
from .serializers import BusinessSerializer, ServiceInputSerializer, ServiceSerializer, UserSerializer
from .services.bootstrap import BootstrapManager, ensure_dev_environment
from .services.catalog_manager import ServiceCatalogManager
from .services.tenant import resolve_business

REQUIRED_SERVICE_FIELDS = ("name", "durationMin", "priceCents")


class BootstrapView(EnvelopeAPIView):
    """
    POST /api/bootstrap
    Development only (403 when APP_ENV=production). Safe to call repeatedly.
    """
    manager = BootstrapManager()

    def post(self, request):
        result = self.manager.bootstrap()
        business = result["business"]
        if not result["created"]:
            return ok(message="Already bootstrapped", businessId=str(business.pk))
        return ok(
            business=BusinessSerializer(business).data,
            owner=UserSerializer(result["owner"]).data,
        )


class DiagnosticsView(EnvelopeAPIView):
    """GET /api/test-db: dump every Business row to check DB connectivity."""

    def get(self, request):
        ensure_dev_environment()
        businesses = Business.objects.order_by("created_at")
        return ok(businesses=BusinessSerializer(businesses, many=True).data)


class ServiceListView(EnvelopeAPIView):
    failure_status = status.HTTP_400_BAD_REQUEST
    not_found_status = status.HTTP_400_BAD_REQUEST

    def get(self, request):
        catalog = ServiceCatalogManager(resolve_business(request))
        services = catalog.list_services()
        return ok(services=ServiceSerializer(services, many=True).data)

    def post(self, request):
        """
        Create a service with its initial staff links.

        Required: name, durationMin, priceCents (0 is a valid price; only a
        missing or null priceCents is rejected).
        """
        catalog = ServiceCatalogManager(resolve_business(request))
        body = self.request_body(request)

        if any(body.get(key) in (None, "") for key in REQUIRED_SERVICE_FIELDS):
            raise ValidationError("name, durationMin, priceCents required")

        data = dict(self.validate(ServiceInputSerializer(data=body)))
        staff_ids = data.pop("staff_ids", None)

        service = catalog.create_service(data, staff_ids)
        return ok(service=ServiceSerializer(service).data)


class ServiceDetailView(EnvelopeAPIView):
    failure_status = status.HTTP_400_BAD_REQUEST
    not_found_status = status.HTTP_400_BAD_REQUEST

    def patch(self, request, pk):
        """
        Sparse patch of any service field plus optional staff link replacement.

        - Keys left out of the body are not touched.
        - "staffIds": [...] replaces every link; [] clears them; leaving the
          key out (or sending null) keeps the current links.
        """
        catalog = ServiceCatalogManager(resolve_business(request))
        body = self.request_body(request)

        changes = dict(self.validate(ServiceInputSerializer(data=body, partial=True)))
        staff_ids = changes.pop("staff_ids", None)

        service = catalog.patch_service(pk, changes, staff_ids)
        return ok(service=ServiceSerializer(service).data)
