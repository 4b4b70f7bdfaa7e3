# booking/urls.py
#
# Purpose:
# - JSON API for bootstrap, diagnostics and the service catalog.
# - Paths are mounted under /api/ by booking_system/urls.py and accept an
#   optional trailing slash (clients call /api/services and /api/services/).
#
from django.urls import re_path

from .views import BootstrapView, DiagnosticsView, ServiceDetailView, ServiceListView

urlpatterns = [
    re_path(r"^bootstrap/?$", BootstrapView.as_view(), name="bootstrap"),
    re_path(r"^test-db/?$", DiagnosticsView.as_view(), name="test-db"),
    re_path(r"^services/?$", ServiceListView.as_view(), name="service-list"),
    re_path(r"^services/(?P<pk>[^/]+)/?$", ServiceDetailView.as_view(), name="service-detail"),
]
