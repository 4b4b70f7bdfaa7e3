# booking_system/urls.py
#
# Purpose:
# - Project URL router.
# - All JSON endpoints live under /api/; the Django admin under /admin/.
#
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),

    # =====
    # API's
    # =====
    # Bootstrap, diagnostics, services
    path("api/", include("booking.urls")),
    # Staff members
    path("api/", include("staff.urls")),
]
