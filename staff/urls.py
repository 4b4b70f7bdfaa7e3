from django.urls import re_path

from .views import StaffDetailView, StaffListView

urlpatterns = [
    re_path(r"^staff/?$", StaffListView.as_view(), name="staff-list"),
    re_path(r"^staff/(?P<pk>[^/]+)/?$", StaffDetailView.as_view(), name="staff-detail"),
]
