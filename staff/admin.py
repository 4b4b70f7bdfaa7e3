# staff/admin.py
from django.contrib import admin

from booking.models import StaffProfile  # the model lives in booking; staff owns the admin page


@admin.register(StaffProfile)
class StaffProfileAdmin(admin.ModelAdmin):
    list_display = ("display_name", "phone", "is_active", "sort_order", "business")
    list_filter = ("is_active", "business")
    list_editable = ("is_active", "sort_order")
    search_fields = ("display_name", "user__email")
