from django.contrib import admin

from .models import Business, Service, ServiceStaff, User
from .services.price_display import PriceDisplayService


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "timezone", "created_at")


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "role", "business")
    list_filter = ("role", "business")
    search_fields = ("email", "name")


class ServiceStaffInline(admin.TabularInline):
    model = ServiceStaff
    fields = ("staff", "business")
    extra = 0


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "deposit", "duration_min", "is_active", "is_public")
    list_filter = ("is_active", "is_public", "business")
    search_fields = ("name",)
    inlines = [ServiceStaffInline]

    @admin.display(description="Price", ordering="price_cents")
    def price(self, obj):
        return PriceDisplayService.format_cents(obj.price_cents)

    @admin.display(description="Deposit", ordering="deposit_cents")
    def deposit(self, obj):
        return PriceDisplayService.format_cents(obj.deposit_cents)


@admin.register(ServiceStaff)
class ServiceStaffAdmin(admin.ModelAdmin):
    list_display = ("service", "staff", "business", "created_at")
    list_filter = ("business",)
    search_fields = ("service__name", "staff__display_name")
