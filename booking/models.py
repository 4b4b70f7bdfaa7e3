# booking/models.py
#
# Purpose:
# - Core domain models for the business management API.
#
# Design highlights:
# - Business: tenant root. Every other row points at it directly.
# - User: identity record (email + role). Not django.contrib.auth's User;
#   login is not wired yet.
# - StaffProfile: operational record for a staff member, one-to-one with User.
#   Deactivated with is_active, never deleted.
# - Service: bookable offering. Money is stored as integer cents.
# - ServiceStaff: "this staff member may perform this service". One row per
#   (service, staff) pair. Carries business_id as well so tenant filters never
#   need a join.
#
# Notes for developers:
# - Only one Business is expected in the current single-tenant setup. That is
#   a convention of booking.services.tenant.FirstBusinessResolver, not of the
#   schema.
# - Primary keys are UUIDs so ids are opaque strings on the wire.
#
import uuid

from django.db import models
from django.db.models import Q


class TimestampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# -------------------------
# Tenant root
# -------------------------
class Business(TimestampedModel):
    name = models.CharField(max_length=200)
    timezone = models.CharField(max_length=64, default="America/Chicago")

    class Meta:
        ordering = ["created_at"]
        verbose_name_plural = "businesses"

    def __str__(self):
        return self.name


# -------------------------
# Identity
# -------------------------
class User(TimestampedModel):
    class Role(models.TextChoices):
        OWNER = "OWNER", "Owner"
        STAFF = "STAFF", "Staff"

    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="users")
    # Format is not validated; uniqueness is per business.
    email = models.CharField(max_length=254)
    name = models.CharField(max_length=200, null=True, blank=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.STAFF)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["business", "email"], name="uq_user_business_email"),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"


# -------------------------
# Staff member
# -------------------------
class StaffProfile(TimestampedModel):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="staff_profiles")
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="staff")
    display_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=40, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "created_at"]

    def __str__(self):
        return self.display_name


# -------------------------
# Service catalog item
# -------------------------
class Service(TimestampedModel):
    """
    A bookable service.

    Rules:
    - duration_min must be > 0
    - price_cents, deposit_cents and both buffers must be >= 0
    - is_active / is_public are independent flags
    """
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="services")
    name = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    duration_min = models.PositiveIntegerField()
    price_cents = models.IntegerField()
    deposit_cents = models.IntegerField(default=0)
    buffer_before_min = models.IntegerField(default=0)
    buffer_after_min = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    is_public = models.BooleanField(default=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(duration_min__gt=0), name="ck_service_duration_positive"),
            models.CheckConstraint(condition=Q(price_cents__gte=0), name="ck_service_price_non_negative"),
            models.CheckConstraint(condition=Q(deposit_cents__gte=0), name="ck_service_deposit_non_negative"),
            models.CheckConstraint(condition=Q(buffer_before_min__gte=0), name="ck_service_buffer_before_non_negative"),
            models.CheckConstraint(condition=Q(buffer_after_min__gte=0), name="ck_service_buffer_after_non_negative"),
        ]

    def __str__(self):
        return self.name


# -------------------------
# Service <-> staff eligibility
# -------------------------
class ServiceStaff(TimestampedModel):
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name="service_staff")
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name="staff_links")
    staff = models.ForeignKey(StaffProfile, on_delete=models.CASCADE, related_name="service_links")

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["service", "staff"], name="uq_service_staff_pair"),
        ]

    def __str__(self):
        return f"{self.staff} -> {self.service}"
