from rest_framework import serializers

from .models import Business, Service, ServiceStaff, StaffProfile, User


# -------------------- Output (camelCase on the wire) --------------------
class BusinessSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Business
        fields = ["id", "name", "timezone", "createdAt", "updatedAt"]


class StaffProfileSerializer(serializers.ModelSerializer):
    businessId = serializers.UUIDField(source="business_id", read_only=True)
    userId = serializers.UUIDField(source="user_id", read_only=True)
    displayName = serializers.CharField(source="display_name")
    isActive = serializers.BooleanField(source="is_active")
    sortOrder = serializers.IntegerField(source="sort_order")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = StaffProfile
        fields = [
            "id",
            "businessId",
            "userId",
            "displayName",
            "phone",
            "isActive",
            "sortOrder",
            "createdAt",
            "updatedAt",
        ]


class UserSerializer(serializers.ModelSerializer):
    businessId = serializers.UUIDField(source="business_id", read_only=True)
    staff = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "businessId", "email", "name", "role", "staff", "createdAt", "updatedAt"]

    def get_staff(self, user):
        # Reverse one-to-one raises (an AttributeError subclass) when missing.
        profile = getattr(user, "staff", None)
        return StaffProfileSerializer(profile).data if profile else None


class ServiceStaffSerializer(serializers.ModelSerializer):
    businessId = serializers.UUIDField(source="business_id", read_only=True)
    serviceId = serializers.UUIDField(source="service_id", read_only=True)
    staffId = serializers.UUIDField(source="staff_id", read_only=True)
    staff = StaffProfileSerializer(read_only=True)

    class Meta:
        model = ServiceStaff
        fields = ["id", "businessId", "serviceId", "staffId", "staff"]


class ServiceSerializer(serializers.ModelSerializer):
    businessId = serializers.UUIDField(source="business_id", read_only=True)
    durationMin = serializers.IntegerField(source="duration_min")
    priceCents = serializers.IntegerField(source="price_cents")
    depositCents = serializers.IntegerField(source="deposit_cents")
    bufferBeforeMin = serializers.IntegerField(source="buffer_before_min")
    bufferAfterMin = serializers.IntegerField(source="buffer_after_min")
    isActive = serializers.BooleanField(source="is_active")
    isPublic = serializers.BooleanField(source="is_public")
    staffLinks = ServiceStaffSerializer(source="staff_links", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Service
        fields = [
            "id",
            "businessId",
            "name",
            "description",
            "durationMin",
            "priceCents",
            "depositCents",
            "bufferBeforeMin",
            "bufferAfterMin",
            "isActive",
            "isPublic",
            "staffLinks",
            "createdAt",
            "updatedAt",
        ]


# -------------------- Input --------------------
class ServiceInputSerializer(serializers.Serializer):
    """
    Body of POST /api/services and PATCH /api/services/{id}.

    Run with partial=True for PATCH: required flags and defaults are then
    skipped and validated_data holds only the keys the client sent.
    """
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_null=True, allow_blank=True, required=False)
    durationMin = serializers.IntegerField(source="duration_min", min_value=1)
    priceCents = serializers.IntegerField(source="price_cents", min_value=0)
    depositCents = serializers.IntegerField(source="deposit_cents", min_value=0, default=0)
    bufferBeforeMin = serializers.IntegerField(source="buffer_before_min", min_value=0, default=0)
    bufferAfterMin = serializers.IntegerField(source="buffer_after_min", min_value=0, default=0)
    isActive = serializers.BooleanField(source="is_active", default=True)
    isPublic = serializers.BooleanField(source="is_public", default=True)
    # null means "not supplied", same as leaving the key out.
    staffIds = serializers.ListField(
        source="staff_ids",
        child=serializers.CharField(),
        required=False,
        allow_null=True,
        allow_empty=True,
    )


def error_message(errors):
    """
    Flatten DRF serializer errors into one human-readable line,
    e.g. "durationMin: Ensure this value is greater than or equal to 1."
    """
    parts = []
    for field, detail in errors.items():
        message = _first_message(detail)
        parts.append(message if field == "non_field_errors" else f"{field}: {message}")
    return "; ".join(parts) or "Invalid request"


def _first_message(detail):
    if isinstance(detail, dict):
        return _first_message(next(iter(detail.values()), ""))
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)
