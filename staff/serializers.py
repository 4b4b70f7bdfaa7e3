from rest_framework import serializers


class StaffCreateSerializer(serializers.Serializer):
    # Email format is not checked; uniqueness is the database's job.
    email = serializers.CharField(max_length=254)
    displayName = serializers.CharField(source="display_name", max_length=200)
    phone = serializers.CharField(max_length=40, allow_null=True, allow_blank=True, required=False)


class StaffPatchSerializer(serializers.Serializer):
    """
    Body of PATCH /api/staff/{id}. Always used with partial=True, so only the
    keys the client sent show up in validated_data. phone accepts null to clear.
    """
    displayName = serializers.CharField(source="display_name", max_length=200)
    phone = serializers.CharField(max_length=40, allow_null=True, allow_blank=True)
    isActive = serializers.BooleanField(source="is_active")
    sortOrder = serializers.IntegerField(source="sort_order")
