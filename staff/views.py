# staff/views.py
#
# Purpose:
# - JSON endpoints for staff members of the current business.
#
# Endpoints:
# - GET   /api/staff          list, ordered by sortOrder
# - POST  /api/staff          create User (role STAFF) + StaffProfile
# - PATCH /api/staff/{id}     sparse patch (displayName, phone, isActive, sortOrder)
#
# Failure statuses: 400 for missing business / bad input, 404 for an unknown
# id, 500 for anything the database rejects (duplicate email included).
#
from booking.envelope import EnvelopeAPIView, ok
from booking.errors import ValidationError
from booking.serializers import StaffProfileSerializer, UserSerializer
from booking.services.staff_manager import StaffManager
from booking.services.tenant import resolve_business

from .serializers import StaffCreateSerializer, StaffPatchSerializer


class StaffListView(EnvelopeAPIView):
    def get(self, request):
        manager = StaffManager(resolve_business(request))
        return ok(staff=StaffProfileSerializer(manager.list_staff(), many=True).data)

    def post(self, request):
        manager = StaffManager(resolve_business(request))
        body = self.request_body(request)

        if not body.get("email") or not body.get("displayName"):
            raise ValidationError("email and displayName required")

        data = self.validate(StaffCreateSerializer(data=body))
        user = manager.create_staff(
            email=data["email"],
            display_name=data["display_name"],
            phone=data.get("phone"),
        )
        return ok(user=UserSerializer(user).data)


class StaffDetailView(EnvelopeAPIView):
    def patch(self, request, pk):
        manager = StaffManager(resolve_business(request))
        body = self.request_body(request)

        changes = self.validate(StaffPatchSerializer(data=body, partial=True))
        staff = manager.patch_staff(pk, changes)
        return ok(staff=StaffProfileSerializer(staff).data)
