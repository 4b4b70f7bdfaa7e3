# staff/apps.py
from django.apps import AppConfig


class StaffConfig(AppConfig):
    # No models of its own: StaffProfile lives in booking. This app holds the
    # staff API views and the StaffProfile admin page.
    name = "staff"
