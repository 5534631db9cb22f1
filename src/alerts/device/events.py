"""Domain events for the DeviceRegistration aggregate."""

from alerts.domain import alerts
from protean.fields import DateTime, String


@alerts.event(part_of="DeviceRegistration")
class DeviceRegistered:
    """A staff device registered its push token for the first time."""

    __version__ = 1

    token: String(required=True, max_length=4096)
    platform: String(required=True)
    registered_at: DateTime(required=True)
