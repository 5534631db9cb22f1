"""DeviceRegistration aggregate — one staff device able to receive push alerts.

The push token is the registration's identity, so registering the same token
twice refreshes the existing registration instead of creating a duplicate.
Registrations are removed only when the push transport reports the token
as permanently invalid.
"""

from datetime import UTC, datetime
from enum import Enum

from alerts.device.events import DeviceRegistered
from alerts.domain import alerts
from protean.exceptions import ValidationError
from protean.fields import DateTime, String


class DevicePlatform(Enum):
    ANDROID = "Android"
    IOS = "iOS"
    WEB = "Web"
    UNKNOWN = "Unknown"


def normalize_token(token) -> str:
    """Strip surrounding whitespace; reject blank tokens."""
    cleaned = (token or "").strip()
    if not cleaned:
        raise ValidationError({"token": ["Device token cannot be blank"]})
    return cleaned


@alerts.aggregate
class DeviceRegistration:
    """A registered push token for a staff device."""

    token: String(identifier=True, required=True, max_length=4096)
    platform: String(choices=DevicePlatform, default=DevicePlatform.UNKNOWN.value)

    registered_at: DateTime()
    last_seen_at: DateTime()

    @classmethod
    def register(cls, token, platform=None):
        """Create a new registration for ``token``."""
        token = normalize_token(token)
        platform = platform or DevicePlatform.UNKNOWN.value
        now = datetime.now(UTC)

        registration = cls(
            token=token,
            platform=platform,
            registered_at=now,
            last_seen_at=now,
        )

        registration.raise_(
            DeviceRegistered(
                token=token,
                platform=platform,
                registered_at=now,
            )
        )

        return registration

    def touch(self, platform=None, seen_at=None):
        """Refresh an existing registration when the device re-registers."""
        self.last_seen_at = seen_at or datetime.now(UTC)
        if platform:
            self.platform = platform
