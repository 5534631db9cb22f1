"""RegisterDevice command + handler — idempotent upsert of a staff device token."""

import structlog
from alerts.device.device import DeviceRegistration, normalize_token
from alerts.domain import alerts
from protean.fields import String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@alerts.command(part_of="DeviceRegistration")
class RegisterDevice:
    """Register (or refresh) a device's push token."""

    token: String(required=True, max_length=4096)
    platform: String(max_length=20)


@alerts.command_handler(part_of=DeviceRegistration)
class RegisterDeviceHandler:
    @handle(RegisterDevice)
    def register_device(self, command: RegisterDevice):
        token = normalize_token(command.token)
        repo = current_domain.repository_for(DeviceRegistration)

        registration = repo.find_by_token(token)
        created = registration is None
        if created:
            registration = DeviceRegistration.register(token, platform=command.platform)
        else:
            registration.touch(platform=command.platform)

        repo.add(registration)

        logger.info(
            "Device registered" if created else "Device registration refreshed",
            token_prefix=token[:8],
            platform=registration.platform,
        )
        return {"token": token, "created": created}
