"""RunLivenessSweep command + handler — the scheduled registry validation tick.

Triggered once per configured interval (``sweep_schedule`` in
``sweep_timezone``, daily at 02:00 UTC by default) by an external scheduler
through the maintenance API endpoint.
"""

from datetime import UTC, datetime

import structlog
from alerts.delivery.sweeper import LivenessSweeper
from alerts.device.device import DeviceRegistration
from alerts.domain import alerts
from protean.fields import DateTime
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@alerts.command(part_of="DeviceRegistration")
class RunLivenessSweep:
    """Request to probe every registered device token."""

    requested_at: DateTime()  # Optional: defaults to now


@alerts.command_handler(part_of=DeviceRegistration)
class RunLivenessSweepHandler:
    @handle(RunLivenessSweep)
    def run_liveness_sweep(self, command: RunLivenessSweep) -> int:
        requested_at = command.requested_at or datetime.now(UTC)
        logger.info("Liveness sweep requested", requested_at=requested_at.isoformat())
        return LivenessSweeper().sweep()
