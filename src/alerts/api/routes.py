"""FastAPI routes for the Alerts domain.

Thin adapters that translate HTTP requests into domain commands or the
order-write handler. No business logic — just schema→domain→response.

Whole-operation failures surface as 5xx responses so the caller's retry
policy applies: 503 when the transport or registry is unavailable, 504 when
a time budget runs out.
"""

from dataclasses import asdict
from datetime import UTC, datetime

from alerts.api.schemas import (
    DeviceListResponse,
    OrderWriteRequest,
    OrderWriteResponse,
    RegisterDeviceRequest,
    RegisterDeviceResponse,
    SweepResponse,
)
from alerts.device.device import DeviceRegistration
from alerts.device.registration import RegisterDevice
from alerts.device.sweep import RunLivenessSweep
from alerts.errors import (
    DispatchTimeoutError,
    RegistryWriteError,
    SweepTimeoutError,
    TransportInvocationError,
)
from alerts.order.notifier import OrderWriteNotifier
from alerts.order.state import OrderTransition
from fastapi import APIRouter, HTTPException
from protean import UnitOfWork
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

router = APIRouter(prefix="/alerts", tags=["alerts"])


def _raise_http(exc: Exception):
    if isinstance(exc, (DispatchTimeoutError, SweepTimeoutError)):
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    raise HTTPException(status_code=503, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------
@router.post("/devices", status_code=201, response_model=RegisterDeviceResponse)
async def register_device(body: RegisterDeviceRequest) -> RegisterDeviceResponse:
    """Register (or refresh) a staff device push token."""
    try:
        command = RegisterDevice(token=body.token, platform=body.platform)
        result = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.messages) from exc
    return RegisterDeviceResponse(**result)


@router.get("/devices", response_model=DeviceListResponse)
async def list_devices() -> DeviceListResponse:
    """List registered device tokens, oldest first."""
    tokens = current_domain.repository_for(DeviceRegistration).list_tokens()
    return DeviceListResponse(tokens=tokens, count=len(tokens))


# ---------------------------------------------------------------------------
# Change feed
# ---------------------------------------------------------------------------
@router.post("/order-writes", response_model=OrderWriteResponse)
async def order_written(body: OrderWriteRequest) -> OrderWriteResponse:
    """Handle one order document write from the change feed."""
    transition = OrderTransition.from_documents(
        order_id=body.order_id,
        previous=body.previous,
        current=body.current,
    )
    try:
        with UnitOfWork():
            result = OrderWriteNotifier().handle(transition)
    except (TransportInvocationError, RegistryWriteError, DispatchTimeoutError) as exc:
        _raise_http(exc)
    return OrderWriteResponse(**asdict(result))


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------
@router.post("/maintenance/sweep", response_model=SweepResponse)
async def run_liveness_sweep() -> SweepResponse:
    """Schedule tick: probe every registered token and prune invalid ones."""
    command = RunLivenessSweep(requested_at=datetime.now(UTC))
    try:
        removed = current_domain.process(command, asynchronous=False)
    except (RegistryWriteError, SweepTimeoutError) as exc:
        _raise_http(exc)
    return SweepResponse(removed=removed or 0)
