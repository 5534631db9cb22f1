"""Pydantic request/response models for the Alerts API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RegisterDeviceRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=4096)
    platform: str | None = Field(None, examples=["Android"])


class OrderWriteRequest(BaseModel):
    """A change-feed event for one order document."""

    order_id: str = Field(..., min_length=1)
    previous: dict[str, Any] | None = Field(None, description="Document before the write, null on create")
    current: dict[str, Any] | None = Field(None, description="Document after the write, null on delete")


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class RegisterDeviceResponse(BaseModel):
    token: str
    created: bool


class DeviceListResponse(BaseModel):
    tokens: list[str]
    count: int


class OrderWriteResponse(BaseModel):
    order_id: str
    intent_kind: str
    dispatched: bool
    success: bool
    success_count: int
    failure_count: int
    removed_count: int


class SweepResponse(BaseModel):
    removed: int
