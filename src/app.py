"""Order Alerts FastAPI application.

Receives order change-feed events, device registrations and the scheduled
sweep tick over HTTP, and processes them synchronously inside the Alerts
domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from alerts.config import get_settings
from alerts.domain import alerts
from alerts.utils.logging import configure_logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

_settings = get_settings()
configure_logging(_settings.log_level, json_output=_settings.log_json)

alerts.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Order Alerts API",
    description="Staff push notifications for order lifecycle changes",
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Alerts domain context for every /alerts request."""
    if request.url.path.startswith("/alerts"):
        with alerts.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from alerts.api.routes import router as alerts_router  # noqa: E402

app.include_router(alerts_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": alerts.name,
            "sweep_schedule": _settings.sweep_schedule,
            "sweep_timezone": _settings.sweep_timezone,
        }
    )
