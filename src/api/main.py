"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fleet.presentation import routes as fleet_routes
from infrastructure.database import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_safety_settings, get_settings
from infrastructure.version import __version__
from onboarding.presentation import routes as onboarding_routes
from shared_kernel.errors import FleetError
from shared_kernel.presentation import error_response


@asynccontextmanager
async def fleet_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug, service="fleet-onboarding-api")

    probe = DefaultStartupProbe()
    probe.application_started(
        app_name=settings.app_name,
        version=__version__,
        safety_fail_open=get_safety_settings().fail_open,
    )

    yield

    await close_database_connections()
    probe.application_stopped(app_name=settings.app_name)


app = FastAPI(
    title="Fleet Onboarding API",
    description="Sacco onboarding, review and vehicle listing management",
    version=__version__,
    lifespan=fleet_lifespan,
)

app.include_router(onboarding_routes.router)
app.include_router(fleet_routes.router)


@app.exception_handler(FleetError)
async def fleet_error_handler(request: Request, exc: FleetError) -> JSONResponse:
    """Render typed errors that escape a route in the standard envelope."""
    return error_response(exc)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
