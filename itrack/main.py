from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
import os

from itrack.database import engine, Base
import itrack.models  # noqa: F401, register all models
from itrack.config import settings
from itrack.errors import InventoryError
from itrack.logging_config import configure_logging
from itrack.routers import (
    health, assignments, assets, computers, devices, phone_lines, brands, asset_models,
    management_areas, departments, users, dashboard, export,
)
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    configure_logging()
    # Ensure DB exists and tables are created (for dev mode without alembic)
    if settings.DATABASE_URL.startswith("sqlite:///./data/"):
        os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info("itrack started (%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="itrack",
    description="IT asset inventory and assignment tracker",
    version="1.0.0",
    lifespan=lifespan,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors()), "code": "invalid_input"},
    )


app.include_router(health.router)
app.include_router(assignments.router)
app.include_router(assets.router)
app.include_router(computers.router)
app.include_router(devices.router)
app.include_router(phone_lines.router)
app.include_router(brands.router)
app.include_router(asset_models.router)
app.include_router(management_areas.router)
app.include_router(departments.router)
app.include_router(users.router)
app.include_router(dashboard.router)
app.include_router(export.router)
