from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.v1 import estimates
from app.core.logging import RequestLoggingMiddleware, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    setup_logging(json_format=settings.log_json)
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(estimates.router, prefix="/api/v1/estimates", tags=["estimates"])

    @application.get("/health")
    async def health_check() -> dict:
        # External sources are optional; report how each one is configured
        # without calling it.
        return {
            "status": "ok",
            "services": {
                "geocoding": "opencage" if settings.geocoding_enabled else "offline",
                "irradiance": "nrel" if settings.irradiance_lookup_enabled else "estimate",
            },
        }

    return application


app = create_app()
