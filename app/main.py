from __future__ import annotations

from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers.occupancy import router as occupancy_router
from core.settings import get_settings


def create_app(allowed_origins: Sequence[str] | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        allowed_origins: Optional list of CORS origins to allow. If not provided,
            the origins from settings are used.

    Returns:
        Configured FastAPI application.
    """
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    cors_origins = list(allowed_origins or settings.cors_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(occupancy_router, prefix="/occupancy", tags=["occupancy"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
