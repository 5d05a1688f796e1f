from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field


_DEFAULT_CORS_ORIGINS = (
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _split_origins(raw: str | None) -> list[str]:
    if not raw:
        return list(_DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    # App
    app_name: str = Field(
        default_factory=lambda: os.getenv("APP_NAME", "Bezettingsoverzicht API")
    )
    debug: bool = Field(
        default_factory=lambda: os.getenv("DEBUG", "false").lower()
        in {"1", "true", "yes"}
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS"))
    )

    # Occupancy overview
    occupancy_default_preset: Literal["year", "month"] = Field(
        default_factory=lambda: os.getenv("OCCUPANCY_DEFAULT_PRESET", "year").lower()
    )


def get_settings() -> Settings:
    # Keep a simple module-level singleton without extra deps
    # Evaluated only once per process
    global _SETTINGS_SINGLETON
    try:
        return _SETTINGS_SINGLETON
    except NameError:
        _SETTINGS_SINGLETON = Settings()  # type: ignore[reportPrivateUsage]
        return _SETTINGS_SINGLETON
