# backend/sunshine/schemas/__init__.py
"""Pydantic Schema 模組"""

from sunshine.schemas.weather import (
    ApiResponse,
    ForecastResponse,
    SyncRequestResponse,
    WeatherEntryResponse,
)

__all__ = [
    "ApiResponse",
    "ForecastResponse",
    "SyncRequestResponse",
    "WeatherEntryResponse",
]
