"""服務模組

包含各種業務邏輯服務。
"""

from sunshine.services.weather_sync import WeatherSyncService, parse_forecast_json

__all__ = ["WeatherSyncService", "parse_forecast_json"]
