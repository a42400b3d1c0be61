"""天氣預報同步服務

從 OpenWeatherMap 每日預報 API 取得資料，
正規化日期後整批取代資料庫中的天氣資料。
"""

import logging
from datetime import datetime
from typing import Optional

import httpx
from sqlalchemy.orm import Session

from sunshine.config import Settings, settings as default_settings
from sunshine.data.contract import WeatherContract
from sunshine.data.repository import WeatherRepository
from sunshine.database import SessionLocal
from sunshine.settings import open_preferences
from sunshine.utils.dates import DAY_IN_MILLIS, normalized_utc_today


logger = logging.getLogger(__name__)

# API 回傳的狀態碼欄位
MESSAGE_CODE = "cod"


def parse_day_entry(raw: dict, date: int) -> Optional[dict]:
    """解析單日預報資料

    Args:
        raw: API 返回的單日資料
        date: 此筆資料對應的正規化日期

    Returns:
        天氣資料字典，如果缺少必要欄位則返回 None
    """
    temp = raw.get("temp") or {}
    weather = raw.get("weather") or []

    if not weather or "min" not in temp or "max" not in temp:
        return None

    weather_id = weather[0].get("id")
    if weather_id is None:
        return None

    return {
        "date": date,
        "weather_id": weather_id,
        "min_temp": temp["min"],
        "max_temp": temp["max"],
        "humidity": raw.get("humidity", 0.0),
        "pressure": raw.get("pressure", 0.0),
        "wind_speed": raw.get("speed", 0.0),
        "degrees": raw.get("deg"),
    }


def parse_forecast_json(data: dict, now: Optional[datetime] = None) -> list[dict]:
    """解析每日預報 API 回應

    第 i 筆資料對應今天（UTC）之後第 i 天。

    Args:
        data: API 回應 JSON
        now: 指定目前時間，None 表示系統時間

    Returns:
        天氣資料列表（已過濾無效資料）；地點無效時返回空列表
    """
    code = str(data.get(MESSAGE_CODE, "200"))
    if code != "200":
        logger.warning("forecast API returned code %s: %s", code, data.get("message"))
        return []

    today = normalized_utc_today(now)

    parsed = []
    for i, raw in enumerate(data.get("list", [])):
        entry = parse_day_entry(raw, today + i * DAY_IN_MILLIS)
        if entry:
            parsed.append(entry)

    return parsed


class WeatherSyncService:
    """天氣預報同步服務

    Attributes:
        db: SQLAlchemy Session 物件
        contract: 天氣資料契約
        settings: 應用程式設定
        location: 預報地點
    """

    def __init__(
        self,
        db: Session,
        contract: WeatherContract,
        settings: Settings = default_settings,
        location: Optional[str] = None,
    ):
        self.db = db
        self.contract = contract
        self.settings = settings
        self.location = location or settings.forecast_location

    async def fetch_forecast(self) -> list[dict]:
        """從 API 取得每日預報

        Returns:
            天氣資料列表（已解析並過濾無效資料）

        Raises:
            httpx.HTTPError: API 請求失敗時
        """
        params = {
            "q": self.location,
            "mode": "json",
            "units": "metric",
            "cnt": self.settings.forecast_days,
        }
        if self.settings.forecast_api_key:
            params["APPID"] = self.settings.forecast_api_key

        async with httpx.AsyncClient(timeout=self.settings.sync_timeout) as client:
            response = await client.get(self.settings.forecast_url, params=params)
            response.raise_for_status()
            data = response.json()

        return parse_forecast_json(data)

    async def sync_weather(self) -> dict:
        """同步天氣預報到資料庫

        取得資料為空時保留原有資料。

        Returns:
            同步結果統計，包含：
            - total_fetched: 從 API 取得的有效資料筆數
            - stored: 寫入資料庫的筆數
        """
        rows = await self.fetch_forecast()

        stored = 0
        if rows:
            repository = WeatherRepository(self.db, self.contract)
            stored = repository.replace_all(rows)
        else:
            logger.warning("no forecast data for %s, keeping existing rows", self.location)

        return {
            "total_fetched": len(rows),
            "stored": stored,
        }


async def run_weather_sync(contract: WeatherContract) -> dict:
    """背景同步工作：依偏好設定的地點同步一次"""
    preferences = open_preferences(default_settings.preferences_path)
    location = preferences.get_string("location", default_settings.forecast_location)

    with SessionLocal() as db:
        service = WeatherSyncService(db, contract, location=location)
        return await service.sync_weather()
