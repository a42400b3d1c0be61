# backend/sunshine/schemas/weather.py
"""天氣 API Pydantic Schema 定義"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class WeatherEntryResponse(BaseModel):
    """單日天氣資料"""

    uri: Optional[str] = Field(None, description="單日資料 URI")
    date: int = Field(..., description="正規化日期（UTC 毫秒）")
    weather_id: int = Field(..., description="天氣代碼")
    min_temp: float = Field(..., description="最低溫 (°C)")
    max_temp: float = Field(..., description="最高溫 (°C)")
    humidity: float = Field(..., description="濕度 (%)")
    pressure: float = Field(..., description="氣壓")
    wind_speed: float = Field(..., description="風速 (mph)")
    degrees: Optional[int] = Field(None, description="風向 (度)")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "uri": "content://com.example.android.sunshine/weather/1579046400000",
                "date": 1579046400000,
                "weather_id": 800,
                "min_temp": 11.2,
                "max_temp": 19.8,
                "humidity": 72.0,
                "pressure": 1016.3,
                "wind_speed": 4.6,
                "degrees": 270,
            }
        },
    )


class ForecastResponse(BaseModel):
    """今天以後的天氣預報"""

    uri: str = Field(..., description="天氣資料集合 URI")
    selection: str = Field(..., description="使用的查詢條件")
    entries: List[WeatherEntryResponse] = Field(default_factory=list, description="每日天氣")


class SyncRequestResponse(BaseModel):
    """同步請求回應"""

    requested: bool = Field(True, description="是否已排入同步")


class ApiResponse(BaseModel, Generic[T]):
    """API 回應包裝"""

    success: bool = Field(True, description="請求是否成功")
    data: Optional[T] = Field(None, description="回應資料")
    error: Optional[str] = Field(None, description="錯誤訊息")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {},
                "error": None
            }
        }
