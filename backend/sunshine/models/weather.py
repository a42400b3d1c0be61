"""天氣資料模型

依天氣資料契約的表名與欄位名稱宣告 ORM 模型。
"""

from typing import Optional

from sqlalchemy import BigInteger, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from sunshine.data.contract import WeatherColumns, WeatherContract
from sunshine.models import Base


_CONTRACT = WeatherContract()
_COLUMNS: WeatherColumns = _CONTRACT.columns


class WeatherEntry(Base):
    """單日天氣資料

    Attributes:
        id: 主鍵
        date: 正規化日期（UTC 毫秒），每日唯一
        weather_id: 天氣代碼
        min_temp: 最低溫 (°C)
        max_temp: 最高溫 (°C)
        humidity: 濕度 (%)
        pressure: 氣壓
        wind_speed: 風速 (mph)
        degrees: 風向
    """

    __tablename__ = _CONTRACT.table_name

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[int] = mapped_column(
        _COLUMNS.date, BigInteger, unique=True, nullable=False, index=True
    )
    weather_id: Mapped[int] = mapped_column(_COLUMNS.weather_id, Integer, nullable=False)

    # 溫度
    min_temp: Mapped[float] = mapped_column(_COLUMNS.min_temp, Float, nullable=False)
    max_temp: Mapped[float] = mapped_column(_COLUMNS.max_temp, Float, nullable=False)

    humidity: Mapped[float] = mapped_column(_COLUMNS.humidity, Float, nullable=False)
    pressure: Mapped[float] = mapped_column(_COLUMNS.pressure, Float, nullable=False)

    # 風
    wind_speed: Mapped[float] = mapped_column(_COLUMNS.wind_speed, Float, nullable=False)
    degrees: Mapped[Optional[int]] = mapped_column(_COLUMNS.degrees, Integer, nullable=True)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "weather_id": self.weather_id,
            "min_temp": self.min_temp,
            "max_temp": self.max_temp,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "wind_speed": self.wind_speed,
            "degrees": self.degrees,
        }

    def __repr__(self) -> str:
        return f"WeatherEntry(date={self.date!r}, weather_id={self.weather_id!r})"
