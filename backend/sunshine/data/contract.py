"""天氣資料契約

定義天氣資料表的名稱、欄位名稱與 URI 路徑，
並提供建立單日 URI 與「今天以後」查詢條件的方法。

契約是一個不可變的值，於程式啟動時由設定建立一次，
再明確傳遞給需要建立 URI 或查詢條件的元件。
"""

import enum
import re
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple, Union

from sunshine.utils.dates import normalized_utc_today


CONTENT_SCHEME = "content"
DEFAULT_AUTHORITY = "com.example.android.sunshine"
PATH_WEATHER = "weather"

# 單日 URI 的日期片段：可帶負號的 ASCII 數字
_DATE_SEGMENT = re.compile(r"-?[0-9]+")


class UnsupportedUriError(ValueError):
    """URI 不屬於此契約"""


@dataclass(frozen=True)
class WeatherColumns:
    """天氣資料表欄位名稱

    Attributes:
        date: 正規化日期（UTC 毫秒），每日唯一
        weather_id: API 回傳的天氣代碼，用來決定圖示
        min_temp: 當日最低溫 (°C)
        max_temp: 當日最高溫 (°C)
        humidity: 濕度 (%)
        pressure: 氣壓
        wind_speed: 風速 (mph)
        degrees: 風向（羅盤角度）
    """

    date: str = "date"
    weather_id: str = "weather_id"
    min_temp: str = "min"
    max_temp: str = "max"
    humidity: str = "humidity"
    pressure: str = "pressure"
    wind_speed: str = "wind"
    degrees: str = "degrees"

    def as_tuple(self) -> Tuple[str, ...]:
        return (
            self.date,
            self.weather_id,
            self.min_temp,
            self.max_temp,
            self.humidity,
            self.pressure,
            self.wind_speed,
            self.degrees,
        )


@dataclass(frozen=True)
class ContentUri:
    """content:// 形式的資料位址"""

    scheme: str
    authority: str
    path_segments: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "ContentUri":
        """解析 URI 字串

        Raises:
            ValueError: 缺少 scheme 分隔符號
        """
        scheme, sep, rest = text.partition("://")
        if not sep:
            raise ValueError(f"無效的 URI: {text!r}")

        authority, _, path = rest.partition("/")
        segments = tuple(s for s in path.split("/") if s)
        return cls(scheme=scheme, authority=authority, path_segments=segments)

    def append_path(self, segment: object) -> "ContentUri":
        # 不做任何驗證，直接字串化
        return ContentUri(
            scheme=self.scheme,
            authority=self.authority,
            path_segments=self.path_segments + (str(segment),),
        )

    @property
    def last_path_segment(self) -> Optional[str]:
        return self.path_segments[-1] if self.path_segments else None

    @property
    def path(self) -> str:
        return "".join(f"/{s}" for s in self.path_segments)

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{self.path}"


class Selection(NamedTuple):
    """查詢條件

    clause 使用具名參數，數值透過唯讀的 params 綁定；
    render() 提供將數值直接內嵌的文字形式。
    """

    clause: str
    params: Mapping[str, object]

    @property
    def argument(self) -> object:
        """唯一的隱含參數值"""
        (value,) = self.params.values()
        return value

    def render(self) -> str:
        text = self.clause
        for name, value in self.params.items():
            text = text.replace(f":{name}", str(value))
        return text


class UriMatch(enum.Enum):
    WEATHER = 100
    WEATHER_WITH_DATE = 101


@dataclass(frozen=True)
class WeatherContract:
    """天氣資料契約

    Attributes:
        authority: 資料提供者的命名空間
        path_weather: 天氣資料集合的路徑片段
        table_name: 天氣資料表名稱
        columns: 欄位名稱
    """

    authority: str = DEFAULT_AUTHORITY
    path_weather: str = PATH_WEATHER
    table_name: str = "weather"
    columns: WeatherColumns = field(default_factory=WeatherColumns)

    @classmethod
    def from_settings(cls, settings) -> "WeatherContract":
        return cls(authority=settings.content_authority)

    @property
    def base_content_uri(self) -> ContentUri:
        return ContentUri(scheme=CONTENT_SCHEME, authority=self.authority)

    @property
    def content_uri(self) -> ContentUri:
        """查詢天氣資料集合的 URI"""
        return self.base_content_uri.append_path(self.path_weather)

    def build_weather_uri_with_date(self, date: int) -> ContentUri:
        """在集合 URI 後加上日期，用來查詢單日天氣

        呼叫端需自行確保日期已正規化，此處不做驗證。

        Args:
            date: 正規化日期（UTC 毫秒）

        Returns:
            單日天氣資料的 URI
        """
        return self.content_uri.append_path(date)

    def sql_select_for_today_onwards(self, now: Optional[datetime] = None) -> Selection:
        """建立「今天（UTC）以後」的查詢條件

        Args:
            now: 指定目前時間，None 表示系統時間

        Returns:
            `date >= :today` 條件與正規化的今天日期
        """
        today = normalized_utc_today(now)
        return Selection(
            clause=f"{self.columns.date} >= :today",
            params=MappingProxyType({"today": today}),
        )

    def match(self, uri: Union[ContentUri, str]) -> UriMatch:
        """判斷 URI 是集合查詢還是單日查詢

        Raises:
            UnsupportedUriError: URI 不屬於此契約
        """
        if isinstance(uri, str):
            uri = ContentUri.parse(uri)

        if uri.scheme != CONTENT_SCHEME or uri.authority != self.authority:
            raise UnsupportedUriError(f"未知的 URI: {uri}")

        segments = uri.path_segments
        if segments == (self.path_weather,):
            return UriMatch.WEATHER
        if (
            len(segments) == 2
            and segments[0] == self.path_weather
            and _DATE_SEGMENT.fullmatch(segments[1])
        ):
            return UriMatch.WEATHER_WITH_DATE

        raise UnsupportedUriError(f"未知的 URI: {uri}")

    def date_from_uri(self, uri: Union[ContentUri, str]) -> int:
        """取出單日 URI 中的日期"""
        if isinstance(uri, str):
            uri = ContentUri.parse(uri)
        if self.match(uri) is not UriMatch.WEATHER_WITH_DATE:
            raise UnsupportedUriError(f"URI 不含日期: {uri}")
        return int(uri.last_path_segment)
