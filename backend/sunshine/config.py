"""應用程式設定模組

使用 pydantic-settings 管理應用程式配置，
支援從環境變數和 .env 檔案載入設定。
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# 專案根目錄（backend 的上一層）
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    """應用程式設定類別

    Attributes:
        app_name: 應用程式名稱
        debug: 是否啟用除錯模式
        database_url: SQLite 資料庫連接字串
        data_dir: 資料目錄路徑
        content_authority: 資料提供者的命名空間（反向網域名稱）
        forecast_url: 每日天氣預報 API 端點
        forecast_api_key: 天氣預報 API 金鑰
        forecast_location: 未設定偏好時使用的預設地點
        forecast_days: 每次同步取得的天數
        sync_timeout: 同步請求逾時秒數
        preferences_path: 使用者偏好設定檔路徑
    """

    app_name: str = "Sunshine"
    debug: bool = True
    database_url: str = f"sqlite:///{DATA_DIR / 'sunshine.db'}"
    data_dir: Path = DATA_DIR

    content_authority: str = "com.example.android.sunshine"

    forecast_url: str = "https://api.openweathermap.org/data/2.5/forecast/daily"
    forecast_api_key: Optional[str] = None
    forecast_location: str = "94043,USA"
    forecast_days: int = 14
    sync_timeout: float = 30.0

    preferences_path: Path = DATA_DIR / "preferences.json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# 全域設定實例
settings = Settings()
