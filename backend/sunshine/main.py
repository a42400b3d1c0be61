# backend/sunshine/main.py
"""FastAPI 應用程式入口"""

import logging
from functools import partial

from fastapi import FastAPI

from sunshine.api.v1 import sync, weather
from sunshine.config import settings
from sunshine.data.contract import WeatherContract
from sunshine.database import init_db
from sunshine.services.weather_sync import run_weather_sync
from sunshine.sync.trigger import SyncDispatcher

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.DEBUG if settings.debug else logging.INFO,
)

app = FastAPI(
    title=f"{settings.app_name} API",
    description="天氣預報資料查詢與同步 API",
    version="0.1.0",
)

# 契約與同步派送器在啟動時建立一次
contract = WeatherContract.from_settings(settings)
app.state.contract = contract
app.state.sync_dispatcher = SyncDispatcher(partial(run_weather_sync, contract))


@app.on_event("startup")
async def startup():
    """應用程式啟動時初始化資料庫"""
    init_db()


@app.on_event("shutdown")
async def shutdown():
    app.state.sync_dispatcher.shutdown(wait=False)


@app.get("/health")
async def health_check():
    """健康檢查端點"""
    return {"status": "ok", "version": "0.1.0"}


# 註冊 API 路由
app.include_router(
    weather.router,
    prefix=f"/api/v1/{contract.path_weather}",
    tags=["weather"]
)
app.include_router(
    sync.router,
    prefix="/api/v1/sync",
    tags=["sync"]
)
