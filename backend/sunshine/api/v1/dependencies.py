"""API 共用依賴"""

from fastapi import Request

from sunshine.data.contract import WeatherContract
from sunshine.sync.trigger import SyncDispatcher


def get_contract(request: Request) -> WeatherContract:
    """取得啟動時建立的天氣資料契約"""
    return request.app.state.contract


def get_sync_dispatcher(request: Request) -> SyncDispatcher:
    return request.app.state.sync_dispatcher
