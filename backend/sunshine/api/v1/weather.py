# backend/sunshine/api/v1/weather.py
"""天氣資料查詢 API 路由

對應天氣資料契約的兩種 URI：
集合（今天以後）與單日查詢。
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from sunshine.api.v1.dependencies import get_contract
from sunshine.data.contract import WeatherContract
from sunshine.data.repository import WeatherRepository
from sunshine.database import get_db
from sunshine.models.weather import WeatherEntry
from sunshine.schemas.weather import ApiResponse, ForecastResponse, WeatherEntryResponse

router = APIRouter()


def _to_response(entry: WeatherEntry, contract: WeatherContract) -> WeatherEntryResponse:
    response = WeatherEntryResponse.model_validate(entry)
    response.uri = str(contract.build_weather_uri_with_date(entry.date))
    return response


@router.get(
    "",
    response_model=ApiResponse[ForecastResponse],
    summary="今天以後的天氣預報",
    description="取得正規化日期大於等於今天（UTC）的所有天氣資料",
)
async def get_forecast(
    db: Session = Depends(get_db),
    contract: WeatherContract = Depends(get_contract),
) -> ApiResponse[ForecastResponse]:
    """今天以後的天氣預報

    Args:
        db: 資料庫 session
        contract: 天氣資料契約

    Returns:
        依日期排序的天氣資料
    """
    selection = contract.sql_select_for_today_onwards()
    entries = WeatherRepository(db, contract).query(selection)

    return ApiResponse(
        success=True,
        data=ForecastResponse(
            uri=str(contract.content_uri),
            selection=selection.render(),
            entries=[_to_response(e, contract) for e in entries],
        ),
    )


@router.get(
    "/{date}",
    response_model=ApiResponse[WeatherEntryResponse],
    summary="取得單日天氣",
    description="根據正規化日期取得單日天氣資料",
)
async def get_weather_for_date(
    date: int,
    db: Session = Depends(get_db),
    contract: WeatherContract = Depends(get_contract),
) -> ApiResponse[WeatherEntryResponse]:
    """取得單日天氣

    Args:
        date: 正規化日期（UTC 毫秒）
        db: 資料庫 session
        contract: 天氣資料契約

    Raises:
        404: 找不到指定日期的資料
    """
    entry = WeatherRepository(db, contract).get_by_date(date)

    if not entry:
        raise HTTPException(status_code=404, detail=f"找不到 {date} 的天氣資料")

    return ApiResponse(success=True, data=_to_response(entry, contract))
