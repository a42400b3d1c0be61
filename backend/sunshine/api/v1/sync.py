# backend/sunshine/api/v1/sync.py
"""同步觸發 API 路由"""

from fastapi import APIRouter, Depends

from sunshine.api.v1.dependencies import get_sync_dispatcher
from sunshine.schemas.weather import ApiResponse, SyncRequestResponse
from sunshine.sync.trigger import SyncDispatcher, start_immediate_sync

router = APIRouter()


@router.post(
    "",
    status_code=202,
    response_model=ApiResponse[SyncRequestResponse],
    summary="立即同步",
    description="排入一次背景同步後立即返回，不等待同步結果",
)
async def request_sync(
    dispatcher: SyncDispatcher = Depends(get_sync_dispatcher),
) -> ApiResponse[SyncRequestResponse]:
    start_immediate_sync(dispatcher)
    return ApiResponse(success=True, data=SyncRequestResponse(requested=True))
