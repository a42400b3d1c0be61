"""背景同步觸發測試"""

import threading
from unittest.mock import MagicMock

from sunshine.sync import SyncDispatcher, start_immediate_sync


def test_start_immediate_sync_returns_immediately():
    """測試觸發後立即返回，工作在背景執行"""
    release = threading.Event()
    finished = threading.Event()

    def job():
        release.wait(timeout=5)
        finished.set()
        return "done"

    with SyncDispatcher(job) as dispatcher:
        assert start_immediate_sync(dispatcher) is None
        assert not finished.is_set()
        release.set()

    assert finished.is_set()


def test_request_sync_runs_job():
    job = MagicMock(return_value={"stored": 3})

    with SyncDispatcher(job) as dispatcher:
        future = dispatcher.request_sync()
        assert future.result(timeout=5) == {"stored": 3}

    job.assert_called_once_with()


def test_async_job_is_awaited():
    """測試返回 coroutine 的工作會被執行完成"""
    async def job():
        return {"stored": 7}

    with SyncDispatcher(job) as dispatcher:
        assert dispatcher.request_sync().result(timeout=5) == {"stored": 7}


def test_job_failure_is_logged(caplog):
    """測試工作失敗只記錄錯誤，不會拋出"""
    job = MagicMock(side_effect=RuntimeError("network down"))

    with SyncDispatcher(job) as dispatcher:
        assert dispatcher.request_sync().result(timeout=5) is None

    assert "sync job failed" in caplog.text


def test_requests_run_one_at_a_time():
    """測試同一時間只執行一個同步工作"""
    lock = threading.Lock()
    overlaps = []

    def job():
        if not lock.acquire(blocking=False):
            overlaps.append(True)
            return
        try:
            threading.Event().wait(0.01)
        finally:
            lock.release()

    with SyncDispatcher(job) as dispatcher:
        futures = [dispatcher.request_sync() for _ in range(5)]
        for future in futures:
            future.result(timeout=5)

    assert overlaps == []
