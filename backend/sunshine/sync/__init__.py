"""背景同步觸發"""

from sunshine.sync.trigger import SyncDispatcher, start_immediate_sync

__all__ = ["SyncDispatcher", "start_immediate_sync"]
