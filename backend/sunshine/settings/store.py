"""偏好設定儲存

以字典保存使用者偏好設定，值改變時通知已註冊的監聽者。
可選擇以 JSON 檔案持久化。
"""

import json
import logging
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# 監聽者收到 (store, key)
PreferenceListener = Callable[["PreferenceStore", str], None]

_MISSING = object()


class PreferenceStore:
    """可觀察的偏好設定儲存

    Attributes:
        path: 持久化檔案路徑，None 表示只存在記憶體中
    """

    def __init__(self, values: Optional[dict] = None, path: Optional[Path] = None):
        self._values: dict = dict(values or {})
        self._listeners: list[PreferenceListener] = []
        self.path = path

    @classmethod
    def load(cls, path: Path, defaults: Optional[dict] = None) -> "PreferenceStore":
        """從 JSON 檔案載入偏好設定

        Args:
            path: 檔案路徑，檔案不存在時只使用預設值
            defaults: 預設值，會被檔案中的值覆蓋
        """
        values = dict(defaults or {})
        path = Path(path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                values.update(json.load(f))
        return cls(values, path=path)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("未設定偏好設定檔路徑")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._values, f, ensure_ascii=False, indent=2)

    def get(self, key: str, default: object = None) -> object:
        return self._values.get(key, default)

    def get_string(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        return default if value is None else str(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        return default if value is None else bool(value)

    def as_dict(self) -> dict:
        return dict(self._values)

    def set(self, key: str, value: object) -> None:
        """設定值，值有改變時通知監聽者"""
        if self._values.get(key, _MISSING) == value:
            return

        self._values[key] = value
        self._notify(key)

    def update(self, values: dict) -> None:
        for key, value in values.items():
            self.set(key, value)

    def register_listener(self, listener: PreferenceListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unregister_listener(self, listener: PreferenceListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, key: str) -> None:
        logger.debug("preference %s changed", key)
        # 複製一份，監聽者可在回呼中取消註冊
        for listener in list(self._listeners):
            listener(self, key)
