"""設定畫面控制器

將偏好設定的值轉換為各選項的摘要文字，
並在畫面顯示期間監聽偏好設定的變更。
"""

from typing import Callable, Optional

from sunshine.settings.options import Option, OptionKind
from sunshine.settings.store import PreferenceStore


class SettingsScreen:
    """設定畫面

    Attributes:
        store: 偏好設定儲存
        options: 以鍵值索引的設定選項
        on_change: 偏好設定變更時的回呼，收到變更的鍵值
    """

    def __init__(
        self,
        store: PreferenceStore,
        options: list[Option],
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self.store = store
        self.options = {option.key: option for option in options}
        self.on_change = on_change
        self._summaries: dict[str, str] = {}
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def summaries(self) -> dict[str, str]:
        return dict(self._summaries)

    def summary(self, key: str) -> Optional[str]:
        return self._summaries.get(key)

    def create(self) -> None:
        """建立畫面時初始化摘要（開關選項除外）"""
        for option in self.options.values():
            if option.kind != OptionKind.TOGGLE:
                self._set_summary(option, self.store.get_string(option.key, ""))

    def start(self) -> None:
        """畫面可見時開始監聽"""
        if self._started:
            return
        self.store.register_listener(self.on_preference_changed)
        self._started = True

    def stop(self) -> None:
        """畫面不可見時停止監聽"""
        if not self._started:
            return
        self.store.unregister_listener(self.on_preference_changed)
        self._started = False

    def on_preference_changed(self, store: PreferenceStore, key: str) -> None:
        option = self.options.get(key)
        if option is not None and option.kind != OptionKind.TOGGLE:
            self._set_summary(option, store.get_string(key, ""))

        if self.on_change is not None:
            self.on_change(key)

    def _set_summary(self, option: Option, value: str) -> None:
        summary = option.render_summary(value)
        if summary is None:
            self._summaries.pop(option.key, None)
        else:
            self._summaries[option.key] = summary
