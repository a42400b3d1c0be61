"""使用者設定模組

包含設定選項定義、偏好設定儲存與設定畫面控制器。
"""

from sunshine.settings.options import (
    EnumOption,
    OptionKind,
    TextOption,
    ToggleOption,
    defaults_for,
    load_options,
    render_summary,
)
from sunshine.settings.screen import SettingsScreen
from sunshine.settings.store import PreferenceStore

__all__ = [
    "EnumOption",
    "OptionKind",
    "TextOption",
    "ToggleOption",
    "load_options",
    "render_summary",
    "SettingsScreen",
    "PreferenceStore",
    "defaults_for",
    "open_preferences",
]


def open_preferences(path) -> PreferenceStore:
    """載入偏好設定檔，未設定的項目使用內建選項的預設值"""
    return PreferenceStore.load(path, defaults=defaults_for(load_options()))
