"""設定選項定義

三種設定選項以 kind 欄位區分：

- enum: 從固定清單選擇，摘要顯示對應的顯示名稱
- text: 文字輸入，摘要顯示目前的值
- toggle: 開關，不顯示摘要
"""

import enum
import json
from pathlib import Path
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
DEFAULT_PREFERENCES_FILE = RESOURCES_DIR / "pref_general.json"


class OptionKind(str, enum.Enum):
    ENUM = "enum"
    TEXT = "text"
    TOGGLE = "toggle"


class EnumOption(BaseModel):
    """清單選項

    Attributes:
        key: 偏好設定鍵值
        title: 顯示標題
        entries: 顯示名稱
        entry_values: 實際儲存的值，與 entries 一一對應
        default: 預設值
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["enum"] = "enum"
    key: str
    title: str = ""
    entries: Tuple[str, ...]
    entry_values: Tuple[str, ...]
    default: Optional[str] = None

    @model_validator(mode="after")
    def _check_entries(self) -> "EnumOption":
        if len(self.entries) != len(self.entry_values):
            raise ValueError(
                f"{self.key}: entries 與 entry_values 數量不一致 "
                f"({len(self.entries)} != {len(self.entry_values)})"
            )
        return self

    def find_index_of_value(self, value: str) -> int:
        """找出值在 entry_values 中的位置，找不到返回 -1"""
        try:
            return self.entry_values.index(value)
        except ValueError:
            return -1

    def render_summary(self, value: object) -> Optional[str]:
        # 找不到對應的顯示名稱時，直接顯示原始值
        string_value = "" if value is None else str(value)
        index = self.find_index_of_value(string_value)
        if index >= 0:
            return self.entries[index]
        return string_value


class TextOption(BaseModel):
    """文字選項"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    key: str
    title: str = ""
    default: str = ""

    def render_summary(self, value: object) -> Optional[str]:
        return "" if value is None else str(value)


class ToggleOption(BaseModel):
    """開關選項"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["toggle"] = "toggle"
    key: str
    title: str = ""
    default: bool = False

    def render_summary(self, value: object) -> Optional[str]:
        return None


Option = Annotated[
    Union[EnumOption, TextOption, ToggleOption],
    Field(discriminator="kind"),
]

_OPTIONS_ADAPTER = TypeAdapter(list[Option])


def render_summary(option: Option, value: object) -> Optional[str]:
    """產生選項的摘要文字

    Args:
        option: 設定選項
        value: 目前儲存的值

    Returns:
        摘要文字；開關選項返回 None
    """
    return option.render_summary(value)


def parse_options(data: list) -> list[Option]:
    """驗證並建立設定選項

    Raises:
        pydantic.ValidationError: 選項定義不正確
    """
    return _OPTIONS_ADAPTER.validate_python(data)


def load_options(path: Optional[Path] = None) -> list[Option]:
    """從 JSON 資源檔載入設定選項

    Args:
        path: 資源檔路徑，None 表示內建的 pref_general.json

    Returns:
        設定選項列表（保持檔案中的順序）
    """
    path = path or DEFAULT_PREFERENCES_FILE
    with open(path, encoding="utf-8") as f:
        return parse_options(json.load(f))


def defaults_for(options: list[Option]) -> dict:
    """取得所有選項的預設值"""
    return {
        option.key: option.default
        for option in options
        if option.default is not None
    }
