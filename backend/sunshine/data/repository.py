"""天氣資料存取

以天氣資料契約建立的查詢條件讀取資料，
並負責寫入時的衝突與保留策略：

- 寫入的日期必須已正規化
- 同一天已有資料時以新資料取代
- 同步時整批取代，資料表內容永遠等於最後一次成功同步的結果
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from sunshine.data.contract import Selection, WeatherContract
from sunshine.models.weather import WeatherEntry
from sunshine.utils.dates import is_date_normalized


logger = logging.getLogger(__name__)

# 可寫入的 WeatherEntry 屬性（主鍵除外）
_WRITABLE_FIELDS = frozenset(
    attr.key for attr in inspect(WeatherEntry).column_attrs if attr.key != "id"
)


class WeatherRepository:
    """天氣資料存取類別

    Attributes:
        db: SQLAlchemy Session 物件
        contract: 天氣資料契約
    """

    def __init__(self, db: Session, contract: WeatherContract):
        self.db = db
        self.contract = contract

    def query(self, selection: Optional[Selection] = None) -> list[WeatherEntry]:
        """依查詢條件取得天氣資料（依日期遞增排序）"""
        query = self.db.query(WeatherEntry)

        if selection is not None:
            query = query.filter(text(selection.clause)).params(**selection.params)

        return query.order_by(WeatherEntry.date).all()

    def forecast_from_today(self, now: Optional[datetime] = None) -> list[WeatherEntry]:
        """取得今天（UTC）以後的天氣資料"""
        return self.query(self.contract.sql_select_for_today_onwards(now))

    def get_by_date(self, date: int) -> Optional[WeatherEntry]:
        """取得單日天氣資料，查無資料時返回 None"""
        return self.db.query(WeatherEntry).filter(WeatherEntry.date == date).first()

    def bulk_insert(self, rows: Iterable[dict]) -> int:
        """批次寫入天氣資料

        Args:
            rows: 天氣資料字典，鍵為 WeatherEntry 屬性名稱

        Returns:
            寫入的資料筆數

        Raises:
            ValueError: 任一筆資料的日期未正規化或含未知欄位（不寫入任何資料）
        """
        try:
            count = self._write(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return count

    def replace_all(self, rows: Iterable[dict]) -> int:
        """刪除所有資料後重新寫入（單一交易）"""
        rows = list(rows)
        self._validate(rows)

        try:
            deleted = self.db.query(WeatherEntry).delete()
            count = self._write(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("replaced %d weather rows with %d new rows", deleted, count)
        return count

    def delete_before(self, date: int) -> int:
        """刪除指定日期以前的資料

        Returns:
            刪除的資料筆數
        """
        deleted = self.db.query(WeatherEntry).filter(WeatherEntry.date < date).delete()
        self.db.commit()
        return deleted

    def _validate(self, rows: list[dict]) -> None:
        for row in rows:
            unknown = set(row) - _WRITABLE_FIELDS
            if unknown:
                raise ValueError(f"未知的欄位: {sorted(unknown)}")
            if "date" not in row:
                raise ValueError("缺少日期欄位")
            if not is_date_normalized(row["date"]):
                raise ValueError(f"日期必須正規化: {row['date']}")

    def _write(self, rows: Iterable[dict]) -> int:
        rows = list(rows)
        self._validate(rows)

        # 同一批次中相同日期以最後一筆為準
        by_date = {row["date"]: row for row in rows}

        for date, data in by_date.items():
            existing = self.get_by_date(date)

            if existing:
                for key, value in data.items():
                    setattr(existing, key, value)
            else:
                self.db.add(WeatherEntry(**data))

        return len(by_date)
