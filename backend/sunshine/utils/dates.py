"""日期工具

所有儲存與查詢使用的日期皆為「正規化日期」：
UTC 當日 00:00:00 的毫秒時間戳。
"""

from datetime import date, datetime, timezone
from typing import Optional


DAY_IN_MILLIS = 24 * 60 * 60 * 1000


def normalize_date(millis: int) -> int:
    """將毫秒時間戳截斷至該 UTC 日的起點

    Args:
        millis: 任意 UTC 毫秒時間戳

    Returns:
        同一 UTC 日 00:00:00 的毫秒時間戳
    """
    # Python 的 % 結果恆為非負，1970 年以前的時間戳同樣向下取整
    return millis - millis % DAY_IN_MILLIS


def is_date_normalized(millis: int) -> bool:
    """判斷時間戳是否已正規化"""
    return millis % DAY_IN_MILLIS == 0


def current_millis(now: Optional[datetime] = None) -> int:
    """取得目前（或指定時間）的 UTC 毫秒時間戳

    Args:
        now: 指定時間，未帶時區者視為 UTC；None 表示現在

    Returns:
        UTC 毫秒時間戳
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    delta = now - epoch
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def normalized_utc_today(now: Optional[datetime] = None) -> int:
    """取得今天（UTC）的正規化日期"""
    return normalize_date(current_millis(now))


def elapsed_days(millis: int) -> int:
    """自 1970-01-01 起經過的天數"""
    return millis // DAY_IN_MILLIS


def millis_to_date(millis: int) -> date:
    return date.fromordinal(date(1970, 1, 1).toordinal() + elapsed_days(millis))


def date_to_millis(day: date) -> int:
    return (day.toordinal() - date(1970, 1, 1).toordinal()) * DAY_IN_MILLIS
