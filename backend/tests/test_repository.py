"""天氣資料存取測試"""

from datetime import datetime, timezone

import pytest
from conftest import make_row
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from sunshine.data.repository import WeatherRepository
from sunshine.models import WeatherEntry
from sunshine.utils.dates import DAY_IN_MILLIS


JAN_15_2020 = 1579046400000
NOW = datetime(2020, 1, 15, 13, 45, tzinfo=timezone.utc)


@pytest.fixture
def repository(db_session, contract):
    return WeatherRepository(db_session, contract)


def test_table_uses_contract_names(db_session):
    """測試資料表名稱與欄位名稱"""
    columns = {c["name"] for c in inspect(db_session.get_bind()).get_columns("weather")}
    assert columns == {
        "id", "date", "weather_id", "min", "max", "humidity", "pressure", "wind", "degrees",
    }


def test_bulk_insert_and_get_by_date(repository):
    """測試寫入與單日查詢"""
    count = repository.bulk_insert([make_row(JAN_15_2020), make_row(JAN_15_2020 + DAY_IN_MILLIS)])

    assert count == 2
    entry = repository.get_by_date(JAN_15_2020)
    assert entry.weather_id == 800
    assert entry.max_temp == 20.0


def test_get_by_date_missing(repository):
    """測試查無資料返回 None"""
    assert repository.get_by_date(JAN_15_2020) is None


def test_bulk_insert_rejects_unnormalized_date(repository, db_session):
    """測試未正規化的日期不寫入任何資料"""
    rows = [make_row(JAN_15_2020), make_row(JAN_15_2020 + 1000)]

    with pytest.raises(ValueError):
        repository.bulk_insert(rows)

    assert db_session.query(WeatherEntry).count() == 0


def test_bulk_insert_replaces_same_date(repository, db_session):
    """測試同一天的資料以新資料取代"""
    repository.bulk_insert([make_row(JAN_15_2020, weather_id=500)])
    repository.bulk_insert([make_row(JAN_15_2020, weather_id=800, max_temp=25.0)])

    assert db_session.query(WeatherEntry).count() == 1
    entry = repository.get_by_date(JAN_15_2020)
    assert entry.weather_id == 800
    assert entry.max_temp == 25.0


def test_bulk_insert_duplicate_in_batch(repository, db_session):
    """測試同一批次中重複日期以最後一筆為準"""
    count = repository.bulk_insert(
        [make_row(JAN_15_2020, weather_id=500), make_row(JAN_15_2020, weather_id=600)]
    )

    assert count == 1
    assert repository.get_by_date(JAN_15_2020).weather_id == 600


def test_forecast_from_today(repository):
    """測試只取今天以後的資料並依日期排序"""
    repository.bulk_insert([
        make_row(JAN_15_2020 + 2 * DAY_IN_MILLIS),
        make_row(JAN_15_2020 - DAY_IN_MILLIS),
        make_row(JAN_15_2020),
    ])

    entries = repository.forecast_from_today(NOW)

    assert [e.date for e in entries] == [JAN_15_2020, JAN_15_2020 + 2 * DAY_IN_MILLIS]


def test_query_without_selection(repository):
    """測試沒有條件時返回全部資料"""
    repository.bulk_insert([make_row(JAN_15_2020), make_row(JAN_15_2020 - DAY_IN_MILLIS)])

    assert len(repository.query()) == 2


def test_replace_all(repository, db_session):
    """測試整批取代"""
    repository.bulk_insert([make_row(JAN_15_2020 - DAY_IN_MILLIS), make_row(JAN_15_2020)])

    count = repository.replace_all([make_row(JAN_15_2020, weather_id=200)])

    assert count == 1
    assert db_session.query(WeatherEntry).count() == 1
    assert repository.get_by_date(JAN_15_2020).weather_id == 200


def test_replace_all_invalid_keeps_existing(repository, db_session):
    """測試取代資料無效時保留原資料"""
    repository.bulk_insert([make_row(JAN_15_2020)])

    with pytest.raises(ValueError):
        repository.replace_all([make_row(JAN_15_2020 + 1)])

    assert db_session.query(WeatherEntry).count() == 1


def test_delete_before(repository, db_session):
    """測試刪除舊資料"""
    repository.bulk_insert([
        make_row(JAN_15_2020 - 2 * DAY_IN_MILLIS),
        make_row(JAN_15_2020 - DAY_IN_MILLIS),
        make_row(JAN_15_2020),
    ])

    deleted = repository.delete_before(JAN_15_2020)

    assert deleted == 2
    assert [e.date for e in repository.query()] == [JAN_15_2020]


def test_replace_all_failure_keeps_existing_rows(repository, db_session):
    """測試整批取代失敗時回復，之後的提交不會保留刪除或部分寫入"""
    repository.bulk_insert([
        make_row(JAN_15_2020, weather_id=500),
        make_row(JAN_15_2020 + 2 * DAY_IN_MILLIS, weather_id=800),
    ])

    # weather_id 不可為空，提交時失敗
    with pytest.raises(IntegrityError):
        repository.replace_all([
            make_row(JAN_15_2020),
            make_row(JAN_15_2020 + DAY_IN_MILLIS, weather_id=None),
        ])

    repository.delete_before(0)

    assert [(e.date, e.weather_id) for e in repository.query()] == [
        (JAN_15_2020, 500),
        (JAN_15_2020 + 2 * DAY_IN_MILLIS, 800),
    ]


def test_bulk_insert_failure_rolls_back_updates(repository, db_session):
    """測試批次寫入失敗時已更新的資料也回復"""
    repository.bulk_insert([make_row(JAN_15_2020, weather_id=500)])

    with pytest.raises(IntegrityError):
        repository.bulk_insert([
            make_row(JAN_15_2020, weather_id=800),
            make_row(JAN_15_2020 + DAY_IN_MILLIS, weather_id=None),
        ])

    repository.delete_before(0)

    assert [(e.date, e.weather_id) for e in repository.query()] == [(JAN_15_2020, 500)]


@pytest.mark.parametrize("existing", [True, False])
def test_unknown_field_rejected(repository, db_session, existing):
    """測試含未知欄位的資料，不論日期是否已存在都拒絕寫入"""
    if existing:
        repository.bulk_insert([make_row(JAN_15_2020, weather_id=500)])

    with pytest.raises(ValueError):
        repository.bulk_insert([make_row(JAN_15_2020, weather_id=800, rain=1.0)])

    with pytest.raises(ValueError):
        repository.replace_all([make_row(JAN_15_2020, weather_id=800, rain=1.0)])

    expected = [(JAN_15_2020, 500)] if existing else []
    assert [(e.date, e.weather_id) for e in repository.query()] == expected


def test_missing_date_rejected(repository):
    row = make_row(JAN_15_2020)
    del row["date"]

    with pytest.raises(ValueError):
        repository.bulk_insert([row])
