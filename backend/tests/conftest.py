"""共用測試設定"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sunshine.data.contract import WeatherContract
from sunshine.models import Base


@pytest.fixture
def contract():
    return WeatherContract()


@pytest.fixture
def db_session():
    """記憶體 SQLite session，每個測試重建"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def make_row(date: int, **overrides) -> dict:
    """建立一筆天氣資料"""
    row = {
        "date": date,
        "weather_id": 800,
        "min_temp": 10.0,
        "max_temp": 20.0,
        "humidity": 70.0,
        "pressure": 1013.0,
        "wind_speed": 5.0,
        "degrees": 180,
    }
    row.update(overrides)
    return row
