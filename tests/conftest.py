"""
Shared fixtures for the City Explorer test suite.

Provides:
- a temp-file SQLite Database opened/closed per test
- a request-style AsyncSession on top of it
- a saved Location row to hang resource rows off
- provider API keys set on the global settings
"""

import pytest

from city_explorer.core.config import settings
from city_explorer.db import crud
from city_explorer.db.session import Database


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def database(db_url):
    db = Database(db_url)
    await db.open()
    yield db
    await db.close()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
async def location(session):
    return await crud.insert_location(
        session,
        search_query="seattle",
        formatted_query="Seattle, WA, USA",
        latitude=47.6062095,
        longitude=-122.3320708,
    )


@pytest.fixture
def api_keys(monkeypatch):
    for name in (
        "GEOCODE_API_KEY",
        "WEATHER_API_KEY",
        "EVENTBRITE_API_KEY",
        "MOVIE_API_KEY",
        "YELP_API_KEY",
    ):
        monkeypatch.setattr(settings, name, f"test-{name.lower()}")
    return settings
