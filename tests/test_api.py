"""
HTTP surface tests: routes, query validation, error mapping.

The app is built with create_app() on a temp-file SQLite database and driven
through httpx.AsyncClient + ASGITransport. Provider calls are AsyncMocks
swapped into app.state.
"""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from city_explorer.core.config import Settings
from city_explorer.core.errors import ProviderError
from city_explorer.main import create_app, shutdown, startup
from city_explorer.services.cache import ResourceCache
from city_explorer.services.location import LocationResolver

RENTON = {
    "formatted_query": "Renton, WA 98056, USA",
    "latitude": 47.48,
    "longitude": -122.19,
}


@pytest.fixture
def geocoder():
    return AsyncMock(return_value=[RENTON])


@pytest.fixture
def fetchers():
    return {
        "weather": AsyncMock(
            return_value=[
                {"forecast": "Sunny.", "time": "Mon Jan 07 2019", "created_at": 1},
                {"forecast": "Rain.", "time": "Tue Jan 08 2019", "created_at": 1},
            ]
        ),
        "events": AsyncMock(
            return_value=[
                {"link": f"https://e/{i}", "name": f"E{i}", "event_date": "d", "summary": "s"}
                for i in range(4)
            ]
        ),
        "movies": AsyncMock(
            return_value=[
                {
                    "title": f"M{i}",
                    "overview": "o",
                    "average_votes": 7.0,
                    "total_votes": 10,
                    "image_url": None,
                    "popularity": 1.5,
                    "released_on": "2019-01-01",
                }
                for i in range(10)
            ]
        ),
        "yelp": AsyncMock(
            return_value=[
                {"name": f"B{i}", "url": "u", "image_url": "i", "rating": 4.0, "price": "$"}
                for i in range(3)
            ]
        ),
    }


@pytest.fixture
async def app(tmp_path, geocoder, fetchers):
    cfg = Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
    )
    application = create_app(cfg)
    await startup(application)

    application.state.resolver = LocationResolver(geocoder=geocoder)
    cache: ResourceCache = application.state.resources
    cache.resources = {
        name: replace(desc, fetch=fetchers[name]) for name, desc in cache.resources.items()
    }

    yield application
    await shutdown(application)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _location(client) -> dict:
    res = await client.get("/location", params={"data": "98005"})
    assert res.status_code == 200
    return res.json()


async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


class TestLocationRoute:
    async def test_scenario_98005(self, client, geocoder):
        body = await _location(client)

        assert body["id"] >= 1
        assert body["search_query"] == "98005"
        assert body["formatted_query"] == "Renton, WA 98056, USA"
        assert body["latitude"] == pytest.approx(47.48)
        assert body["longitude"] == pytest.approx(-122.19)

        again = await _location(client)
        assert again == body
        assert geocoder.await_count == 1

    async def test_missing_data_param(self, client):
        res = await client.get("/location")
        assert res.status_code == 422

    async def test_blank_data_param(self, client):
        res = await client.get("/location", params={"data": "   "})
        assert res.status_code == 422

    async def test_unknown_place_is_404(self, client, geocoder):
        geocoder.return_value = []
        res = await client.get("/location", params={"data": "qqqqqq"})
        assert res.status_code == 404

    async def test_provider_failure_is_generic_500(self, client, geocoder):
        geocoder.side_effect = ProviderError("geocode", "HTTP 503")
        res = await client.get("/location", params={"data": "98005"})
        assert res.status_code == 500
        assert res.json() == {"detail": "Sorry, something went wrong"}


class TestResourceRoutes:
    async def test_weather(self, client, app, fetchers):
        loc = await _location(client)
        params = {"id": loc["id"], "latitude": loc["latitude"], "longitude": loc["longitude"]}

        res = await client.get("/weather", params=params)
        assert res.status_code == 200
        assert [d["forecast"] for d in res.json()] == ["Sunny.", "Rain."]
        fetchers["weather"].assert_awaited_once_with(
            latitude=pytest.approx(47.48), longitude=pytest.approx(-122.19)
        )

        await app.state.resources.drain()
        # created_at=1 (epoch ms) 은 이미 만료 → 삭제 후 재조회
        res = await client.get("/weather", params=params)
        assert res.status_code == 200
        assert fetchers["weather"].await_count == 2

    async def test_events_truncated_then_cached(self, client, app, fetchers):
        loc = await _location(client)
        params = {"id": loc["id"], "formatted_query": loc["formatted_query"]}

        first = await client.get("/events", params=params)
        assert first.status_code == 200
        assert [e["name"] for e in first.json()] == ["E0", "E1"]
        fetchers["events"].assert_awaited_once_with(formatted_query="Renton, WA 98056, USA")

        await app.state.resources.drain()
        second = await client.get("/events", params=params)
        assert second.status_code == 200
        assert len(second.json()) == 4
        assert fetchers["events"].await_count == 1

    async def test_movies(self, client, fetchers):
        loc = await _location(client)
        res = await client.get(
            "/movies", params={"id": loc["id"], "search_query": loc["search_query"]}
        )
        assert res.status_code == 200
        assert len(res.json()) == 2
        assert res.json()[0]["title"] == "M0"
        fetchers["movies"].assert_awaited_once_with(search_query="98005")

    async def test_yelp(self, client, fetchers):
        loc = await _location(client)
        res = await client.get(
            "/yelp",
            params={"id": loc["id"], "latitude": loc["latitude"], "longitude": loc["longitude"]},
        )
        assert res.status_code == 200
        assert res.json()[0] == {
            "name": "B0", "url": "u", "image_url": "i", "rating": 4.0, "price": "$",
        }

    async def test_missing_params_422(self, client):
        assert (await client.get("/weather", params={"id": 1})).status_code == 422
        assert (await client.get("/events", params={"id": 1})).status_code == 422
        assert (await client.get("/movies", params={"search_query": "x"})).status_code == 422
        assert (
            await client.get("/yelp", params={"id": 1, "latitude": 100, "longitude": 0})
        ).status_code == 422

    async def test_provider_failure_is_generic_500(self, client, fetchers):
        loc = await _location(client)
        fetchers["yelp"].side_effect = ProviderError("yelp", "HTTP 401")

        res = await client.get(
            "/yelp",
            params={"id": loc["id"], "latitude": loc["latitude"], "longitude": loc["longitude"]},
        )
        assert res.status_code == 500
        assert res.json() == {"detail": "Sorry, something went wrong"}

        # 다른 요청에는 영향 없음
        ok = await client.get(
            "/movies", params={"id": loc["id"], "search_query": loc["search_query"]}
        )
        assert ok.status_code == 200

    @pytest.mark.parametrize(
        "path, params",
        [
            ("/weather", {"latitude": 1.0, "longitude": 2.0}),
            ("/events", {"formatted_query": "Nowhere"}),
            ("/movies", {"search_query": "nowhere"}),
            ("/yelp", {"latitude": 1.0, "longitude": 2.0}),
        ],
    )
    async def test_unknown_location_id_is_404(self, client, app, fetchers, path, params):
        res = await client.get(path, params={"id": 999, **params})
        await app.state.resources.drain()

        assert res.status_code == 404
        for fetch in fetchers.values():
            fetch.assert_not_awaited()
