# city_explorer/routers/resources.py
# -----------------------------------------------------------------------------
# 위치별 리소스 조회 (모두 read-through 캐시)
# /weather : id + 위경도       (15초 지나면 재조회)
# /events  : id + 정규화 주소
# /movies  : id + 원본 검색어
# /yelp    : id + 위경도
# -----------------------------------------------------------------------------
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.core.errors import NoDataError
from city_explorer.db.session import get_session
from city_explorer.routers.location import GENERIC_ERROR
from city_explorer.schemas.resources import EventOut, MovieOut, WeatherOut, YelpOut
from city_explorer.services.cache import ResourceCache

router = APIRouter(tags=["resources"])


def get_resource_cache(request: Request) -> ResourceCache:
    return request.app.state.resources


async def _serve(
    cache: ResourceCache,
    db: AsyncSession,
    name: str,
    location_id: int,
    label: str | None = None,
    **params,
):
    try:
        return await cache.fetch_or_cache(db, name, location_id, label=label, **params)
    except NoDataError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"[{name}] 실패: location={location_id}")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR)


@router.get("/weather", response_model=List[WeatherOut])
async def get_weather(
    id: int = Query(..., ge=1),
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    search_query: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
    cache: ResourceCache = Depends(get_resource_cache),
):
    return await _serve(
        cache, db, "weather", id, label=search_query,
        latitude=latitude, longitude=longitude,
    )


@router.get("/events", response_model=List[EventOut])
async def get_events(
    id: int = Query(..., ge=1),
    formatted_query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_session),
    cache: ResourceCache = Depends(get_resource_cache),
):
    return await _serve(cache, db, "events", id, formatted_query=formatted_query)


@router.get("/movies", response_model=List[MovieOut])
async def get_movies(
    id: int = Query(..., ge=1),
    search_query: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_session),
    cache: ResourceCache = Depends(get_resource_cache),
):
    return await _serve(cache, db, "movies", id, search_query=search_query)


@router.get("/yelp", response_model=List[YelpOut])
async def get_yelp(
    id: int = Query(..., ge=1),
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    db: AsyncSession = Depends(get_session),
    cache: ResourceCache = Depends(get_resource_cache),
):
    return await _serve(cache, db, "yelp", id, latitude=latitude, longitude=longitude)
