# city_explorer/services/location.py
# -----------------------------------------------------------------------------
# 위치 해석기 (검색어 → Location)
# - DB에 같은 검색어가 있으면 그대로 반환 (지오코딩 호출 없음)
# - 없으면 지오코딩 → 첫 번째 결과 저장 → id 포함 행 반환
# -----------------------------------------------------------------------------
from typing import Awaitable, Callable, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.core.errors import NoDataError
from city_explorer.db import crud
from city_explorer.db.models import Location
from city_explorer.services.providers import geocode

Geocoder = Callable[[str], Awaitable[List[Dict]]]


class LocationResolver:
    def __init__(self, geocoder: Optional[Geocoder] = None):
        self.geocoder = geocoder or geocode.geocode

    async def resolve(self, db: AsyncSession, query: str) -> Location:
        found = await crud.get_location_by_query(db, query)
        if found is not None:
            logger.info(f"[Location] cache hit: {query!r} -> id={found.id}")
            return found

        logger.info(f"[Location] cache miss: {query!r}, 지오코딩 호출")
        results = await self.geocoder(query)
        if not results:
            raise NoDataError(f"'{query}'에 해당하는 위치를 찾을 수 없습니다")

        first = results[0]
        location = await crud.insert_location(
            db,
            search_query=query,
            formatted_query=first["formatted_query"],
            latitude=first["latitude"],
            longitude=first["longitude"],
        )
        logger.info(
            f"[Location] saved id={location.id} {location.formatted_query!r} "
            f"({location.latitude}, {location.longitude})"
        )
        return location
