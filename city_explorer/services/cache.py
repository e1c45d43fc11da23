# city_explorer/services/cache.py
# -----------------------------------------------------------------------------
# 리소스 캐시 어댑터 (read-through)
# - 리소스별 설명자(ResourceDescriptor)만 등록하면 조회/갱신 흐름은 공통
# - hit: 저장된 행 반환 (max_age_ms 가 있으면 신선도 검사 후 만료 시 삭제 → miss)
# - miss: 외부 API 호출 → 백그라운드 저장(fire-and-forget) → limit 만큼 잘라 반환
# - 동시 miss 시 중복 호출/중복 저장 가능 (요청 병합 없음)
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.core.config import Settings
from city_explorer.core.errors import NoDataError
from city_explorer.db import crud
from city_explorer.db.models import Event, Movie, Weather, Yelp
from city_explorer.db.session import Database
from city_explorer.services.providers import darksky, eventbrite, tmdb, yelp

Fetcher = Callable[..., Awaitable[List[Dict]]]


def epoch_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ResourceDescriptor:
    name: str
    model: Any
    fetch: Fetcher
    limit: Optional[int] = None  # miss 응답 최대 건수
    max_age_ms: Optional[int] = None  # None 이면 영구 캐시


def build_resources(settings: Settings) -> Dict[str, ResourceDescriptor]:
    limit = settings.RESULT_LIMIT
    descriptors = [
        ResourceDescriptor(
            name="weather",
            model=Weather,
            fetch=darksky.fetch_weather,
            max_age_ms=settings.WEATHER_MAX_AGE_SEC * 1000,
        ),
        ResourceDescriptor(
            name="events", model=Event, fetch=eventbrite.fetch_events, limit=limit
        ),
        ResourceDescriptor(
            name="movies", model=Movie, fetch=tmdb.fetch_movies, limit=limit
        ),
        ResourceDescriptor(
            name="yelp", model=Yelp, fetch=yelp.fetch_businesses, limit=limit
        ),
    ]
    return {d.name: d for d in descriptors}


def _row_to_dict(row) -> Dict:
    return {c.name: getattr(row, c.name) for c in row.__table__.columns}


class ResourceCache:
    def __init__(
        self,
        database: Database,
        resources: Dict[str, ResourceDescriptor],
        now_ms: Callable[[], int] = epoch_ms,
    ):
        self.database = database
        self.resources = resources
        self.now_ms = now_ms
        self._pending: Set[asyncio.Task] = set()

    def descriptor(self, name: str) -> ResourceDescriptor:
        try:
            return self.resources[name]
        except KeyError:
            raise KeyError(f"등록되지 않은 리소스: {name}") from None

    def is_stale(self, desc: ResourceDescriptor, rows) -> bool:
        if desc.max_age_ms is None:
            return False
        newest = max(r.created_at for r in rows)
        return self.now_ms() - newest > desc.max_age_ms

    async def fetch_or_cache(
        self,
        db: AsyncSession,
        name: str,
        location_id: int,
        label: Optional[str] = None,
        **fetch_params,
    ) -> List[Dict]:
        desc = self.descriptor(name)
        rows = await crud.get_rows_by_location(db, desc.model, location_id)

        if rows:
            if not self.is_stale(desc, rows):
                logger.info(f"[{name}] cache hit: location={location_id} ({len(rows)}건)")
                return [_row_to_dict(r) for r in rows]
            deleted = await crud.delete_by_location_id(db, desc.model, location_id)
            logger.info(
                f"[{name}] 만료 데이터 삭제: location={location_id} "
                f"query={label!r} ({deleted}건)"
            )

        if await crud.get_location(db, location_id) is None:
            raise NoDataError(f"location id={location_id} 가 존재하지 않습니다")

        logger.info(f"[{name}] cache miss: location={location_id}, 외부 API 호출")
        records = await desc.fetch(**fetch_params)
        if records:
            self._schedule_save(desc, location_id, records)
        if desc.limit is not None:
            records = records[: desc.limit]
        return records

    def _schedule_save(
        self, desc: ResourceDescriptor, location_id: int, records: List[Dict]
    ) -> None:
        task = asyncio.create_task(self._save(desc, location_id, list(records)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _save(
        self, desc: ResourceDescriptor, location_id: int, records: List[Dict]
    ) -> None:
        # 응답과 분리된 저장: 실패해도 이미 받은 데이터는 반환됨
        try:
            async with self.database.session() as db:
                n = await crud.save_rows(db, desc.model, location_id, records)
            logger.debug(f"[{desc.name}] saved {n}건: location={location_id}")
        except Exception:
            logger.exception(f"[{desc.name}] 저장 실패: location={location_id}")

    async def drain(self) -> None:
        """대기 중인 백그라운드 저장이 모두 끝날 때까지 대기"""
        while self._pending:
            await asyncio.gather(*list(self._pending))
