# city_explorer/db/crud.py
# -----------------------------------------------------------------------------
# 읽기/쓰기 유틸 함수 모음
# - 위치: 검색어 조회 / 업서트(충돌 시 기존 행 반환)
# - 리소스 테이블 공통: location_id 기준 조회 / 삭제 / 일괄 저장
# -----------------------------------------------------------------------------
from typing import Iterable, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.db.models import Location


async def get_location_by_query(db: AsyncSession, search_query: str) -> Location | None:
    stmt = select(Location).where(Location.search_query == search_query)
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def get_location(db: AsyncSession, location_id: int) -> Location | None:
    return await db.get(Location, location_id)


async def insert_location(
    db: AsyncSession,
    *,
    search_query: str,
    formatted_query: str,
    latitude: float,
    longitude: float,
) -> Location:
    """
    검색어 기준 업서트.
    - 새 행이면 INSERT 후 id 포함 행 반환
    - 동시 요청으로 UNIQUE 충돌 시 롤백 후 기존 행 반환 (항상 id 보장)
    """
    location = Location(
        search_query=search_query,
        formatted_query=formatted_query,
        latitude=latitude,
        longitude=longitude,
    )
    db.add(location)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await get_location_by_query(db, search_query)
        if existing is None:
            raise
        return existing
    await db.refresh(location)
    return location


async def get_rows_by_location(db: AsyncSession, model, location_id: int) -> Sequence:
    # 백그라운드 세션이 저장한 행을 읽으므로 identity map 값을 덮어씀
    stmt = (
        select(model)
        .where(model.location_id == location_id)
        .order_by(model.id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def delete_by_location_id(db: AsyncSession, model, location_id: int) -> int:
    res = await db.execute(delete(model).where(model.location_id == location_id))
    await db.commit()
    return res.rowcount or 0


async def save_rows(
    db: AsyncSession, model, location_id: int, records: Iterable[dict]
) -> int:
    inserted = 0
    for r in records:
        db.add(model(**r, location_id=location_id))
        inserted += 1
    await db.commit()
    return inserted
