# city_explorer/routers/location.py
# -----------------------------------------------------------------------------
# /location : 검색어 → Location (없으면 지오코딩 후 저장)
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.core.errors import NoDataError
from city_explorer.db.session import get_session
from city_explorer.schemas.resources import LocationOut
from city_explorer.services.location import LocationResolver

router = APIRouter(tags=["location"])

GENERIC_ERROR = "Sorry, something went wrong"


def get_resolver(request: Request) -> LocationResolver:
    return request.app.state.resolver


@router.get("/location", response_model=LocationOut)
async def get_location(
    data: str = Query(..., min_length=1, max_length=255),
    db: AsyncSession = Depends(get_session),
    resolver: LocationResolver = Depends(get_resolver),
):
    query = data.strip()
    if not query:
        raise HTTPException(status_code=422, detail="data는 비어 있을 수 없습니다")
    try:
        return await resolver.resolve(db, query)
    except NoDataError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"[Location] 실패: {query!r}")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR)
