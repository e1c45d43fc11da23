# city_explorer/services/providers/geocode.py
# Google Geocoding API: 자유 검색어 → 주소/좌표 후보 목록
from typing import Dict, List, Optional

import httpx

from city_explorer.core.config import settings
from city_explorer.services.providers.http import get_json, malformed, require_key

PROVIDER = "geocode"


def to_location(result: Dict) -> Dict:
    loc = result["geometry"]["location"]
    return {
        "formatted_query": result["formatted_address"],
        "latitude": float(loc["lat"]),
        "longitude": float(loc["lng"]),
    }


async def geocode(query: str, client: Optional[httpx.AsyncClient] = None) -> List[Dict]:
    """
    검색어를 지오코딩하여 후보 목록을 반환.
    결과가 없으면 빈 리스트 (ZERO_RESULTS).
    """
    key = require_key(PROVIDER, settings.GEOCODE_API_KEY)
    data = await get_json(
        PROVIDER,
        settings.GEOCODE_API_URL,
        params={"address": query, "key": key},
        client=client,
    )
    try:
        return [to_location(r) for r in data.get("results") or []]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise malformed(PROVIDER, e) from e
