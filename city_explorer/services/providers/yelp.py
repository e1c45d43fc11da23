# city_explorer/services/providers/yelp.py
# Yelp Fusion 비즈니스 검색: 위경도 기준, Bearer 토큰 인증
from typing import Dict, List, Optional

import httpx

from city_explorer.core.config import settings
from city_explorer.services.providers.http import get_json, malformed, require_key

PROVIDER = "yelp"


def _auth_headers() -> Dict[str, str]:
    key = require_key(PROVIDER, settings.YELP_API_KEY)
    return {"Authorization": f"Bearer {key}", "Accept": "application/json"}


def to_business(biz: Dict) -> Dict:
    return {
        "name": biz["name"],
        "url": biz.get("url"),
        "image_url": biz.get("image_url"),
        "rating": biz.get("rating"),
        "price": biz.get("price"),
    }


async def fetch_businesses(
    latitude: float, longitude: float, client: Optional[httpx.AsyncClient] = None
) -> List[Dict]:
    data = await get_json(
        PROVIDER,
        settings.YELP_API_URL,
        params={"latitude": str(latitude), "longitude": str(longitude)},
        headers=_auth_headers(),
        client=client,
    )
    try:
        return [to_business(b) for b in data["businesses"]]
    except (KeyError, TypeError, ValueError) as e:
        raise malformed(PROVIDER, e) from e
