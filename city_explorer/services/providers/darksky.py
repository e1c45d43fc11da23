# city_explorer/services/providers/darksky.py
# Dark Sky Forecast API: 위경도 → 일별 예보 (하루 1건)
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx

from city_explorer.core.config import settings
from city_explorer.services.providers.http import get_json, malformed, require_key

PROVIDER = "weather"


def to_weather(day: Dict, now_ms: int) -> Dict:
    when = datetime.fromtimestamp(int(day["time"]), tz=timezone.utc)
    return {
        "forecast": day["summary"],
        "time": when.strftime("%a %b %d %Y"),  # 예: "Mon Jan 07 2019"
        "created_at": now_ms,
    }


async def fetch_weather(
    latitude: float,
    longitude: float,
    now_ms: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict]:
    key = require_key(PROVIDER, settings.WEATHER_API_KEY)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    url = f"{settings.WEATHER_API_URL.rstrip('/')}/{key}/{latitude},{longitude}"
    data = await get_json(PROVIDER, url, client=client)
    try:
        return [to_weather(d, now_ms) for d in data["daily"]["data"]]
    except (KeyError, TypeError, ValueError) as e:
        raise malformed(PROVIDER, e) from e
