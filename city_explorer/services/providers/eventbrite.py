# city_explorer/services/providers/eventbrite.py
# Eventbrite 이벤트 검색: 정규화 주소 기준
from datetime import datetime
from typing import Dict, List, Optional

import httpx

from city_explorer.core.config import settings
from city_explorer.services.providers.http import get_json, malformed, require_key

PROVIDER = "events"


def to_event(event: Dict) -> Dict:
    start = datetime.fromisoformat(event["start"]["local"])
    return {
        "link": event["url"],
        "name": event["name"]["text"],
        "event_date": start.strftime("%a %b %d %Y"),
        "summary": event.get("summary"),
    }


async def fetch_events(
    formatted_query: str, client: Optional[httpx.AsyncClient] = None
) -> List[Dict]:
    key = require_key(PROVIDER, settings.EVENTBRITE_API_KEY)
    data = await get_json(
        PROVIDER,
        settings.EVENTBRITE_API_URL,
        params={"token": key, "location.address": formatted_query},
        client=client,
    )
    try:
        return [to_event(e) for e in data["events"]]
    except (KeyError, TypeError, ValueError) as e:
        raise malformed(PROVIDER, e) from e
