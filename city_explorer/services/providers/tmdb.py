# city_explorer/services/providers/tmdb.py
# TMDB 영화 검색: 원본 검색어 기준
from typing import Dict, List, Optional

import httpx

from city_explorer.core.config import settings
from city_explorer.services.providers.http import get_json, malformed, require_key

PROVIDER = "movies"


def to_movie(movie: Dict) -> Dict:
    poster = movie.get("poster_path")
    return {
        "title": movie["title"],
        "overview": movie.get("overview"),
        "average_votes": movie.get("vote_average"),
        "total_votes": movie.get("vote_count"),
        # 포스터 없는 영화는 image_url 없음
        "image_url": settings.MOVIE_IMAGE_BASE_URL + poster.lstrip("/") if poster else None,
        "popularity": movie.get("popularity"),
        "released_on": movie.get("release_date"),
    }


async def fetch_movies(
    search_query: str, client: Optional[httpx.AsyncClient] = None
) -> List[Dict]:
    key = require_key(PROVIDER, settings.MOVIE_API_KEY)
    data = await get_json(
        PROVIDER,
        settings.MOVIE_API_URL,
        params={"api_key": key, "query": search_query},
        client=client,
    )
    try:
        return [to_movie(m) for m in data["results"]]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise malformed(PROVIDER, e) from e
