# city_explorer/services/providers/http.py
# -----------------------------------------------------------------------------
# 외부 API 공통 GET 헬퍼
# - 단일 요청, 설정된 타임아웃, 재시도 없음
# - httpx 오류/JSON 디코드 오류 → ProviderError 로 변환
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from city_explorer.core.config import settings
from city_explorer.core.errors import ProviderError


def require_key(provider: str, key: Optional[str]) -> str:
    if not key:
        raise ProviderError(provider, "API 키가 설정되어 있지 않습니다")
    return key


async def get_json(
    provider: str,
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    try:
        if client is not None:
            r = await client.get(url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SEC) as c:
                r = await c.get(url, params=params, headers=headers)
        r.raise_for_status()
        return r.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"[{provider}] HTTP {e.response.status_code}: {e.request.url}")
        raise ProviderError(provider, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.error(f"[{provider}] HTTPError: {e!r}")
        raise ProviderError(provider, str(e) or type(e).__name__) from e
    except ValueError as e:
        logger.error(f"[{provider}] JSON 디코드 실패: {e}")
        raise ProviderError(provider, "응답이 JSON 형식이 아닙니다") from e


def malformed(provider: str, err: Exception) -> ProviderError:
    logger.error(f"[{provider}] 응답 형식 오류: {err!r}")
    return ProviderError(provider, f"malformed payload: {err!r}")
