# city_explorer/core/config.py
# -----------------------------------------------------------------------------
# 전역 설정 관리 (pydantic-settings v2)
# - .env 파일과 OS 환경변수를 읽어 Settings 객체로 제공
# - 외부 API 키/엔드포인트, 캐시 정책, 로깅 옵션을 한곳에 정의
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 기본
    APP_NAME: str = "CityExplorer"
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite+aiosqlite:///./city_explorer.db"
    CORS_ORIGINS: list[str] = ["*"]

    # 외부 API 키들
    GEOCODE_API_KEY: str | None = None  # Google Geocoding
    WEATHER_API_KEY: str | None = None  # Dark Sky
    EVENTBRITE_API_KEY: str | None = None
    MOVIE_API_KEY: str | None = None  # TMDB
    YELP_API_KEY: str | None = None  # Yelp Fusion (Bearer)

    # 외부 API 엔드포인트
    GEOCODE_API_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    WEATHER_API_URL: str = "https://api.darksky.net/forecast"
    EVENTBRITE_API_URL: str = "https://www.eventbriteapi.com/v3/events/search"
    MOVIE_API_URL: str = "https://api.themoviedb.org/3/search/movie"
    MOVIE_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w185/"
    YELP_API_URL: str = "https://api.yelp.com/v3/businesses/search"

    # 캐시 정책
    WEATHER_MAX_AGE_SEC: int = 15
    RESULT_LIMIT: int = 2

    # 외부 호출 타임아웃 (재시도 없음)
    HTTP_TIMEOUT_SEC: float = 10.0

    # 로깅
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # .env에 추가 필드 무시
    )


settings = Settings()
