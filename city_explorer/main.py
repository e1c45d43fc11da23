# city_explorer/main.py
# -----------------------------------------------------------------------------
# FastAPI 엔트리포인트
# - 서버 기동 시 로깅 설정, DB 열기(테이블 생성), 서비스 객체를 app.state 에 등록
# - 종료 시 대기 중인 저장 작업 마무리 후 DB 닫기
# 실행: uvicorn city_explorer.main:app --port 3000
# -----------------------------------------------------------------------------
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from city_explorer.core.config import Settings, settings as default_settings
from city_explorer.core.logging import setup_logging
from city_explorer.db.session import Database
from city_explorer.routers import location, resources
from city_explorer.services.cache import ResourceCache, build_resources
from city_explorer.services.location import LocationResolver


async def startup(app: FastAPI) -> None:
    cfg: Settings = app.state.settings
    db = Database(cfg.DATABASE_URL)
    await db.open()

    app.state.db = db
    app.state.resolver = LocationResolver()
    app.state.resources = ResourceCache(db, build_resources(cfg))
    logger.info(f"{cfg.APP_NAME} started (env={cfg.ENV})")


async def shutdown(app: FastAPI) -> None:
    cache = getattr(app.state, "resources", None)
    if cache is not None:
        await cache.drain()
    db = getattr(app.state, "db", None)
    if db is not None:
        await db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(app.state.settings.LOG_DIR, app.state.settings.LOG_LEVEL)
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or default_settings
    app = FastAPI(title=cfg.APP_NAME, lifespan=lifespan)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(location.router)
    app.include_router(resources.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
