"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from wasteland.api.game import router as game_router
from wasteland.api.health import router as health_router
from wasteland.config import settings
from wasteland.core.content import load_content
from wasteland.core.logging import get_logger, setup_logging
from wasteland.db.database import SessionLocal, engine as db_engine
from wasteland.db.models import Base
from wasteland.services.clock import GameClock
from wasteland.services.game_service import GameService
from wasteland.services.save_service import DatabaseSaveStorage

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 월드 콘텐츠 로드
    logger.info("Loading world content from %s...", settings.CONTENT_PATH)
    content = load_content(settings.CONTENT_PATH)

    # GameService 초기화
    game_service = GameService(
        content=content,
        storage=DatabaseSaveStorage(SessionLocal),
        default_slot=settings.SAVE_SLOT,
        seed=settings.RNG_SEED,
    )
    app.state.game_service = game_service
    logger.info("GameService initialized.")

    # 게임 시계 시작
    clock = GameClock(game_service, interval=settings.CLOCK_TICK_SECONDS)
    clock.start()
    app.state.game_clock = clock

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    clock.stop()


app = FastAPI(title="Fallout: Wasteland Chronicles", lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
