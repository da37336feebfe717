"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from wasteland.config import settings  # noqa: E402
from wasteland.core.content import GameContent, load_content  # noqa: E402
from wasteland.core.engine import CommandInterpreter, CommandResult, new_session  # noqa: E402
from wasteland.core.save_state import InMemorySaveStorage  # noqa: E402
from wasteland.core.session import GameSession  # noqa: E402
from wasteland.db.database import get_db  # noqa: E402
from wasteland.db.models import Base  # noqa: E402
from wasteland.main import app  # noqa: E402
from wasteland.services.game_service import GameService  # noqa: E402
from wasteland.services.save_service import DatabaseSaveStorage  # noqa: E402

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)
Base.metadata.create_all(bind=TEST_ENGINE)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture(scope="session")
def content() -> GameContent:
    """기본 월드 콘텐츠 (템플릿은 불변이므로 1회 로드)"""
    return load_content(settings.CONTENT_PATH)


@pytest.fixture()
def storage() -> InMemorySaveStorage:
    return InMemorySaveStorage()


@pytest.fixture()
def session(content: GameContent, storage: InMemorySaveStorage) -> GameSession:
    """시드 고정 세션"""
    return new_session(content, storage, seed=1234)


@pytest.fixture()
def interpreter(session: GameSession) -> CommandInterpreter:
    interp = CommandInterpreter(session)
    interp.start()
    return interp


@pytest.fixture()
def run(interpreter: CommandInterpreter):
    """커맨드 실행 헬퍼. 반환: CommandResult"""

    def _run(*commands: str) -> CommandResult:
        result = CommandResult()
        for text in commands:
            result = interpreter.execute(text)
        return result

    return _run


@pytest.fixture()
def client(content: GameContent):
    """FastAPI TestClient wired to an in-memory SQLite database."""
    with TestClient(app) as test_client:
        app.state.game_service = GameService(
            content=content,
            storage=DatabaseSaveStorage(TestSession),
            default_slot="testSlot",
            seed=7,
        )
        yield test_client


@pytest.fixture()
def db_session() -> Session:
    """Raw database session for direct DB assertions."""
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def db_storage() -> DatabaseSaveStorage:
    """테스트 DB에 연결된 세이브 저장소"""
    return DatabaseSaveStorage(TestSession)
