"""서버 상태 확인 엔드포인트"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wasteland.api.game import get_game_service
from wasteland.api.schemas import HealthResponse
from wasteland.core.logging import get_logger
from wasteland.db.database import get_db
from wasteland.services.game_service import GameService

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    db: Session = Depends(get_db),
    service: GameService = Depends(get_game_service),
) -> HealthResponse:
    """세이브 DB 연결과 활성 세션 수를 보고한다.

    DB가 응답하지 않아도 200으로 응답하고 status만 error로 바꾼다.
    """
    sessions = service.session_count()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Save database unreachable: %s", e)
        return HealthResponse(status="error", database="disconnected", sessions=sessions)
    return HealthResponse(status="ok", database="connected", sessions=sessions)
