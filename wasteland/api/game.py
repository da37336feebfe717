"""Game API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from wasteland.api.schemas import (
    CommandRequest,
    CommandResponse,
    CreateSessionRequest,
    ErrorResponse,
    GameStateResponse,
)
from wasteland.core.engine import CommandResult
from wasteland.core.logging import get_logger
from wasteland.services.game_service import GameService, SessionNotFoundError

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Unknown session"}}


def get_game_service(request: Request) -> GameService:
    """GameService 인스턴스 반환 (의존성 주입)"""
    service: GameService = request.app.state.game_service
    return service


def _build_state(session_id: str, state: dict) -> GameStateResponse:
    return GameStateResponse(session_id=session_id, **state)


def _build_response(session_id: str, result: CommandResult, state: dict) -> CommandResponse:
    data = result.to_dict()
    return CommandResponse(
        session_id=session_id,
        lines=data["lines"],
        refresh=data["refresh"],
        status=data["status"],
        mode=data["mode"],
        state=_build_state(session_id, state),
    )


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


@router.post("/sessions", response_model=CommandResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    request: CreateSessionRequest | None = None,
    service: GameService = Depends(get_game_service),
) -> CommandResponse:
    """
    새 게임 세션 시작

    Vault 101에서 새 캐릭터로 시작하고 첫 화면 서술을 반환합니다.
    """
    slot = request.slot if request else None
    session_id, result, state = service.create_session(slot=slot)
    return _build_response(session_id, result, state)


@router.post("/sessions/{session_id}/commands", response_model=CommandResponse, responses=_NOT_FOUND)
def run_command(
    session_id: str,
    request: CommandRequest,
    service: GameService = Depends(get_game_service),
) -> CommandResponse:
    """텍스트 커맨드 1개 실행"""
    try:
        result, state = service.execute(session_id, request.text)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return _build_response(session_id, result, state)


@router.get("/sessions/{session_id}", response_model=GameStateResponse, responses=_NOT_FOUND)
def get_session_state(
    session_id: str,
    service: GameService = Depends(get_game_service),
) -> GameStateResponse:
    """세션 상태 조회"""
    try:
        state = service.get_state(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return _build_state(session_id, state)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND)
def delete_session(
    session_id: str,
    service: GameService = Depends(get_game_service),
) -> None:
    """세션 종료 (세이브 슬롯은 유지)"""
    try:
        service.drop_session(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    logger.info("Session closed via API: %s", session_id)
