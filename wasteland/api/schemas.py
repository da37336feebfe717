"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class CreateSessionRequest(BaseModel):
    """새 게임 세션 요청"""

    slot: Optional[str] = Field(
        None, min_length=1, max_length=100, description="세이브 슬롯 키 (기본: 설정값)"
    )


class CommandRequest(BaseModel):
    """텍스트 커맨드 요청"""

    text: str = Field(..., max_length=500, description="플레이어 입력 한 줄")


# === Response Schemas ===


class NarrationLine(BaseModel):
    """서술 한 줄"""

    text: str
    severity: str


class LocationInfo(BaseModel):
    """위치 정보"""

    id: str
    name: str
    description: str
    exits: list[str] = []


class ObjectiveInfo(BaseModel):
    description: str
    done: bool


class QuestInfo(BaseModel):
    id: str
    name: str
    objectives: list[ObjectiveInfo] = []


class QuestLogInfo(BaseModel):
    """퀘스트 일지"""

    active: list[QuestInfo] = []
    completed: list[str] = []


class GameStateResponse(BaseModel):
    """세션 상태 (UI 패널 갱신용)"""

    session_id: str
    status: str
    mode: str
    game_time: int
    location: LocationInfo
    player: dict[str, Any]
    quests: QuestLogInfo
    combat: Optional[dict[str, Any]] = None
    dialogue: Optional[dict[str, Any]] = None


class CommandResponse(BaseModel):
    """커맨드 처리 결과"""

    session_id: str
    lines: list[NarrationLine]
    refresh: list[str] = []
    status: str
    mode: str
    state: GameStateResponse


class ErrorResponse(BaseModel):
    """에러 응답"""

    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """서버 상태"""

    status: str
    database: str
    sessions: int = Field(0, description="메모리에 살아있는 게임 세션 수")
