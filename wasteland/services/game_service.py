"""게임 세션 Service - 세션 레지스트리, 세션별 잠금

architecture: Service → Core 허용. 커맨드 처리와 시계 tick은
같은 세션 잠금을 잡으므로 한 세션 안에서는 항상 직렬화된다.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Optional

from wasteland.core.content import GameContent
from wasteland.core.engine import CommandInterpreter, CommandResult, new_session
from wasteland.core.event_bus import EventBus, GameEvent
from wasteland.core.event_types import EventTypes
from wasteland.core.save_state import SaveStorage
from wasteland.core.session import GameSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """등록되지 않은 세션 id"""


@dataclass
class _SessionEntry:
    session: GameSession
    interpreter: CommandInterpreter
    lock: threading.Lock


class GameService:
    """진행 중인 게임 세션들을 관리"""

    def __init__(
        self,
        content: GameContent,
        storage: SaveStorage,
        default_slot: str,
        seed: Optional[int] = None,
    ):
        self._content = content
        self._storage = storage
        self._default_slot = default_slot
        self._seed = seed
        self._sessions: dict[str, _SessionEntry] = {}
        self._registry_lock = threading.Lock()

    # === 세션 관리 ===

    def create_session(self, slot: Optional[str] = None) -> tuple[str, CommandResult, dict]:
        """새 세션 생성. 반환: (session_id, 첫 화면 결과, 상태)"""
        session_id = uuid.uuid4().hex
        bus = EventBus()
        self._register_event_handlers(session_id, bus)

        session = new_session(
            self._content,
            self._storage,
            slot=slot or self._default_slot,
            seed=self._seed,
            bus=bus,
        )
        entry = _SessionEntry(
            session=session,
            interpreter=CommandInterpreter(session),
            lock=threading.Lock(),
        )
        with entry.lock:
            result = entry.interpreter.start()
            state = session.snapshot()

        with self._registry_lock:
            self._sessions[session_id] = entry
        logger.info("Session created: %s (slot=%s)", session_id, session.slot)
        return session_id, result, state

    def drop_session(self, session_id: str) -> None:
        with self._registry_lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info("Session dropped: %s", session_id)

    def session_count(self) -> int:
        with self._registry_lock:
            return len(self._sessions)

    # === 커맨드 ===

    def execute(self, session_id: str, text: str) -> tuple[CommandResult, dict]:
        entry = self._get(session_id)
        with entry.lock:
            result = entry.interpreter.execute(text)
            state = entry.session.snapshot()
        return result, state

    def get_state(self, session_id: str) -> dict:
        entry = self._get(session_id)
        with entry.lock:
            return entry.session.snapshot()

    # === 시계 ===

    def tick_all(self, seconds: int = 1) -> None:
        with self._registry_lock:
            entries = list(self._sessions.values())
        for entry in entries:
            with entry.lock:
                entry.session.tick(seconds)

    # === 내부 ===

    def _get(self, session_id: str) -> _SessionEntry:
        with self._registry_lock:
            entry = self._sessions.get(session_id)
        if entry is None:
            raise SessionNotFoundError(session_id)
        return entry

    def _register_event_handlers(self, session_id: str, bus: EventBus) -> None:
        """세션 이벤트 버스 구독 (로그 기록용)"""

        def on_quest_completed(event: GameEvent) -> None:
            logger.info("[%s] Quest completed: %s", session_id, event.data.get("quest_id"))

        def on_game_over(event: GameEvent) -> None:
            logger.info(
                "[%s] Game over at level %s (%ss)",
                session_id,
                event.data.get("level"),
                event.data.get("game_time"),
            )

        bus.subscribe(EventTypes.QUEST_COMPLETED, on_quest_completed)
        bus.subscribe(EventTypes.GAME_OVER, on_game_over)
