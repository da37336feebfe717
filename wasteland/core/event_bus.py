"""EventBus - 엔진 → 표현 계층 이벤트 전달

엔진은 화면 상태를 직접 건드리지 않는다. 서술(narration)과 UI 갱신 신호를
이벤트로 발행하고, CLI/API 같은 표현 계층이 구독해서 처리한다.

규칙:
- 핸들러는 동기 호출된다 (한 커맨드 처리 중에 모두 완료)
- 핸들러 내부 재발행은 MAX_DEPTH 단계까지만 전파
- 핸들러 예외는 로그만 남기고 다른 핸들러 호출을 막지 않는다
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from wasteland.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 핸들러 안에서 재발행 가능한 최대 깊이


@dataclass
class GameEvent:
    """이벤트 데이터 컨테이너

    Args:
        event_type: 이벤트 유형 (EventTypes 상수)
        data: 이벤트 데이터 (직렬화 가능한 값 위주)
        source: 발행한 컴포넌트 이름
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    _depth: int = field(default=0, repr=False)


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """세션 단위 동기 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe(EventTypes.NARRATION, printer)
        bus.emit(GameEvent(EventTypes.NARRATION, {"text": "...", "severity": "info"}, "navigator"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        self._handlers[event_type].append(handler)
        logger.debug("EventBus 구독: %s → %s", event_type, handler.__qualname__)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제. 미등록 핸들러는 경고만 남긴다."""
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            logger.warning("핸들러 미등록: %s → %s", event_type, handler.__qualname__)

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 등록 순서대로 호출."""
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                "EventBus 전파 깊이 초과 (%d): %s:%s 무시됨",
                MAX_DEPTH,
                event.source,
                event.event_type,
            )
            return

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            return

        event._depth = self._current_depth
        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "EventBus 핸들러 에러: %s (event=%s)",
                        handler.__qualname__,
                        event.event_type,
                    )
        finally:
            self._current_depth -= 1

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self._current_depth = 0

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())
