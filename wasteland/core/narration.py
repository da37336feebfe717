"""서술 이벤트 & UI 갱신 신호

엔진이 표현 계층에 내보내는 출력은 두 종류뿐이다.
- Narration: (text, severity) 쌍
- UI 갱신 신호: 변경된 패널 이름 집합
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wasteland.core.event_bus import EventBus, GameEvent
from wasteland.core.event_types import EventTypes


class Severity(str, Enum):
    NORMAL = "normal"
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    HIGHLIGHT = "highlight"


class Panel(str, Enum):
    VITALS = "vitals"
    INVENTORY = "inventory"
    LOCATION = "location"
    QUESTS = "quests"
    TIME = "time"


@dataclass(frozen=True)
class Narration:
    text: str
    severity: Severity = Severity.NORMAL

    def to_dict(self) -> dict:
        return {"text": self.text, "severity": self.severity.value}


class Narrator:
    """커맨드 1회분의 서술을 모으고 EventBus로 내보낸다.

    say()는 즉시 NARRATION 이벤트를 발행한다.
    refresh()는 패널을 모아두었다가 flush() 시점에 UI_REFRESH 한 번으로 발행한다.
    """

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._lines: list[Narration] = []
        self._panels: set[Panel] = set()

    def signal(self, event_type: str, **data) -> None:
        """서술 외 상태 전이 이벤트 발행"""
        self._bus.emit(GameEvent(event_type=event_type, data=data, source="engine"))

    def say(self, text: str, severity: Severity = Severity.NORMAL) -> None:
        line = Narration(text, Severity(severity))
        self._lines.append(line)
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.NARRATION,
                data=line.to_dict(),
                source="narrator",
            )
        )

    def info(self, text: str) -> None:
        self.say(text, Severity.INFO)

    def success(self, text: str) -> None:
        self.say(text, Severity.SUCCESS)

    def error(self, text: str) -> None:
        self.say(text, Severity.ERROR)

    def highlight(self, text: str) -> None:
        self.say(text, Severity.HIGHLIGHT)

    def refresh(self, *panels: Panel) -> None:
        self._panels.update(panels)

    def flush(self) -> tuple[list[Narration], set[Panel]]:
        """모은 서술/패널을 반환하고 비운다. 갱신할 패널이 있으면 신호 발행."""
        lines, panels = self._lines, self._panels
        self._lines, self._panels = [], set()
        if panels:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.UI_REFRESH,
                    data={"panels": sorted(p.value for p in panels)},
                    source="narrator",
                )
            )
        return lines, panels
