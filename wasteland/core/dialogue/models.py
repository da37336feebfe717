"""대화 시스템 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wasteland.core.effects import Effect
from wasteland.core.item.models import new_uid


@dataclass(frozen=True)
class DialogueOption:
    """대화 선택지 1개. follow_ups가 있으면 선택 후 그 목록으로 교체된다."""

    prompt: str
    response: str
    effect: Optional[Effect] = None
    follow_ups: tuple["DialogueOption", ...] = ()


@dataclass
class NPC:
    name: str
    description: str
    greeting: str
    options: tuple[DialogueOption, ...] = ()
    quest_id: Optional[str] = None  # 대화 시작 시 즉시 제안
    uid: str = field(default_factory=new_uid)


@dataclass
class DialogueState:
    """대화 세션 (인메모리 상태). npc가 None이면 비활성."""

    npc: Optional[NPC] = None
    options: tuple[DialogueOption, ...] = ()
    depth: int = 0  # 선택으로 내려간 단계 수

    @property
    def active(self) -> bool:
        return self.npc is not None

    def open(self, npc: NPC) -> None:
        self.npc = npc
        self.options = npc.options
        self.depth = 0

    def descend(self, follow_ups: tuple[DialogueOption, ...]) -> None:
        self.options = follow_ups
        self.depth += 1

    def close(self) -> None:
        self.npc = None
        self.options = ()
        self.depth = 0
