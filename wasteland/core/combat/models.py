"""전투 도메인 모델"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from wasteland.core.item.models import Item, new_uid


class CombatPhase(str, Enum):
    IDLE = "idle"
    ENGAGED = "engaged"


class CombatOutcome(str, Enum):
    """교전 종료 사유. 모두 IDLE로 복귀한다."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"


@dataclass
class Enemy:
    """위치에 배치된 적 개체. hp는 전투 중 변한다."""

    name: str
    hp: int
    max_hp: int
    damage: int
    experience: int
    description: str = ""
    loot: list[Item] = field(default_factory=list)
    uid: str = field(default_factory=new_uid)

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def spawn(self) -> Enemy:
        """원형에서 새 개체. 전리품도 새 개체로 복제."""
        return replace(
            self,
            hp=self.max_hp,
            loot=[item.spawn(item.count) for item in self.loot],
            uid=new_uid(),
        )


@dataclass
class CombatState:
    """현재 교전 상태 (세션당 1개)"""

    phase: CombatPhase = CombatPhase.IDLE
    enemy: Optional[Enemy] = None
    rounds: int = 0

    @property
    def active(self) -> bool:
        return self.phase == CombatPhase.ENGAGED

    def engage(self, enemy: Enemy) -> None:
        self.phase = CombatPhase.ENGAGED
        self.enemy = enemy
        self.rounds = 0

    def reset(self) -> None:
        self.phase = CombatPhase.IDLE
        self.enemy = None
        self.rounds = 0
