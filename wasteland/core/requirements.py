"""출구/행동 조건 (Requirement)

각 조건은 플레이어 상태에 대한 순수 술어다.
알 수 없는 종류는 UnknownRequirement로 보존되고 항상 충족으로 판정된다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Optional, Union

from wasteland.core.errors import ContentError
from wasteland.core.logging import get_logger
from wasteland.core.player import PlayerState

logger = get_logger(__name__)


@dataclass(frozen=True)
class ItemRequirement:
    item: str  # 인벤토리 이름 부분 일치


@dataclass(frozen=True)
class SkillRequirement:
    skill: str
    value: int


@dataclass(frozen=True)
class SpecialRequirement:
    stat: str
    value: int


@dataclass(frozen=True)
class QuestRequirement:
    quest_id: str  # 완료되어 있어야 함


@dataclass(frozen=True)
class UnknownRequirement:
    kind: str


Requirement = Union[
    ItemRequirement,
    SkillRequirement,
    SpecialRequirement,
    QuestRequirement,
    UnknownRequirement,
]


def parse_requirement(raw: Optional[dict]) -> Optional[Requirement]:
    if not raw:
        return None

    kind = raw.get("type", "")
    try:
        if kind == "item":
            return ItemRequirement(item=str(raw["item"]))
        if kind == "skill":
            return SkillRequirement(skill=raw["skill"], value=int(raw["value"]))
        if kind == "special":
            return SpecialRequirement(stat=raw["stat"], value=int(raw["value"]))
        if kind == "quest":
            return QuestRequirement(quest_id=str(raw["quest"]))
    except (KeyError, ValueError) as e:
        raise ContentError(f"requirement '{kind}' is malformed: {e}") from e

    return UnknownRequirement(kind=str(kind))


def check_requirement(
    requirement: Requirement,
    player: PlayerState,
    completed_quests: Collection[str],
) -> bool:
    """조건 충족 여부"""
    if isinstance(requirement, ItemRequirement):
        return player.inventory.find(requirement.item) is not None
    if isinstance(requirement, SkillRequirement):
        return player.skills.get(requirement.skill, 0) >= requirement.value
    if isinstance(requirement, SpecialRequirement):
        return player.special.get(requirement.stat, 0) >= requirement.value
    if isinstance(requirement, QuestRequirement):
        return requirement.quest_id in completed_quests

    logger.debug("Unknown requirement kind %r treated as satisfied", requirement.kind)
    return True
