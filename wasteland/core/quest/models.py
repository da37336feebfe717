"""퀘스트 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wasteland.core.errors import ContentError

from .enums import ObjectiveKind


@dataclass(frozen=True)
class Objective:
    """퀘스트 목표 단위. 완료 여부는 저장하지 않고 매번 판정한다."""

    description: str
    kind: ObjectiveKind
    target: Optional[str] = None  # location id / NPC 이름 / quest id
    threshold: int = 1  # combat_encounters 전용

    @classmethod
    def from_dict(cls, data: dict) -> Objective:
        try:
            kind = ObjectiveKind(data["type"])
            description = str(data["description"])
        except (KeyError, ValueError) as e:
            raise ContentError(f"objective is malformed: {data!r}") from e

        target = data.get("target")
        if kind != ObjectiveKind.COMBAT_ENCOUNTERS and not target:
            raise ContentError(f"objective '{description}' needs a target")

        return cls(
            description=description,
            kind=kind,
            target=target,
            threshold=int(data.get("threshold", 1)),
        )


@dataclass(frozen=True)
class QuestReward:
    """퀘스트 완료 시 보상"""

    experience: int = 0
    caps: int = 0


@dataclass(frozen=True)
class Quest:
    quest_id: str
    name: str
    description: str
    objectives: tuple[Objective, ...] = ()
    reward: QuestReward = field(default_factory=QuestReward)

    @classmethod
    def from_dict(cls, quest_id: str, data: dict) -> Quest:
        if "name" not in data:
            raise ContentError(f"quest '{quest_id}' has no name")
        raw_reward = data.get("reward") or {}
        return cls(
            quest_id=quest_id,
            name=data["name"],
            description=data.get("description", ""),
            objectives=tuple(
                Objective.from_dict(raw) for raw in data.get("objectives", [])
            ),
            reward=QuestReward(
                experience=int(raw_reward.get("experience", 0)),
                caps=int(raw_reward.get("caps", 0)),
            ),
        )
