"""퀘스트 추적기

생애주기: undiscovered → active → completed (완료는 종결 상태)
- 활성화는 offer()로만 (offer_quest 효과 또는 NPC 퀘스트 제안)
- 완료는 complete()로만 (complete_quest 효과)
- 목표 달성 여부는 저장하지 않고 플레이어/방문 기록에서 매번 계산
"""

from __future__ import annotations

import logging
from typing import Collection, Iterable, Optional

from wasteland.core.event_types import EventTypes
from wasteland.core.narration import Narrator, Panel
from wasteland.core.player import PlayerState
from wasteland.core.progression import grant_caps, grant_experience

from .enums import ObjectiveKind, QuestStatus
from .models import Objective, Quest

logger = logging.getLogger(__name__)


class QuestLog:
    def __init__(
        self,
        quests: dict[str, Quest],
        active: Optional[Iterable[str]] = None,
        completed: Optional[Iterable[str]] = None,
    ) -> None:
        self._quests = quests
        self._active: list[str] = []
        self._completed: list[str] = []
        self.restore(active or [], completed or [])

    # === 조회 ===

    def get(self, quest_id: str) -> Optional[Quest]:
        return self._quests.get(quest_id)

    def status(self, quest_id: str) -> QuestStatus:
        if quest_id in self._completed:
            return QuestStatus.COMPLETED
        if quest_id in self._active:
            return QuestStatus.ACTIVE
        return QuestStatus.UNDISCOVERED

    @property
    def active_ids(self) -> list[str]:
        return list(self._active)

    @property
    def completed_ids(self) -> list[str]:
        return list(self._completed)

    @property
    def active_quests(self) -> list[Quest]:
        return [self._quests[qid] for qid in self._active]

    # === 전이 ===

    def offer(self, quest_id: str, narrator: Narrator) -> bool:
        """퀘스트 활성화. 알 수 없음/이미 활성/완료면 아무 일도 없다."""
        quest = self._quests.get(quest_id)
        if quest is None:
            logger.warning("Offered unknown quest: %s", quest_id)
            return False
        if self.status(quest_id) != QuestStatus.UNDISCOVERED:
            return False

        self._active.append(quest_id)
        narrator.highlight(f"New quest: {quest.name}")
        if quest.description:
            narrator.info(quest.description)
        for objective in quest.objectives:
            narrator.info(f"  - {objective.description}")
        narrator.refresh(Panel.QUESTS)
        narrator.signal(EventTypes.QUEST_ACTIVATED, quest_id=quest_id)
        logger.info("Quest activated: %s", quest_id)
        return True

    def complete(self, quest_id: str, player: PlayerState, narrator: Narrator) -> bool:
        """활성 퀘스트 완료 + 보상 지급. 활성 상태가 아니면 무시."""
        if quest_id not in self._active:
            logger.debug("Ignoring completion of non-active quest %s", quest_id)
            return False

        quest = self._quests[quest_id]
        self._active.remove(quest_id)
        self._completed.append(quest_id)
        narrator.success(f"Quest completed: {quest.name}")

        if quest.reward.experience:
            grant_experience(player, quest.reward.experience, narrator)
        if quest.reward.caps:
            grant_caps(player, quest.reward.caps, narrator)

        narrator.refresh(Panel.QUESTS)
        narrator.signal(EventTypes.QUEST_COMPLETED, quest_id=quest_id)
        logger.info("Quest completed: %s", quest_id)
        return True

    # === 목표 판정 ===

    def is_objective_met(
        self,
        objective: Objective,
        player: PlayerState,
        visited: Collection[str],
    ) -> bool:
        if objective.kind == ObjectiveKind.VISIT_LOCATION:
            return objective.target in visited
        if objective.kind == ObjectiveKind.TALK_TO_NPC:
            return objective.target in player.talked_to
        if objective.kind == ObjectiveKind.COMBAT_ENCOUNTERS:
            return player.combat_encounters >= objective.threshold
        if objective.kind == ObjectiveKind.QUEST_COMPLETED:
            return objective.target in self._completed
        return False

    def progress(
        self, quest_id: str, player: PlayerState, visited: Collection[str]
    ) -> list[tuple[Objective, bool]]:
        quest = self._quests[quest_id]
        return [
            (objective, self.is_objective_met(objective, player, visited))
            for objective in quest.objectives
        ]

    def describe(
        self, player: PlayerState, visited: Collection[str], narrator: Narrator
    ) -> None:
        """퀘스트 일지 출력"""
        if not self._active:
            narrator.info("No active quests.")
        else:
            narrator.highlight("Active Quests:")
            for quest in self.active_quests:
                narrator.info(quest.name)
                for objective, met in self.progress(quest.quest_id, player, visited):
                    mark = "✓" if met else "✗"
                    narrator.info(f"  [{mark}] {objective.description}")

        if self._completed:
            names = [self._quests[qid].name for qid in self._completed]
            narrator.success(f"Completed: {', '.join(names)}")

    # === 세이브 ===

    def restore(self, active: Iterable[str], completed: Iterable[str]) -> None:
        """세이브 목록으로 상태 교체. 콘텐츠에 없는 id는 버린다."""
        completed_ids: list[str] = []
        for qid in completed:
            if qid in self._quests and qid not in completed_ids:
                completed_ids.append(qid)
            elif qid not in self._quests:
                logger.warning("Dropping unknown completed quest from save: %s", qid)

        active_ids: list[str] = []
        for qid in active:
            if qid in completed_ids or qid in active_ids:
                continue
            if qid not in self._quests:
                logger.warning("Dropping unknown active quest from save: %s", qid)
                continue
            active_ids.append(qid)

        self._active = active_ids
        self._completed = completed_ids
