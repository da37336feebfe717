"""퀘스트 시스템 Core 패키지"""

from wasteland.core.quest.enums import ObjectiveKind, QuestStatus
from wasteland.core.quest.models import Objective, Quest, QuestReward
from wasteland.core.quest.tracker import QuestLog

__all__ = [
    # enums
    "QuestStatus",
    "ObjectiveKind",
    # models
    "Objective",
    "QuestReward",
    "Quest",
    # tracker
    "QuestLog",
]
