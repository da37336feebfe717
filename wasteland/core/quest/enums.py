"""퀘스트 관련 열거형"""

from enum import Enum


class QuestStatus(str, Enum):
    UNDISCOVERED = "undiscovered"
    ACTIVE = "active"
    COMPLETED = "completed"


class ObjectiveKind(str, Enum):
    VISIT_LOCATION = "visit_location"
    TALK_TO_NPC = "talk_to_npc"
    COMBAT_ENCOUNTERS = "combat_encounters"
    QUEST_COMPLETED = "quest_completed"
