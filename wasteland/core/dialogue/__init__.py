"""대화 시스템 Core 패키지"""

from wasteland.core.dialogue.models import NPC, DialogueOption, DialogueState

__all__ = [
    "DialogueOption",
    "NPC",
    "DialogueState",
]
