"""게임 세션 컨텍스트

한 판의 게임 상태 전부를 담는 명시적 객체. 모든 핸들러는 이 객체를 인자로 받는다.
전역 싱글톤은 없다.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import TYPE_CHECKING, Optional

from wasteland.core.combat.models import CombatState
from wasteland.core.content import GameContent
from wasteland.core.dialogue.models import DialogueState
from wasteland.core.event_bus import EventBus
from wasteland.core.event_types import EventTypes
from wasteland.core.logging import get_logger
from wasteland.core.narration import Narrator, Panel
from wasteland.core.player import PlayerState
from wasteland.core.quest.tracker import QuestLog
from wasteland.core.world import Location, World

if TYPE_CHECKING:
    from wasteland.core.save_state import SaveStorage

logger = get_logger(__name__)

DEFAULT_SAVE_SLOT = "falloutAdventureSave"


class SessionStatus(str, Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"
    ENDED = "ended"


class GameSession:
    """
    게임 1판의 상태.

    콘텐츠(템플릿)와 저장소는 세션 밖에서 주입되고,
    월드/플레이어/퀘스트 로그는 reset()마다 콘텐츠에서 새로 만든다.
    """

    def __init__(
        self,
        content: GameContent,
        storage: "SaveStorage",
        *,
        slot: str = DEFAULT_SAVE_SLOT,
        rng: Optional[random.Random] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.content = content
        self.storage = storage
        self.slot = slot
        self.rng = rng or random.Random()
        self.bus = bus or EventBus()
        self.narrator = Narrator(self.bus)

        self.combat = CombatState()
        self.dialogue = DialogueState()

        self.world: World
        self.player: PlayerState
        self.quests: QuestLog
        self.current_location_id: str
        self.visited: set[str]
        self.game_time = 0
        self.status = SessionStatus.PLAYING

        self.reset()

    def reset(self) -> None:
        """새 월드와 새 플레이어로 초기화"""
        self.world = self.content.build_world()
        self.player = PlayerState()
        self.quests = self.content.new_quest_log()
        self.current_location_id = self.world.start_location
        self.visited = {self.world.start_location}
        self.game_time = 0
        self.status = SessionStatus.PLAYING
        self.combat.reset()
        self.dialogue.close()
        self.narrator.refresh(*Panel)
        logger.debug("Session reset at %s", self.current_location_id)

    # === 조회 ===

    @property
    def location(self) -> Location:
        return self.world.get(self.current_location_id)

    @property
    def is_playing(self) -> bool:
        return self.status == SessionStatus.PLAYING

    @property
    def mode(self) -> str:
        """현재 입력 모드: combat / dialogue / explore / 종료 상태"""
        if not self.is_playing:
            return self.status.value
        if self.combat.active:
            return "combat"
        if self.dialogue.active:
            return "dialogue"
        return "explore"

    # === 상태 변경 ===

    def move_to(self, location_id: str) -> None:
        previous = self.current_location_id
        self.current_location_id = location_id
        self.visited.add(location_id)
        self.narrator.refresh(Panel.LOCATION)
        self.narrator.signal(EventTypes.PLAYER_MOVED, origin=previous, destination=location_id)

    def tick(self, seconds: int = 1) -> None:
        """게임 시계 진행. 플레이 중일 때만 흐른다."""
        if self.is_playing:
            self.game_time += seconds

    def snapshot(self) -> dict:
        """API 응답용 요약 상태"""
        location = self.location
        return {
            "status": self.status.value,
            "mode": self.mode,
            "game_time": self.game_time,
            "location": {
                "id": location.location_id,
                "name": location.name,
                "description": location.short_description,
                "exits": location.exit_directions,
            },
            "player": self.player.to_dict(),
            "quests": {
                "active": [
                    {
                        "id": quest.quest_id,
                        "name": quest.name,
                        "objectives": [
                            {"description": obj.description, "done": done}
                            for obj, done in self.quests.progress(
                                quest.quest_id, self.player, self.visited
                            )
                        ],
                    }
                    for quest in self.quests.active_quests
                ],
                "completed": self.quests.completed_ids,
            },
            "combat": (
                {
                    "enemy": self.combat.enemy.name,
                    "hp": self.combat.enemy.hp,
                    "max_hp": self.combat.enemy.max_hp,
                }
                if self.combat.active and self.combat.enemy
                else None
            ),
            "dialogue": (
                {
                    "npc": self.dialogue.npc.name,
                    "options": [opt.prompt for opt in self.dialogue.options],
                }
                if self.dialogue.active and self.dialogue.npc
                else None
            ),
        }


def format_time(seconds: int) -> str:
    """m:ss"""
    minutes, rest = divmod(seconds, 60)
    return f"{minutes}:{rest:02d}"
