"""이벤트 유형 상수"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # 표현 계층
    NARRATION = "narration"
    UI_REFRESH = "ui_refresh"

    # 상태 전이
    COMBAT_STARTED = "combat_started"
    COMBAT_ENDED = "combat_ended"
    DIALOGUE_STARTED = "dialogue_started"
    DIALOGUE_ENDED = "dialogue_ended"
    QUEST_ACTIVATED = "quest_activated"
    QUEST_COMPLETED = "quest_completed"
    PLAYER_MOVED = "player_moved"
    GAME_OVER = "game_over"
