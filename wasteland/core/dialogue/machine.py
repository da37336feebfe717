"""대화 상태 머신

Inactive → Active(npc, options) → Inactive

- talk: 인사말, 대화 기록, NPC 퀘스트 제안, 선택지가 있으면 Active 진입
- 번호 선택: 1부터. 후속 선택지가 있으면 교체, 없으면 같은 목록 재표시
- bye/goodbye/end: 종료
"""

from __future__ import annotations

from wasteland.core.effect_dispatch import apply_effect
from wasteland.core.errors import UserInputError
from wasteland.core.event_types import EventTypes
from wasteland.core.logging import get_logger
from wasteland.core.session import GameSession

logger = get_logger(__name__)


def talk(session: GameSession, target: str) -> None:
    if not target:
        raise UserInputError("Talk to whom?")

    npc = session.location.find_npc(target)
    if npc is None:
        raise UserInputError(f"You don't see {target} here.")

    narrator = session.narrator
    narrator.info(f"You talk to {npc.name}.")
    narrator.highlight(f'"{npc.greeting}"')
    session.player.talked_to.add(npc.name)

    # 퀘스트 제안은 선택지보다 먼저
    if npc.quest_id:
        session.quests.offer(npc.quest_id, narrator)

    if npc.options:
        session.dialogue.open(npc)
        narrator.signal(EventTypes.DIALOGUE_STARTED, npc=npc.name)
        show_options(session)


def show_options(session: GameSession) -> None:
    narrator = session.narrator
    narrator.info("Choose a response (or type 'bye' to leave):")
    for index, option in enumerate(session.dialogue.options, start=1):
        narrator.info(f"{index}. {option.prompt}")


def select(session: GameSession, number: int) -> None:
    state = session.dialogue
    npc = state.npc
    if npc is None:
        raise UserInputError("You are not talking to anyone.")

    if not 1 <= number <= len(state.options):
        raise UserInputError(f"Choose an option between 1 and {len(state.options)}.")

    option = state.options[number - 1]
    narrator = session.narrator
    narrator.info(f'You: "{option.prompt}"')
    narrator.highlight(f'{npc.name}: "{option.response}"')

    if option.effect is not None:
        apply_effect(session, option.effect)

    if option.follow_ups:
        state.descend(option.follow_ups)
    logger.debug("Dialogue with %s at depth %d", npc.name, state.depth)

    show_options(session)


def end(session: GameSession) -> None:
    npc = session.dialogue.npc
    if npc is None:
        return
    session.dialogue.close()
    session.narrator.info(f"You end the conversation with {npc.name}.")
    session.narrator.signal(EventTypes.DIALOGUE_ENDED, npc=npc.name)
