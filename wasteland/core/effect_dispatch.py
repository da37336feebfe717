"""효과 적용

효과 정의(effects.py)는 세션을 모른다. 적용만 이 모듈에서 세션을 받아 처리한다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wasteland.core.effects import (
    CompleteQuestEffect,
    Effect,
    GiveCapsEffect,
    GiveItemEffect,
    HealEffect,
    OfferQuestEffect,
    RadiationEffect,
    StatEffect,
)
from wasteland.core.logging import get_logger
from wasteland.core.narration import Panel
from wasteland.core.progression import grant_caps

if TYPE_CHECKING:
    from wasteland.core.session import GameSession

logger = get_logger(__name__)


def apply_effect(session: GameSession, effect: Effect) -> None:
    player = session.player
    narrator = session.narrator

    if isinstance(effect, HealEffect):
        gained = player.heal(effect.value)
        narrator.info(f"You recover {gained} HP.")
        narrator.refresh(Panel.VITALS)

    elif isinstance(effect, RadiationEffect):
        delta = player.adjust_rads(effect.value)
        if delta < 0:
            narrator.info(f"Radiation reduced by {-delta}.")
        elif delta > 0:
            narrator.error(f"You absorb {delta} rads.")
        narrator.refresh(Panel.VITALS)

    elif isinstance(effect, StatEffect):
        value = player.adjust_stat(effect.stat, effect.delta)
        narrator.info(f"{effect.stat} is now {value}.")
        narrator.refresh(Panel.VITALS)

    elif isinstance(effect, GiveItemEffect):
        _give_item(session, effect.item_key)

    elif isinstance(effect, GiveCapsEffect):
        grant_caps(player, effect.amount, narrator)

    elif isinstance(effect, CompleteQuestEffect):
        session.quests.complete(effect.quest_id, player, narrator)

    elif isinstance(effect, OfferQuestEffect):
        session.quests.offer(effect.quest_id, narrator)

    else:
        raise TypeError(f"not an effect: {effect!r}")

    logger.debug("Applied %s", effect)


def _give_item(session: GameSession, item_key: str) -> None:
    """들 수 없으면 현재 위치 바닥에 떨군다."""
    item = session.content.items.create(item_key)
    player = session.player
    narrator = session.narrator

    if not player.can_carry(item):
        session.location.items.append(item)
        narrator.error(f"You can't carry {item.name}. It falls to the ground.")
        narrator.refresh(Panel.LOCATION)
        return

    caps = player.acquire(item)
    if caps:
        narrator.success(f"You receive {caps} caps.")
    else:
        narrator.success(f"You receive {item.name}.")
    narrator.refresh(Panel.INVENTORY)
