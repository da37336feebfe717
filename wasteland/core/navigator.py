"""
월드 탐색 & 상호작용
====================

look / go / take / examine 처리.
검색은 모두 대소문자 무시 부분 일치, 선언 순서상 첫 항목.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wasteland.core.errors import PreconditionError, UserInputError
from wasteland.core.effects import describe_effect
from wasteland.core.item.models import Item, ItemType, format_weight
from wasteland.core.logging import get_logger
from wasteland.core.narration import Panel
from wasteland.core.requirements import check_requirement
from wasteland.core.world import Exit, Location

if TYPE_CHECKING:
    from wasteland.core.session import GameSession

logger = get_logger(__name__)


# === look ===


def look(session: GameSession, target: str = "") -> None:
    """대상 없으면 현재 위치 전체 묘사, 있으면 방향 → 아이템 → NPC → 적 순으로 찾는다."""
    if not target:
        describe_location(session, session.location)
        return

    location = session.location
    exit_ = location.find_exit(target)
    if exit_ is not None:
        _look_direction(session, exit_)
        return

    narrator = session.narrator
    item = location.find_item(target)
    if item is not None:
        narrator.info(item.description)
        return
    npc = location.find_npc(target)
    if npc is not None:
        narrator.info(npc.description)
        return
    enemy = location.find_enemy(target)
    if enemy is not None:
        narrator.error(enemy.description)
        return

    raise UserInputError(f"You don't see {target} here.")


def describe_location(session: GameSession, location: Location) -> None:
    narrator = session.narrator
    narrator.highlight(location.description)
    narrator.info(f"Exits: {', '.join(location.exit_directions)}")
    if location.items:
        narrator.info(f"Items here: {', '.join(item.name for item in location.items)}")
    if location.npcs:
        narrator.info(f"People here: {', '.join(npc.name for npc in location.npcs)}")
    if location.enemies:
        narrator.error(f"Enemies: {', '.join(enemy.name for enemy in location.enemies)}")


def _look_direction(session: GameSession, exit_: Exit) -> None:
    """인접 위치를 엿본다. 이름 없이 개수만, 이동은 없다."""
    narrator = session.narrator
    if exit_.destination not in session.world:
        logger.error("Exit %s leads nowhere (%s)", exit_.direction, exit_.destination)
        raise PreconditionError(f"You can't make out anything {exit_.direction}.")

    target = session.world.get(exit_.destination)
    narrator.info(f"Looking {exit_.direction}, you see:")
    narrator.highlight(target.short_description)
    if target.enemies:
        narrator.error(f"You can see {len(target.enemies)} enemy(ies) in the distance.")
    if target.npcs:
        narrator.info(f"You can see {len(target.npcs)} person(s) there.")
    if target.items:
        narrator.info("You notice some items scattered about.")


# === go ===


def go(session: GameSession, direction: str) -> None:
    if not direction:
        raise UserInputError("Go where?")

    exit_ = session.location.find_exit(direction)
    if exit_ is None:
        raise UserInputError(f"You can't go {direction}.")

    if exit_.requirement is not None and not check_requirement(
        exit_.requirement, session.player, session.quests.completed_ids
    ):
        raise PreconditionError(
            exit_.blocked_message or f"You can't go {direction} right now."
        )

    if exit_.destination not in session.world:
        logger.error(
            "Exit %s of %s leads to undefined location %s",
            exit_.direction,
            session.current_location_id,
            exit_.destination,
        )
        raise PreconditionError(f"You can't go {direction}.")

    session.move_to(exit_.destination)
    session.narrator.success(f"You go {direction}.")
    look(session)


# === take ===


def take(session: GameSession, target: str) -> None:
    if not target:
        raise UserInputError("Take what?")
    if target.lower() == "all":
        take_all(session)
        return

    location = session.location
    item = location.find_item(target)
    if item is None:
        raise UserInputError(f"You don't see {target} here.")

    player = session.player
    if not player.can_carry(item):
        raise PreconditionError(f"You can't carry {item.name}. It's too heavy!")

    location.remove_item(item)
    caps = player.acquire(item)
    if caps == 1:
        session.narrator.success("You collect a bottle cap (1 cap)")
    elif caps:
        session.narrator.success(f"You collect {caps} bottle caps ({caps} caps)")
    else:
        session.narrator.success(f"You take the {item.name}.")
    session.narrator.refresh(Panel.INVENTORY, Panel.LOCATION)


def take_all(session: GameSession) -> None:
    """병뚜껑은 무조건, 나머지는 무게가 허락하는 만큼. 종류별 요약 1줄."""
    location = session.location
    player = session.player
    narrator = session.narrator

    if not location.items:
        narrator.info("There are no items here to take.")
        return

    caps_found = 0
    taken: list[str] = []
    skipped: list[str] = []
    for item in list(location.items):
        if item.is_bottle_cap:
            caps_found += player.acquire(item)
            location.remove_item(item)
        elif player.can_carry(item):
            player.acquire(item)
            location.remove_item(item)
            taken.append(item.name)
        else:
            skipped.append(item.name)

    if caps_found:
        narrator.success(f"You collect {caps_found} bottle cap(s) ({caps_found} caps)")
    if taken:
        narrator.success(f"You take: {', '.join(taken)}")
    if skipped:
        narrator.error(f"You can't carry: {', '.join(skipped)} (too heavy)")
    narrator.refresh(Panel.INVENTORY, Panel.LOCATION)


# === examine ===


def examine(session: GameSession, target: str) -> None:
    """인벤토리 먼저, 없으면 현재 위치 바닥"""
    if not target:
        raise UserInputError("Examine what?")

    item = session.player.inventory.find(target) or session.location.find_item(target)
    if item is None:
        raise UserInputError(f"You don't see {target} here or in your inventory.")
    _describe_item(session, item)


def _describe_item(session: GameSession, item: Item) -> None:
    narrator = session.narrator
    narrator.highlight(f"Examining {item.name}:")
    if item.description:
        narrator.info(item.description)

    narrator.info(f"Type: {item.item_type.value.capitalize()}")
    if item.item_type == ItemType.WEAPON:
        narrator.info(f"Damage: {item.damage}")
    elif item.item_type == ItemType.ARMOR:
        narrator.info(f"Defense: {item.defense}")
    elif item.item_type == ItemType.CONSUMABLE and item.effect is not None:
        narrator.info(f"Effect: {describe_effect(item.effect)}")

    narrator.info(f"Weight: {format_weight(item.weight)} lbs")
    if item.count > 1:
        narrator.info(f"Count: {item.count}")

    slot = session.player.inventory.equipped_slot_of(item.uid)
    if slot is not None:
        narrator.success(f"Status: Equipped ({slot.value.capitalize()})")
