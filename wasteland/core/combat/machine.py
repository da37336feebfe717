"""전투 상태 머신

Idle → Engaged → {Victory, Defeat, Fled} → Idle

한 번의 attack은 플레이어 공격 → (적 생존 시) 반격 순서로 처리된다.
적 hp가 0 이하가 되면 반격 없이 승리한다.
"""

from __future__ import annotations

from typing import Optional

from wasteland.core.errors import PreconditionError, UserInputError
from wasteland.core.event_types import EventTypes
from wasteland.core.item.models import ItemType
from wasteland.core.item.usage import consume, find_owned
from wasteland.core.logging import get_logger
from wasteland.core.narration import Panel
from wasteland.core.progression import grant_experience
from wasteland.core.session import GameSession, SessionStatus, format_time

from .models import CombatOutcome, Enemy

logger = get_logger(__name__)

PLAYER_DAMAGE_SPREAD = 5  # randrange(5) → 0..4
ENEMY_DAMAGE_SPREAD = 3  # randrange(3) → 0..2


def player_damage(session: GameSession) -> int:
    """무기 피해(맨손 5) + STR//2 + LCK//3 + 0..4"""
    player = session.player
    return (
        player.weapon_damage
        + player.special.get("strength", 0) // 2
        + player.special.get("luck", 0) // 3
        + session.rng.randrange(PLAYER_DAMAGE_SPREAD)
    )


def enemy_damage(session: GameSession, enemy: Enemy) -> int:
    return enemy.damage + session.rng.randrange(ENEMY_DAMAGE_SPREAD)


def start_combat(session: GameSession, target: str) -> None:
    if not target:
        raise UserInputError("Attack what?")

    enemy = session.location.find_enemy(target)
    if enemy is None:
        raise UserInputError(f"You don't see {target} here.")

    session.player.combat_encounters += 1
    session.combat.engage(enemy)

    narrator = session.narrator
    narrator.error(f"Combat started! You are fighting {enemy.name}!")
    narrator.error(f"{enemy.name}: {enemy.hp}/{enemy.max_hp} HP")
    narrator.info('Type "attack" to fight or "flee" to run away.')
    narrator.refresh(Panel.VITALS)
    narrator.signal(EventTypes.COMBAT_STARTED, enemy=enemy.name)
    logger.debug("Combat started against %s (%s)", enemy.name, enemy.uid)


def attack(session: GameSession) -> None:
    enemy = session.combat.enemy
    if enemy is None:
        raise PreconditionError("You are not in combat.")

    narrator = session.narrator
    damage = player_damage(session)
    enemy.hp -= damage
    session.combat.rounds += 1
    narrator.success(f"You attack {enemy.name} for {damage} damage!")

    if enemy.is_defeated:
        _victory(session, enemy)
        return

    retaliation = enemy_damage(session, enemy)
    session.player.take_damage(retaliation)
    narrator.error(f"{enemy.name} attacks you for {retaliation} damage!")
    narrator.refresh(Panel.VITALS)

    if session.player.is_dead:
        game_over(session)
        return

    narrator.error(f"{enemy.name}: {enemy.hp}/{enemy.max_hp} HP")


def flee(session: GameSession) -> None:
    """항상 성공. 보상 없음, 적은 입은 피해를 유지한다."""
    enemy = session.combat.enemy
    session.narrator.info("You flee from combat!")
    _end(session, CombatOutcome.FLED, enemy)


def use_in_combat(session: GameSession, query: str) -> None:
    """소모품만 허용. 반격은 없다."""
    if not query:
        raise UserInputError("Use what?")
    item = find_owned(session, query)
    if item.item_type != ItemType.CONSUMABLE:
        raise PreconditionError(f"You can't use {item.name} in combat.")

    consume(session, item, announce=False)
    session.narrator.success(f"You use {item.name} in combat!")


def _victory(session: GameSession, enemy: Enemy) -> None:
    narrator = session.narrator
    location = session.location

    narrator.success(f"You defeated {enemy.name}!")
    grant_experience(session.player, enemy.experience, narrator)

    if enemy.loot:
        location.items.extend(enemy.loot)
        enemy.loot = []
        narrator.info(f"{enemy.name} dropped some items!")

    location.remove_enemy(enemy)
    narrator.refresh(Panel.LOCATION)
    _end(session, CombatOutcome.VICTORY, enemy)


def _end(session: GameSession, outcome: CombatOutcome, enemy: Optional[Enemy]) -> None:
    session.combat.reset()
    session.narrator.signal(
        EventTypes.COMBAT_ENDED,
        outcome=outcome.value,
        enemy=enemy.name if enemy else None,
    )
    logger.debug("Combat ended: %s", outcome.value)


def game_over(session: GameSession) -> None:
    """사망. 세션은 GAME_OVER로 종결되고 restart/load만 받는다."""
    enemy = session.combat.enemy
    _end(session, CombatOutcome.DEFEAT, enemy)
    session.status = SessionStatus.GAME_OVER

    player = session.player
    narrator = session.narrator
    narrator.error("You have died in the wasteland...")
    narrator.highlight("GAME OVER")
    narrator.info(f"Level reached: {player.level}")
    narrator.info(f"Caps collected: {player.caps}")
    narrator.info(f"Quests completed: {len(session.quests.completed_ids)}")
    narrator.info(f"Time survived: {format_time(session.game_time)}")
    narrator.info("Type 'restart' to begin again or 'load' to restore your save.")
    narrator.refresh(*Panel)
    narrator.signal(EventTypes.GAME_OVER, level=player.level, game_time=session.game_time)
    logger.info("Game over at level %d after %ds", player.level, session.game_time)
