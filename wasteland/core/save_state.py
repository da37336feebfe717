"""세이브/로드

저장소는 키 → 불투명 문자열(blob)만 다룬다. blob 형식:

    {player, currentLocation, visitedLocations, activeQuests, completedQuests, gameTime}

월드 내용(바닥 아이템, 남은 적)은 저장하지 않는다.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Protocol

from wasteland.core.errors import ContentError, PersistenceError
from wasteland.core.narration import Panel
from wasteland.core.player import PlayerState
from wasteland.core.session import GameSession, SessionStatus

logger = logging.getLogger(__name__)

NO_SAVE_MESSAGE = "No save file found."
LOAD_ERROR_MESSAGE = "Error loading save file."


class SaveStorage(Protocol):
    def read(self, slot: str) -> Optional[str]: ...

    def write(self, slot: str, payload: str) -> None: ...


class InMemorySaveStorage:
    """프로세스 메모리 저장소 (CLI/테스트용)"""

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}

    def read(self, slot: str) -> Optional[str]:
        return self._slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self._slots[slot] = payload


def snapshot(session: GameSession) -> dict:
    return {
        "player": session.player.to_dict(),
        "currentLocation": session.current_location_id,
        "visitedLocations": sorted(session.visited),
        "activeQuests": session.quests.active_ids,
        "completedQuests": session.quests.completed_ids,
        "gameTime": session.game_time,
    }


def restore(session: GameSession, data: dict) -> None:
    """blob dict를 세션에 적용. 검증이 끝나기 전에는 세션을 건드리지 않는다."""
    try:
        player = PlayerState.from_dict(data["player"])
        location_id = str(data["currentLocation"])
        visited = set(data.get("visitedLocations") or [])
        active = list(data.get("activeQuests") or [])
        completed = list(data.get("completedQuests") or [])
        game_time = int(data.get("gameTime", 0))
        player.consolidate_inventory()
    except (AttributeError, KeyError, TypeError, ValueError, ContentError) as e:
        logger.warning("Rejected malformed save data: %s", e)
        raise PersistenceError(LOAD_ERROR_MESSAGE) from e

    if location_id not in session.world:
        logger.warning("Save references unknown location %r", location_id)
        raise PersistenceError(LOAD_ERROR_MESSAGE)

    session.player = player
    session.current_location_id = location_id
    session.visited = visited | {location_id}
    session.quests.restore(active, completed)
    session.game_time = game_time
    session.status = SessionStatus.PLAYING
    session.combat.reset()
    session.dialogue.close()


def save_game(session: GameSession) -> None:
    payload = json.dumps(snapshot(session))
    session.storage.write(session.slot, payload)
    logger.info("Saved game to slot %s (%d bytes)", session.slot, len(payload))


def load_game(session: GameSession) -> None:
    """저장소에서 읽어 복원. 실패 시 PersistenceError, 세션은 그대로."""
    payload = session.storage.read(session.slot)
    if payload is None:
        raise PersistenceError(NO_SAVE_MESSAGE)

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning("Save slot %s is not valid JSON: %s", session.slot, e)
        raise PersistenceError(LOAD_ERROR_MESSAGE) from e
    if not isinstance(data, dict):
        raise PersistenceError(LOAD_ERROR_MESSAGE)

    restore(session, data)
    session.narrator.refresh(*Panel)
    logger.info("Loaded game from slot %s", session.slot)
