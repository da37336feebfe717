"""월드 콘텐츠 로더

JSON 문서 구조:
    start_location: 시작 위치 id
    items:     {key: 아이템 정의}
    enemies:   {key: 적 정의, loot는 아이템 key 목록}
    npcs:      {key: NPC 정의, options는 대화 트리}
    quests:    {quest_id: 퀘스트 정의}
    locations: {location_id: 위치 정의, 개체는 key로 참조}

템플릿은 한 번만 파싱하고, 게임마다 build_world()로 새 개체를 찍어낸다.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Union

from wasteland.core.combat.models import Enemy
from wasteland.core.dialogue.models import NPC, DialogueOption
from wasteland.core.effects import (
    CompleteQuestEffect,
    GiveItemEffect,
    OfferQuestEffect,
    parse_effect,
)
from wasteland.core.errors import ContentError
from wasteland.core.item.inventory import is_stackable
from wasteland.core.item.models import Item, new_uid
from wasteland.core.item.registry import ItemRegistry
from wasteland.core.quest.models import Quest
from wasteland.core.quest.tracker import QuestLog
from wasteland.core.requirements import parse_requirement
from wasteland.core.world import Exit, Location, World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _LocationTemplate:
    location_id: str
    name: str
    description: str
    short_description: str
    exits: tuple[Exit, ...]
    item_refs: tuple[tuple[str, int], ...]
    npc_refs: tuple[str, ...]
    enemy_refs: tuple[str, ...]


class GameContent:
    """파싱된 월드 콘텐츠 (불변 템플릿 묶음)"""

    def __init__(
        self,
        items: ItemRegistry,
        enemies: dict[str, Enemy],
        npcs: dict[str, NPC],
        quests: dict[str, Quest],
        locations: dict[str, _LocationTemplate],
        start_location: str,
    ) -> None:
        self.items = items
        self.enemies = enemies
        self.npcs = npcs
        self.quests = quests
        self._locations = locations
        self.start_location = start_location

    @property
    def location_ids(self) -> list[str]:
        return list(self._locations)

    def build_world(self) -> World:
        """템플릿에서 새 World 생성 (모든 개체는 새 uid)"""
        locations: dict[str, Location] = {}
        for template in self._locations.values():
            items: list[Item] = []
            for key, count in template.item_refs:
                # 바닥의 스택 불가 아이템은 1개씩 놓는다
                if count > 1 and not is_stackable(self.items.get(key)):
                    items.extend(self.items.create(key) for _ in range(count))
                else:
                    items.append(self.items.create(key, count))

            locations[template.location_id] = Location(
                location_id=template.location_id,
                name=template.name,
                description=template.description,
                short_description=template.short_description,
                exits=template.exits,
                items=items,
                npcs=[replace(self.npcs[key], uid=new_uid()) for key in template.npc_refs],
                enemies=[self.enemies[key].spawn() for key in template.enemy_refs],
            )
        return World(locations=locations, start_location=self.start_location)

    def new_quest_log(self) -> QuestLog:
        return QuestLog(self.quests)


# === 파싱 ===


def _parse_enemy(key: str, data: dict, items: ItemRegistry) -> Enemy:
    try:
        hp = int(data["hp"])
        template = Enemy(
            name=data["name"],
            hp=hp,
            max_hp=int(data.get("max_hp", hp)),
            damage=int(data["damage"]),
            experience=int(data.get("experience", 0)),
            description=data.get("description", ""),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise ContentError(f"enemy '{key}' is malformed: {e}") from e

    for loot_key in data.get("loot", []):
        if items.get(loot_key) is None:
            raise ContentError(f"enemy '{key}' drops unknown item '{loot_key}'")
        template.loot.append(items.create(loot_key))
    return template


def _parse_option(data: dict) -> DialogueOption:
    try:
        prompt = data["prompt"]
        response = data["response"]
    except KeyError as e:
        raise ContentError(f"dialogue option missing field {e}") from e

    raw_effect = data.get("effect")
    return DialogueOption(
        prompt=prompt,
        response=response,
        effect=parse_effect(raw_effect) if raw_effect else None,
        follow_ups=tuple(_parse_option(raw) for raw in data.get("follow_ups", [])),
    )


def _parse_npc(key: str, data: dict) -> NPC:
    try:
        return NPC(
            name=data["name"],
            description=data.get("description", ""),
            greeting=data["greeting"],
            options=tuple(_parse_option(raw) for raw in data.get("options", [])),
            quest_id=data.get("quest"),
        )
    except KeyError as e:
        raise ContentError(f"npc '{key}' missing field {e}") from e


def _parse_exit(location_id: str, data: dict) -> Exit:
    try:
        return Exit(
            direction=data["direction"],
            destination=data["destination"],
            requirement=parse_requirement(data.get("requirement")),
            blocked_message=data.get("blocked_message"),
        )
    except KeyError as e:
        raise ContentError(f"exit in '{location_id}' missing field {e}") from e


def _parse_item_ref(location_id: str, raw: Union[str, dict]) -> tuple[str, int]:
    if isinstance(raw, str):
        return raw, 1
    try:
        return raw["item"], int(raw.get("count", 1))
    except (KeyError, ValueError, TypeError) as e:
        raise ContentError(f"item reference in '{location_id}' is malformed: {raw!r}") from e


def _parse_location(location_id: str, data: dict) -> _LocationTemplate:
    try:
        return _LocationTemplate(
            location_id=location_id,
            name=data["name"],
            description=data["description"],
            short_description=data.get("short_description", data["name"]),
            exits=tuple(_parse_exit(location_id, raw) for raw in data.get("exits", [])),
            item_refs=tuple(_parse_item_ref(location_id, raw) for raw in data.get("items", [])),
            npc_refs=tuple(data.get("npcs", [])),
            enemy_refs=tuple(data.get("enemies", [])),
        )
    except KeyError as e:
        raise ContentError(f"location '{location_id}' missing field {e}") from e


def _iter_effects(options: tuple[DialogueOption, ...]):
    for option in options:
        if option.effect is not None:
            yield option.effect
        yield from _iter_effects(option.follow_ups)


def _check_references(content: GameContent) -> None:
    """키 참조 무결성. 위반은 ContentError, 끊긴 출구만 경고."""
    for template in content._locations.values():
        for key, _ in template.item_refs:
            if content.items.get(key) is None:
                raise ContentError(f"location '{template.location_id}' references unknown item '{key}'")
        for key in template.npc_refs:
            if key not in content.npcs:
                raise ContentError(f"location '{template.location_id}' references unknown npc '{key}'")
        for key in template.enemy_refs:
            if key not in content.enemies:
                raise ContentError(f"location '{template.location_id}' references unknown enemy '{key}'")
        for exit_ in template.exits:
            if exit_.destination not in content._locations:
                logger.warning(
                    "Exit '%s' of '%s' leads to undefined location '%s'",
                    exit_.direction,
                    template.location_id,
                    exit_.destination,
                )

    effects = []
    for npc in content.npcs.values():
        if npc.quest_id and npc.quest_id not in content.quests:
            raise ContentError(f"npc '{npc.name}' offers unknown quest '{npc.quest_id}'")
        effects.extend(_iter_effects(npc.options))
    for key in content.items.keys():
        effect = content.items.get(key).effect
        if effect is not None:
            effects.append(effect)

    for effect in effects:
        if isinstance(effect, GiveItemEffect) and content.items.get(effect.item_key) is None:
            raise ContentError(f"effect grants unknown item '{effect.item_key}'")
        if isinstance(effect, (OfferQuestEffect, CompleteQuestEffect)) and effect.quest_id not in content.quests:
            raise ContentError(f"effect references unknown quest '{effect.quest_id}'")

    if content.start_location not in content._locations:
        raise ContentError(f"start location '{content.start_location}' is not defined")


def parse_content(raw: dict) -> GameContent:
    """dict → GameContent. 스키마 위반은 ContentError."""
    if not isinstance(raw, dict):
        raise ContentError("content root must be an object")

    items = ItemRegistry()
    items.load_from_dict(raw.get("items", {}))

    enemies = {key: _parse_enemy(key, data, items) for key, data in raw.get("enemies", {}).items()}
    npcs = {key: _parse_npc(key, data) for key, data in raw.get("npcs", {}).items()}
    quests = {qid: Quest.from_dict(qid, data) for qid, data in raw.get("quests", {}).items()}
    locations = {lid: _parse_location(lid, data) for lid, data in raw.get("locations", {}).items()}

    if "start_location" not in raw:
        raise ContentError("content has no start_location")

    content = GameContent(
        items=items,
        enemies=enemies,
        npcs=npcs,
        quests=quests,
        locations=locations,
        start_location=raw["start_location"],
    )
    _check_references(content)

    logger.info(
        "Content loaded: %d locations, %d items, %d enemies, %d npcs, %d quests",
        len(locations),
        items.count(),
        len(enemies),
        len(npcs),
        len(quests),
    )
    return content


def load_content(path: Union[str, Path]) -> GameContent:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ContentError(f"content file {path} is not valid JSON: {e}") from e
    return parse_content(raw)
