"""월드 모델: 위치, 출구, 위치에 놓인 개체들

World는 위치와 그 안에 배치된 개체(아이템/NPC/적)를 소유한다.
개체 검색은 모두 대소문자 무시 부분 일치, 선언 순서상 첫 항목이다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, TypeVar

from wasteland.core.combat.models import Enemy
from wasteland.core.dialogue.models import NPC
from wasteland.core.item.inventory import matches_name
from wasteland.core.item.models import Item
from wasteland.core.requirements import Requirement

_Named = TypeVar("_Named", Item, NPC, Enemy)


def _first_match(entities: Sequence[_Named], query: str) -> Optional[_Named]:
    if not query:
        return None
    for entity in entities:
        if matches_name(entity.name, query):
            return entity
    return None


@dataclass(frozen=True)
class Exit:
    direction: str
    destination: str
    requirement: Optional[Requirement] = None
    blocked_message: Optional[str] = None

    def matches(self, query: str) -> bool:
        """정확 일치 또는 부분 일치 ("n" → "north")"""
        direction = self.direction.lower()
        query = query.lower()
        return direction == query or query in direction


@dataclass
class Location:
    location_id: str
    name: str
    description: str
    short_description: str
    exits: tuple[Exit, ...] = ()
    items: list[Item] = field(default_factory=list)
    npcs: list[NPC] = field(default_factory=list)
    enemies: list[Enemy] = field(default_factory=list)

    def find_exit(self, query: str) -> Optional[Exit]:
        if not query:
            return None
        for exit_ in self.exits:
            if exit_.matches(query):
                return exit_
        return None

    def find_item(self, query: str) -> Optional[Item]:
        return _first_match(self.items, query)

    def find_npc(self, query: str) -> Optional[NPC]:
        return _first_match(self.npcs, query)

    def find_enemy(self, query: str) -> Optional[Enemy]:
        return _first_match(self.enemies, query)

    def remove_item(self, item: Item) -> None:
        self.items = [i for i in self.items if i.uid != item.uid]

    def remove_enemy(self, enemy: Enemy) -> None:
        self.enemies = [e for e in self.enemies if e.uid != enemy.uid]

    @property
    def exit_directions(self) -> list[str]:
        return [exit_.direction for exit_ in self.exits]


@dataclass
class World:
    locations: dict[str, Location]
    start_location: str

    def get(self, location_id: str) -> Location:
        return self.locations[location_id]

    def __contains__(self, location_id: object) -> bool:
        return location_id in self.locations

    def dangling_exits(self) -> list[tuple[str, str]]:
        """목적지가 정의되지 않은 (위치 id, 방향) 목록"""
        return [
            (location.location_id, exit_.direction)
            for location in self.locations.values()
            for exit_ in location.exits
            if exit_.destination not in self.locations
        ]
