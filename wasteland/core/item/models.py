"""아이템 도메인 모델 (DB 무관)"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from wasteland.core.effects import Effect, effect_to_dict, parse_effect
from wasteland.core.errors import ContentError

BOTTLE_CAP_NAME = "Bottle Cap"


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    CONSUMABLE = "consumable"
    CURRENCY = "currency"
    TOOL = "tool"
    KEY = "key"
    AMMO = "ammo"


def new_uid() -> str:
    return uuid.uuid4().hex[:12]


def format_weight(weight: float) -> str:
    """소수점 이하가 없으면 정수로 표시 (2.0 → 2, 1.5 → 1.5)"""
    return f"{weight:g}"


@dataclass
class Item:
    """월드/인벤토리에 놓이는 아이템 개체.

    uid는 개체 식별자다. 장착 슬롯과 제거 연산은 객체 참조가 아니라
    uid로 항목을 찾는다 (세이브/로드 경계를 넘어도 유지됨).
    """

    name: str
    item_type: ItemType
    weight: float = 0.0  # lbs, 1개 기준
    description: str = ""

    # 타입별 필드
    damage: int = 0  # weapon
    defense: int = 0  # armor
    effect: Optional[Effect] = None  # consumable

    count: int = 1
    uid: str = field(default_factory=new_uid)

    @property
    def is_bottle_cap(self) -> bool:
        return self.item_type == ItemType.CURRENCY and self.name == BOTTLE_CAP_NAME

    @property
    def total_weight(self) -> float:
        return self.weight * self.count

    def spawn(self, count: int = 1) -> Item:
        """같은 원형의 새 개체 (새 uid)"""
        return replace(self, count=count, uid=new_uid())

    def to_dict(self) -> dict:
        data = {
            "uid": self.uid,
            "name": self.name,
            "type": self.item_type.value,
            "weight": self.weight,
            "description": self.description,
            "count": self.count,
        }
        if self.damage:
            data["damage"] = self.damage
        if self.defense:
            data["defense"] = self.defense
        if self.effect is not None:
            data["effect"] = effect_to_dict(self.effect)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Item:
        """콘텐츠/세이브 dict에서 복원. 스키마 위반은 ContentError."""
        try:
            name = str(data["name"])
            item_type = ItemType(data["type"])
            weight = float(data.get("weight", 0))
            count = int(data.get("count", 1))
            damage = int(data.get("damage", 0))
            defense = int(data.get("defense", 0))
        except (KeyError, ValueError, TypeError) as e:
            raise ContentError(f"invalid item {data!r}: {e}") from e

        if weight < 0:
            raise ContentError(f"item weight must be >= 0: {name}")
        if count < 1:
            raise ContentError(f"item count must be >= 1: {name}")

        effect = data.get("effect")
        return cls(
            name=name,
            item_type=item_type,
            weight=weight,
            description=data.get("description", ""),
            damage=damage,
            defense=defense,
            effect=parse_effect(effect) if effect else None,
            count=count,
            uid=data.get("uid") or new_uid(),
        )
