"""효과(Effect) 어휘 - 태그 유니온

콘텐츠 dict의 "type" 문자열은 로드 시점에 한 번만 해석되고,
이후 엔진은 dataclass 타입으로만 분기한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from wasteland.core.errors import ContentError
from wasteland.core.stats import is_stat_name


@dataclass(frozen=True)
class HealEffect:
    value: int


@dataclass(frozen=True)
class RadiationEffect:
    value: int  # 음수 = 방사능 제거


@dataclass(frozen=True)
class StatEffect:
    stat: str
    delta: int


@dataclass(frozen=True)
class GiveItemEffect:
    item_key: str  # ItemRegistry 키


@dataclass(frozen=True)
class GiveCapsEffect:
    amount: int


@dataclass(frozen=True)
class CompleteQuestEffect:
    quest_id: str


@dataclass(frozen=True)
class OfferQuestEffect:
    quest_id: str


Effect = Union[
    HealEffect,
    RadiationEffect,
    StatEffect,
    GiveItemEffect,
    GiveCapsEffect,
    CompleteQuestEffect,
    OfferQuestEffect,
]

# 원본 콘텐츠의 camelCase 태그도 허용
_TYPE_ALIASES = {
    "rads": "radiation",
    "giveItem": "give_item",
    "giveCaps": "give_caps",
    "completeQuest": "complete_quest",
    "offerQuest": "offer_quest",
}


def parse_effect(raw: dict) -> Effect:
    """콘텐츠/세이브 dict → Effect. 알 수 없는 태그는 ContentError."""
    if not isinstance(raw, dict):
        raise ContentError(f"effect must be an object, got {raw!r}")

    kind = raw.get("type", "")
    kind = _TYPE_ALIASES.get(kind, kind)

    try:
        if kind == "heal":
            return HealEffect(value=int(raw["value"]))
        if kind == "radiation":
            return RadiationEffect(value=int(raw["value"]))
        if kind == "stat":
            stat = raw["stat"]
            if not is_stat_name(stat):
                raise ContentError(f"unknown stat in effect: {stat}")
            return StatEffect(stat=stat, delta=int(raw["value"]))
        if kind == "give_item":
            return GiveItemEffect(item_key=str(raw["item"]))
        if kind == "give_caps":
            return GiveCapsEffect(amount=int(raw["amount"]))
        if kind == "complete_quest":
            return CompleteQuestEffect(quest_id=str(raw["quest"]))
        if kind == "offer_quest":
            return OfferQuestEffect(quest_id=str(raw["quest"]))
    except KeyError as e:
        raise ContentError(f"effect '{kind}' missing field {e}") from e

    raise ContentError(f"unknown effect type: {raw.get('type')!r}")


def effect_to_dict(effect: Effect) -> dict:
    """Effect → dict (세이브 직렬화용, parse_effect의 역)"""
    if isinstance(effect, HealEffect):
        return {"type": "heal", "value": effect.value}
    if isinstance(effect, RadiationEffect):
        return {"type": "radiation", "value": effect.value}
    if isinstance(effect, StatEffect):
        return {"type": "stat", "stat": effect.stat, "value": effect.delta}
    if isinstance(effect, GiveItemEffect):
        return {"type": "give_item", "item": effect.item_key}
    if isinstance(effect, GiveCapsEffect):
        return {"type": "give_caps", "amount": effect.amount}
    if isinstance(effect, CompleteQuestEffect):
        return {"type": "complete_quest", "quest": effect.quest_id}
    if isinstance(effect, OfferQuestEffect):
        return {"type": "offer_quest", "quest": effect.quest_id}
    raise TypeError(f"not an effect: {effect!r}")


def describe_effect(effect: Effect) -> str:
    """examine 화면용 한 줄 설명"""
    if isinstance(effect, HealEffect):
        return f"Restores {effect.value} HP"
    if isinstance(effect, RadiationEffect):
        if effect.value > 0:
            return f"Adds {effect.value} radiation"
        return f"Removes {abs(effect.value)} radiation"
    if isinstance(effect, StatEffect):
        sign = "+" if effect.delta > 0 else ""
        return f"{sign}{effect.delta} to {effect.stat}"
    if isinstance(effect, GiveItemEffect):
        return f"Grants {effect.item_key}"
    if isinstance(effect, GiveCapsEffect):
        return f"Grants {effect.amount} caps"
    if isinstance(effect, CompleteQuestEffect):
        return f"Completes quest {effect.quest_id}"
    if isinstance(effect, OfferQuestEffect):
        return f"Offers quest {effect.quest_id}"
    return "Unknown effect"
