"""플레이어 수치, 효과 파싱, 출구 조건 테스트"""

from __future__ import annotations

import pytest

from wasteland.core.effects import (
    CompleteQuestEffect,
    GiveItemEffect,
    HealEffect,
    RadiationEffect,
    StatEffect,
    describe_effect,
    effect_to_dict,
    parse_effect,
)
from wasteland.core.errors import ContentError
from wasteland.core.item.models import Item, ItemType
from wasteland.core.player import PlayerState
from wasteland.core.requirements import (
    ItemRequirement,
    QuestRequirement,
    SkillRequirement,
    SpecialRequirement,
    UnknownRequirement,
    check_requirement,
    parse_requirement,
)


class TestVitals:
    def test_heal_clamped_to_max(self):
        player = PlayerState(hp=90)
        assert player.heal(25) == 10
        assert player.hp == 100

    def test_rads_clamped(self):
        player = PlayerState(rads=10)
        assert player.adjust_rads(-25) == -10
        assert player.rads == 0
        player.adjust_rads(500)
        assert player.rads == player.max_rads

    def test_damage_can_go_negative(self):
        player = PlayerState(hp=3)
        player.take_damage(10)
        assert player.hp == -7
        assert player.is_dead

    def test_adjust_stat_floor_zero(self):
        player = PlayerState()
        assert player.adjust_stat("speech", 5) == 5
        assert player.adjust_stat("luck", -10) == 0


class TestLevelUp:
    def test_threshold_reached(self):
        player = PlayerState()
        assert player.gain_experience(100) is True
        assert player.level == 2
        assert player.experience == 0
        assert (player.hp, player.max_hp) == (110, 110)
        assert (player.ap, player.max_ap) == (105, 105)

    def test_below_threshold(self):
        player = PlayerState()
        assert player.gain_experience(99) is False
        assert player.level == 1
        assert player.experience == 99

    def test_single_level_per_gain(self):
        """임계치를 크게 넘어도 한 번에 1레벨만"""
        player = PlayerState()
        player.gain_experience(250)
        assert player.level == 2
        assert player.experience == 0

    def test_level_up_restores_health(self):
        player = PlayerState(hp=12)
        player.gain_experience(100)
        assert player.hp == player.max_hp


class TestSerialization:
    def test_round_trip(self):
        player = PlayerState(caps=42, rads=7)
        player.acquire(Item(name="Stimpak", item_type=ItemType.CONSUMABLE, weight=0.5, count=2))
        player.talked_to.add("Gob")
        data = player.to_dict()
        assert data["maxHp"] == 100
        assert data["weight"] == 1.0
        restored = PlayerState.from_dict(data)
        assert restored.to_dict() == data

    def test_stored_weight_ignored(self):
        data = PlayerState().to_dict()
        data["weight"] = 999
        assert PlayerState.from_dict(data).carried_weight == 0

    def test_missing_required_field(self):
        with pytest.raises(KeyError):
            PlayerState.from_dict({"hp": 10})


class TestEffects:
    def test_parse_known_tags(self):
        assert parse_effect({"type": "heal", "value": 25}) == HealEffect(25)
        assert parse_effect({"type": "rads", "value": -25}) == RadiationEffect(-25)
        assert parse_effect({"type": "stat", "stat": "speech", "value": 5}) == StatEffect("speech", 5)
        assert parse_effect({"type": "giveItem", "item": "stimpak"}) == GiveItemEffect("stimpak")
        assert parse_effect({"type": "complete_quest", "quest": "q1"}) == CompleteQuestEffect("q1")

    def test_unknown_tag(self):
        with pytest.raises(ContentError):
            parse_effect({"type": "teleport"})

    def test_unknown_stat(self):
        with pytest.raises(ContentError):
            parse_effect({"type": "stat", "stat": "charm", "value": 1})

    def test_missing_field(self):
        with pytest.raises(ContentError):
            parse_effect({"type": "heal"})

    def test_to_dict_parses_back(self):
        effect = StatEffect("luck", -1)
        assert parse_effect(effect_to_dict(effect)) == effect

    def test_describe(self):
        assert describe_effect(HealEffect(25)) == "Restores 25 HP"
        assert describe_effect(RadiationEffect(-25)) == "Removes 25 radiation"
        assert describe_effect(RadiationEffect(5)) == "Adds 5 radiation"


class TestRequirements:
    def test_none_when_absent(self):
        assert parse_requirement(None) is None

    def test_item(self):
        req = parse_requirement({"type": "item", "item": "Flashlight"})
        player = PlayerState()
        assert not check_requirement(req, player, [])
        player.acquire(Item(name="Flashlight", item_type=ItemType.TOOL, weight=1))
        assert check_requirement(req, player, [])

    def test_skill_and_special(self):
        player = PlayerState()
        assert check_requirement(SkillRequirement("lockpick", 1), player, []) is False
        assert check_requirement(SpecialRequirement("strength", 5), player, []) is True

    def test_quest(self):
        req = QuestRequirement("firstSteps")
        assert not check_requirement(req, PlayerState(), [])
        assert check_requirement(req, PlayerState(), ["firstSteps"])

    def test_unknown_kind_is_satisfied(self):
        req = parse_requirement({"type": "karma", "value": 10})
        assert isinstance(req, UnknownRequirement)
        assert check_requirement(req, PlayerState(), [])

    def test_malformed(self):
        with pytest.raises(ContentError):
            parse_requirement({"type": "skill", "skill": "science"})

    def test_item_requirement_type(self):
        assert parse_requirement({"type": "item", "item": "Key"}) == ItemRequirement("Key")
