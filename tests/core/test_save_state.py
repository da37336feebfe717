"""세이브/로드 테스트"""

from __future__ import annotations

import json

import pytest

from wasteland.core.errors import PersistenceError
from wasteland.core.item.inventory import EquipSlot
from wasteland.core.save_state import InMemorySaveStorage, load_game, save_game, snapshot
from wasteland.core.session import GameSession, SessionStatus


def _progress(run) -> None:
    run("take all", "use jumpsuit", "go north", "go north", "take all", "go north", "talk lucas", "bye")


class TestRoundTrip:
    def test_save_then_load_restores_state(self, run, session: GameSession):
        _progress(run)
        session.game_time = 83
        before = snapshot(session)

        assert run("save").texts[1] == "Game saved successfully!"
        run("go south", "go south", "take all")
        session.game_time = 200

        result = run("load")
        assert result.texts[1] == "Game loaded successfully!"
        assert result.texts[2].startswith("You approach the settlement of Megaton")
        assert snapshot(session) == before

    def test_blob_layout(self, run, session: GameSession, storage: InMemorySaveStorage):
        _progress(run)
        run("save")
        data = json.loads(storage.read(session.slot))
        assert set(data) == {
            "player",
            "currentLocation",
            "visitedLocations",
            "activeQuests",
            "completedQuests",
            "gameTime",
        }
        assert data["currentLocation"] == "megaton"
        assert data["activeQuests"] == ["firstSteps"]
        assert data["player"]["caps"] == 1
        assert data["player"]["equipped"]["armor"] is not None

    def test_equipped_item_survives(self, run, session: GameSession):
        run("take jumpsuit", "use jumpsuit", "save", "load")
        armor = session.player.inventory.equipped(EquipSlot.ARMOR)
        assert armor is not None
        assert armor.name == "Vault 101 Jumpsuit"

    def test_world_is_not_saved(self, run, session: GameSession):
        """바닥 아이템은 세이브 대상이 아니다"""
        run("save", "take stimpak", "load")
        assert session.player.inventory.find("stimpak") is None
        assert session.location.find_item("stimpak") is None

    def test_load_clears_combat(self, run, session: GameSession):
        run("go north", "go north", "save", "attack radroach")
        # 전투 중에는 load 커맨드를 받지 않는다
        assert run("load").texts[1] == 'In combat! Use "attack", "flee", or "use [item]".'

        load_game(session)
        assert session.mode == "explore"
        assert not session.combat.active

    def test_load_after_game_over(self, run, session: GameSession):
        run("go north", "go north", "save")
        session.player.hp = 1
        run("attack radroach", "attack")
        assert session.status == SessionStatus.GAME_OVER

        result = run("load")
        assert result.status == SessionStatus.PLAYING
        assert session.player.hp == 100


class TestLoadFailures:
    def test_missing_slot(self, run, session: GameSession):
        result = run("load")
        assert result.texts[1] == "No save file found."
        assert session.current_location_id == "vault101"

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            "[]",
            json.dumps({"player": {}, "currentLocation": "vault101"}),
            json.dumps({"currentLocation": "vault101"}),
        ],
    )
    def test_malformed_leaves_state_unchanged(
        self, run, session: GameSession, storage: InMemorySaveStorage, payload
    ):
        run("take stimpak", "go north")
        before = snapshot(session)
        storage.write(session.slot, payload)

        result = run("load")
        assert result.texts[1] == "Error loading save file."
        assert snapshot(session) == before

    @pytest.mark.parametrize("uid", [[], {"uid": "d4"}, 7])
    def test_non_string_equipped_uid(
        self, run, session: GameSession, storage: InMemorySaveStorage, uid
    ):
        run("take stimpak", "save", "go north")
        before = snapshot(session)
        data = json.loads(storage.read(session.slot))
        data["player"]["equipped"] = {"weapon": uid, "armor": None}
        storage.write(session.slot, json.dumps(data))

        result = run("load")
        assert result.texts[1] == "Error loading save file."
        assert snapshot(session) == before

    def test_unknown_location(self, run, session: GameSession, storage: InMemorySaveStorage):
        run("save")
        data = json.loads(storage.read(session.slot))
        data["currentLocation"] = "moon"
        storage.write(session.slot, json.dumps(data))
        with pytest.raises(PersistenceError):
            load_game(session)
        assert session.current_location_id == "vault101"


class TestConsolidateOnLoad:
    def test_split_stacks_and_loose_caps(self, session: GameSession, storage: InMemorySaveStorage):
        save_game(session)
        data = json.loads(storage.read(session.slot))
        data["player"]["caps"] = 10
        data["player"]["inventory"] = [
            {"uid": "a1", "name": "Stimpak", "type": "consumable", "weight": 0.5, "count": 1},
            {"uid": "b2", "name": "Bottle Cap", "type": "currency", "weight": 0, "count": 3},
            {"uid": "c3", "name": "Stimpak", "type": "consumable", "weight": 0.5, "count": 2},
            {"uid": "d4", "name": "10mm Pistol", "type": "weapon", "weight": 3, "damage": 15},
        ]
        data["player"]["equipped"] = {"weapon": "d4", "armor": None}
        storage.write(session.slot, json.dumps(data))

        load_game(session)
        player = session.player
        assert player.caps == 13
        assert [(item.name, item.count) for item in player.inventory] == [
            ("Stimpak", 3),
            ("10mm Pistol", 1),
        ]
        assert player.inventory.equipped(EquipSlot.WEAPON).uid == "d4"
        assert player.carried_weight == 4.5

    def test_stored_weight_recomputed(self, session: GameSession, storage: InMemorySaveStorage):
        save_game(session)
        data = json.loads(storage.read(session.slot))
        data["player"]["weight"] = 140
        storage.write(session.slot, json.dumps(data))
        load_game(session)
        assert session.player.carried_weight == 0
