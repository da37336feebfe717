"""탐색 커맨드 테스트: look / go / take / examine"""

from __future__ import annotations

from wasteland.core.narration import Panel, Severity
from wasteland.core.session import GameSession


class TestLook:
    def test_look_describes_location(self, run):
        result = run("look")
        assert result.texts[0] == "> look"
        assert result.texts[1].startswith("You stand in the main corridor of Vault 101.")
        assert "Exits: north" in result.texts
        assert "Items here: Vault 101 Jumpsuit, Stimpak" in result.texts

    def test_look_direction_peeks_without_moving(self, run, session: GameSession):
        run("go north", "go north")
        result = run("look north")
        assert result.texts[1:] == [
            "Looking north, you see:",
            "A settlement built around an atomic bomb",
            "You can see 2 person(s) there.",
        ]
        assert session.current_location_id == "wasteland"

    def test_look_direction_counts_enemies_and_items(self, run):
        run("go north")
        result = run("look north")
        assert "You can see 1 enemy(ies) in the distance." in result.texts
        assert "You notice some items scattered about." in result.texts

    def test_look_at_item(self, run):
        assert run("look stimpak").texts[1] == "A healing stimulant."

    def test_look_at_missing_target(self, run):
        result = run("look deathclaw")
        assert result.texts[1] == "You don't see deathclaw here."
        assert result.lines[1].severity == Severity.ERROR


class TestGo:
    def test_move_and_describe(self, run, session: GameSession):
        result = run("go north")
        assert result.texts[1] == "You go north."
        assert session.current_location_id == "vault101exit"
        assert "vault101exit" in session.visited
        assert Panel.LOCATION in result.panels

    def test_direction_prefix(self, run, session: GameSession):
        run("go n")
        assert session.current_location_id == "vault101exit"

    def test_synonyms(self, run, session: GameSession):
        run("walk north", "move south")
        assert session.current_location_id == "vault101"

    def test_no_direction(self, run):
        assert run("go").texts[1] == "Go where?"

    def test_unknown_direction(self, run, session: GameSession):
        assert run("go sideways").texts[1] == "You can't go sideways."
        assert session.current_location_id == "vault101"

    def test_blocked_exit_until_requirement_met(self, run, session: GameSession):
        """지하실은 손전등이 있어야 내려갈 수 있다"""
        run("go north", "go north", "go west")
        result = run("go down")
        assert result.texts[1] == "It's pitch black down there. You'll need a light source."
        assert session.current_location_id == "abandonedhouse"

        run("take flashlight")
        run("go down")
        assert session.current_location_id == "basement"

    def test_move_emits_player_moved(self, session: GameSession, run):
        moves = []
        session.bus.subscribe("player_moved", lambda e: moves.append(e.data))
        run("go north")
        assert moves == [{"origin": "vault101", "destination": "vault101exit"}]


class TestTake:
    def test_take_item(self, run, session: GameSession):
        result = run("take stimpak")
        assert result.texts[1] == "You take the Stimpak."
        assert session.player.inventory.find("stimpak").count == 1
        assert session.location.find_item("stimpak") is None

    def test_take_nothing(self, run):
        assert run("take").texts[1] == "Take what?"

    def test_take_missing(self, run):
        assert run("take nuka").texts[1] == "You don't see nuka here."

    def test_take_bottle_cap(self, run, session: GameSession):
        run("go north", "go north")
        result = run("take cap")
        assert result.texts[1] == "You collect a bottle cap (1 cap)"
        assert session.player.caps == 1
        assert session.player.inventory.find("cap") is None

    def test_too_heavy(self, run, session: GameSession):
        session.player.max_weight = 1
        result = run("take jumpsuit")
        assert result.texts[1] == "You can't carry Vault 101 Jumpsuit. It's too heavy!"
        assert session.location.find_item("jumpsuit") is not None

    def test_take_all(self, run, session: GameSession):
        result = run("take all")
        assert result.texts[1] == "You take: Vault 101 Jumpsuit, Stimpak"
        assert session.location.items == []
        assert session.player.carried_weight == 2.5

    def test_take_all_caps_and_items(self, run, session: GameSession):
        run("go north", "go north")
        result = run("take all")
        assert result.texts[1:] == [
            "You collect 1 bottle cap(s) (1 caps)",
            "You take: RadAway",
        ]
        assert session.player.caps == 1

    def test_take_all_skips_heavy(self, run, session: GameSession):
        session.player.max_weight = 2.2
        result = run("take all")
        assert "You take: Vault 101 Jumpsuit" in result.texts
        assert "You can't carry: Stimpak (too heavy)" in result.texts
        assert [item.name for item in session.location.items] == ["Stimpak"]

    def test_take_all_empty_location_is_noop(self, run, session: GameSession):
        run("take all")
        before = session.player.to_dict()
        result = run("take all")
        assert result.texts[1] == "There are no items here to take."
        assert session.player.to_dict() == before

    def test_weight_invariant(self, run, session: GameSession):
        run("take all", "go north", "go north", "take all")
        inventory = session.player.inventory
        assert session.player.carried_weight == sum(i.weight * i.count for i in inventory)


class TestExamine:
    def test_examine_floor_item(self, run):
        result = run("examine stimpak")
        assert result.texts[1:] == [
            "Examining Stimpak:",
            "A healing stimulant.",
            "Type: Consumable",
            "Effect: Restores 25 HP",
            "Weight: 0.5 lbs",
        ]

    def test_examine_equipped_armor(self, run):
        run("take jumpsuit", "use jumpsuit")
        result = run("ex jumpsuit")
        assert "Defense: 5" in result.texts
        assert "Weight: 2 lbs" in result.texts
        assert result.texts[-1] == "Status: Equipped (Armor)"

    def test_examine_stack_count(self, run, session: GameSession):
        run("take stimpak")
        session.player.inventory.find("stimpak").count = 3
        assert "Count: 3" in run("inspect stimpak").texts

    def test_examine_nothing(self, run):
        assert run("examine").texts[1] == "Examine what?"

    def test_examine_missing(self, run):
        assert run("examine cola").texts[1] == "You don't see cola here or in your inventory."
