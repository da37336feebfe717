"""Game API 엔드포인트 테스트"""

from __future__ import annotations

from fastapi.testclient import TestClient


def _create(client: TestClient, **body) -> dict:
    response = client.post("/game/sessions", json=body or None)
    assert response.status_code == 201
    return response.json()


class TestCreateSession:
    def test_create(self, client: TestClient):
        data = _create(client)
        assert data["session_id"]
        assert data["lines"][0] == {
            "text": "Welcome to the Wasteland, Vault Dweller!",
            "severity": "highlight",
        }
        assert data["status"] == "playing"
        assert data["mode"] == "explore"
        assert set(data["refresh"]) == {"vitals", "inventory", "location", "quests", "time"}
        assert data["state"]["location"] == {
            "id": "vault101",
            "name": "Vault 101",
            "description": "The safety of Vault 101",
            "exits": ["north"],
        }

    def test_create_with_slot(self, client: TestClient):
        data = _create(client, slot="api-slot")
        assert data["state"]["player"]["level"] == 1

    def test_empty_slot_rejected(self, client: TestClient):
        response = client.post("/game/sessions", json={"slot": ""})
        assert response.status_code == 422


class TestCommands:
    def test_command_round_trip(self, client: TestClient):
        session_id = _create(client)["session_id"]
        response = client.post(f"/game/sessions/{session_id}/commands", json={"text": "go north"})
        assert response.status_code == 200
        data = response.json()
        assert data["lines"][0]["text"] == "> go north"
        assert data["lines"][1] == {"text": "You go north.", "severity": "success"}
        assert data["refresh"] == ["location"]
        assert data["state"]["location"]["id"] == "vault101exit"

    def test_game_error_is_narration_not_http_error(self, client: TestClient):
        session_id = _create(client)["session_id"]
        response = client.post(f"/game/sessions/{session_id}/commands", json={"text": "go west"})
        assert response.status_code == 200
        assert response.json()["lines"][1] == {"text": "You can't go west.", "severity": "error"}

    def test_dialogue_mode_and_state(self, client: TestClient):
        session_id = _create(client)["session_id"]
        url = f"/game/sessions/{session_id}/commands"
        for text in ("go north", "go north", "go north"):
            client.post(url, json={"text": text})
        data = client.post(url, json={"text": "talk lucas"}).json()
        assert data["mode"] == "dialogue"
        assert data["state"]["dialogue"]["npc"] == "Lucas Simms"
        assert data["state"]["quests"]["active"][0]["id"] == "firstSteps"
        assert data["state"]["quests"]["active"][0]["objectives"] == [
            {"description": "Visit Megaton", "done": True},
            {"description": "Talk to Lucas Simms", "done": True},
        ]

    def test_combat_state(self, client: TestClient):
        session_id = _create(client)["session_id"]
        url = f"/game/sessions/{session_id}/commands"
        client.post(url, json={"text": "go north"})
        client.post(url, json={"text": "go north"})
        data = client.post(url, json={"text": "attack radroach"}).json()
        assert data["mode"] == "combat"
        assert data["state"]["combat"] == {"enemy": "Radroach", "hp": 15, "max_hp": 15}

    def test_missing_text(self, client: TestClient):
        session_id = _create(client)["session_id"]
        response = client.post(f"/game/sessions/{session_id}/commands", json={})
        assert response.status_code == 422

    def test_text_too_long(self, client: TestClient):
        session_id = _create(client)["session_id"]
        response = client.post(
            f"/game/sessions/{session_id}/commands", json={"text": "x" * 501}
        )
        assert response.status_code == 422

    def test_unknown_session(self, client: TestClient):
        response = client.post("/game/sessions/nope/commands", json={"text": "look"})
        assert response.status_code == 404


class TestStateAndDelete:
    def test_get_state(self, client: TestClient):
        session_id = _create(client)["session_id"]
        response = client.get(f"/game/sessions/{session_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == session_id
        assert data["player"]["hp"] == 100
        assert data["quests"] == {"active": [], "completed": []}
        assert data["combat"] is None
        assert data["dialogue"] is None

    def test_delete(self, client: TestClient):
        session_id = _create(client)["session_id"]
        assert client.delete(f"/game/sessions/{session_id}").status_code == 204
        assert client.get(f"/game/sessions/{session_id}").status_code == 404
        assert client.delete(f"/game/sessions/{session_id}").status_code == 404

    def test_save_persists_in_database(self, client: TestClient):
        first = _create(client, slot="api-persist")["session_id"]
        url = f"/game/sessions/{first}/commands"
        client.post(url, json={"text": "take all"})
        client.post(url, json={"text": "save"})
        client.delete(f"/game/sessions/{first}")

        second = _create(client, slot="api-persist")["session_id"]
        data = client.post(f"/game/sessions/{second}/commands", json={"text": "load"}).json()
        assert data["lines"][1]["text"] == "Game loaded successfully!"
        names = [item["name"] for item in data["state"]["player"]["inventory"]]
        assert names == ["Vault 101 Jumpsuit", "Stimpak"]
