from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from server.play_service import app, sessions


@pytest.fixture
def client():
    sessions.clear()
    return TestClient(app)


def start(client, **overrides):
    payload = {"seed": 3, "instant": True, "player_name": "Tess"}
    payload.update(overrides)
    response = client.post("/session/start", json=payload)
    assert response.status_code == 200
    return response.json()


def test_rule_sets_listing(client):
    body = client.get("/rule-sets").json()
    assert [entry["id"] for entry in body["rule_sets"]] == ["highest-card", "suit-follows", "spades-trump"]
    assert body["rule_sets"][2]["index"] == 2


def test_session_flow(client):
    body = start(client, rule_set="suit-follows", opponent="greedy")
    session_id = body["session_id"]
    assert body["state"]["phase"] == "waiting"
    assert body["state"]["seats"][0]["display_name"] == "Tess (You)"

    dealt = client.post(f"/session/{session_id}/deal").json()
    assert dealt["accepted"] is True
    assert dealt["state"]["phase"] == "playing"
    assert client.post(f"/session/{session_id}/deal").json()["accepted"] is False

    card_id = dealt["state"]["seats"][0]["hand"][0]["id"]
    played = client.post(f"/session/{session_id}/play", json={"card_id": card_id}).json()
    assert played["accepted"] is True
    assert sum(played["state"]["scores"]) == 1

    again = client.post(f"/session/{session_id}/play", json={"card_id": card_id}).json()
    assert again["accepted"] is False

    while client.get(f"/session/{session_id}").json()["state"]["phase"] != "game_over":
        assert client.post(f"/session/{session_id}/auto-play").json()["accepted"] is True
    final = client.get(f"/session/{session_id}").json()["state"]
    assert sum(final["scores"]) == 13
    assert final["game_winner"] is not None

    reset = client.post(f"/session/{session_id}/reset", json={"rule_set": 0}).json()
    assert reset["state"]["phase"] == "waiting"
    assert reset["state"]["rule_set"]["id"] == "highest-card"


def test_rename(client):
    session_id = start(client)["session_id"]
    body = client.post(f"/session/{session_id}/rename", json={"name": "<i>Ari</i>"}).json()
    assert body["state"]["seats"][0]["name"] == "Ari"


def test_errors(client):
    assert client.get("/session/missing").status_code == 404
    assert client.post("/session/start", json={"opponent": "oracle"}).status_code == 400
    assert client.post("/session/start", json={"rule_set": 9}).status_code == 400
    session_id = start(client)["session_id"]
    client.post(f"/session/{session_id}/deal")
    assert client.post(f"/session/{session_id}/play", json={"card_id": "bogus"}).status_code == 400
    assert client.post(f"/session/{session_id}/reset", json={"rule_set": "bridge"}).status_code == 400


def test_paced_session_waits_for_dealing(client):
    session_id = start(client, instant=False)["session_id"]
    body = client.post(f"/session/{session_id}/deal").json()
    assert body["state"]["phase"] == "dealing"
    assert body["state"]["dealing"] is True


def test_concurrent_plays_keep_every_card(client):
    session_id = start(client)["session_id"]
    hand = client.post(f"/session/{session_id}/deal").json()["state"]["seats"][0]["hand"]
    card_ids = [card["id"] for card in hand[:8]]

    def play(card_id):
        return TestClient(app).post(f"/session/{session_id}/play", json={"card_id": card_id})

    with ThreadPoolExecutor(max_workers=8) as pool:
        responses = list(pool.map(play, card_ids))

    assert all(response.status_code == 200 for response in responses)
    accepted = sum(response.json()["accepted"] for response in responses)
    state = client.get(f"/session/{session_id}").json()["state"]
    assert state["seats"][0]["card_count"] == 13 - accepted
    on_table = sum(seat["card_count"] for seat in state["seats"]) + len(state["play_area"])
    assert on_table + 4 * sum(state["scores"]) == 52
    held = [card["id"] for card in state["seats"][0]["hand"]]
    assert len(held) == len(set(held))
    assert not set(held) & {card_id for card_id, response in zip(card_ids, responses) if response.json()["accepted"]}


def test_delete_session(client):
    session_id = start(client, instant=False)["session_id"]
    client.post(f"/session/{session_id}/deal")
    response = client.delete(f"/session/{session_id}")
    assert response.status_code == 200
    assert response.json() == {"session_id": session_id, "closed": True}
    assert session_id not in sessions
    assert client.get(f"/session/{session_id}").status_code == 404
    assert client.delete(f"/session/{session_id}").status_code == 404
