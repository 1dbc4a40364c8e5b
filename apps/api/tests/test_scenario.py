"""End-to-end: a civilian registers a character and a car, a second civilian
tries to edit that car, then law enforcement works the record."""
from __future__ import annotations

from conftest import PREFIX, as_user


def test_civilian_flow_and_cross_user_edit(client) -> None:
    r = client.post(
        f"{PREFIX}/characters",
        json={
            "name": "Jane Doe",
            "date_of_birth": "1990-01-01",
            "address": "1 Main St",
            "profession": "Baker",
            "gender": "Female",
            "race": "Human",
        },
        headers=as_user("civ"),
    )
    assert r.status_code == 200
    character_id = r.json()["id"]

    r = client.post(
        f"{PREFIX}/characters/{character_id}/vehicles",
        json={"make": "Toyota", "model": "Corolla", "color": "Blue", "plate": "XYZ999"},
        headers=as_user("civ"),
    )
    assert r.status_code == 200
    vehicle_id = r.json()["id"]

    r = client.put(
        f"{PREFIX}/vehicles/{vehicle_id}",
        json={"make": "Toyota", "model": "Corolla", "color": "Red", "plate": "XYZ999"},
        headers=as_user("civ2"),
    )
    assert r.status_code == 403


def test_law_enforcement_works_the_record(client, jane_id) -> None:
    hits = client.get(f"{PREFIX}/search", params={"query": "jane"}, headers=as_user("leo")).json()
    assert [h["id"] for h in hits] == [jane_id]

    assert client.post(
        f"{PREFIX}/characters/{jane_id}/citations",
        json={"violation": "Speeding", "fine_amount": "120.00"},
        headers=as_user("leo"),
    ).status_code == 200
    warrant_id = client.post(
        f"{PREFIX}/characters/{jane_id}/warrants",
        json={"charges": "Failure to appear", "reason": "Missed court date"},
        headers=as_user("judge"),
    ).json()["id"]

    # active warrant hidden from its subject
    mine = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user("civ")).json()
    assert mine["warrants"] == []
    assert len(mine["citations"]) == 1

    assert client.post(
        f"{PREFIX}/characters/{jane_id}/arrests",
        json={"charges": "Failure to appear", "location": "Legion Square"},
        headers=as_user("leo"),
    ).status_code == 200
    assert client.put(f"{PREFIX}/warrants/{warrant_id}/complete", headers=as_user("leo")).status_code == 200

    mine = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user("civ")).json()
    assert [w["status"] for w in mine["warrants"]] == ["Completed"]
    assert len(mine["arrests"]) == 1
