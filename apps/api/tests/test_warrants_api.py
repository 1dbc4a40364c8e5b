from __future__ import annotations

import pytest
from sqlalchemy import text

from app.core.errors import Forbidden
from app.modules.warrants.service import complete_warrant, issue_warrant, list_warrants
from conftest import JANE, PREFIX, as_user, principal

WARRANT = {"charges": "Armed robbery", "reason": "Witness statements"}


def _issue(client, character_id, who="judge", **overrides):
    return client.post(
        f"{PREFIX}/characters/{character_id}/warrants",
        json=dict(WARRANT, **overrides),
        headers=as_user(who),
    )


def _complete(client, warrant_id, who="leo"):
    return client.put(f"{PREFIX}/warrants/{warrant_id}/complete", headers=as_user(who))


class TestIssueWarrant:
    def test_judge_issues_active_warrant(self, client, jane_id) -> None:
        r = _issue(client, jane_id)
        assert r.status_code == 200
        w = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user("leo")).json()["warrants"][0]
        assert w["id"] == r.json()["id"]
        assert w["status"] == "Active"
        assert w["issued_by"] == "u-judge"
        assert w["issued_by_name"] == "judy"
        assert w["completed_by"] is None
        assert w["completed_at"] is None

    @pytest.mark.parametrize("who", ["leo", "civ"])
    def test_only_judges_issue(self, client, jane_id, who) -> None:
        r = _issue(client, jane_id, who=who)
        assert r.status_code == 403
        assert r.json()["message"] == "Judge access required"

    def test_admin_counts_as_judge(self, client, jane_id) -> None:
        assert _issue(client, jane_id, who="admin").status_code == 200

    @pytest.mark.parametrize("missing", ["charges", "reason"])
    def test_required_fields(self, client, jane_id, missing) -> None:
        assert _issue(client, jane_id, **{missing: ""}).status_code == 400

    def test_missing_character(self, client) -> None:
        assert _issue(client, "nope").status_code == 404


class TestWarrantVisibility:
    @pytest.fixture
    def warrants(self, client, jane_id):
        active = _issue(client, jane_id, charges="Active one").json()["id"]
        done = _issue(client, jane_id, charges="Done one").json()["id"]
        assert _complete(client, done).status_code == 200
        return active, done

    def test_owner_sees_only_completed(self, client, jane_id, warrants) -> None:
        _, done = warrants
        ws = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user("civ")).json()["warrants"]
        assert [w["id"] for w in ws] == [done]

    @pytest.mark.parametrize("who", ["leo", "judge", "admin"])
    def test_law_enforcement_sees_all(self, client, jane_id, warrants, who) -> None:
        active, done = warrants
        ws = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user(who)).json()["warrants"]
        assert [w["id"] for w in ws] == [done, active]

    def test_owner_who_is_judge_sees_all(self, client) -> None:
        cid = client.post(f"{PREFIX}/characters", json=JANE, headers=as_user("judge")).json()["id"]
        _issue(client, cid)
        ws = client.get(f"{PREFIX}/characters/{cid}", headers=as_user("judge")).json()["warrants"]
        assert len(ws) == 1

    def test_list_filter(self, engine, jane_id, warrants) -> None:
        with engine.connect() as conn:
            assert len(list_warrants(conn, jane_id)) == 2
            assert [w["status"] for w in list_warrants(conn, jane_id, completed_only=True)] == ["Completed"]


class TestCompleteWarrant:
    def test_completes_and_records_completer(self, client, jane_id) -> None:
        wid = _issue(client, jane_id).json()["id"]
        r = _complete(client, wid)
        assert r.status_code == 200
        assert r.json()["success"] is True

        w = client.get(f"{PREFIX}/characters/{jane_id}", headers=as_user("judge")).json()["warrants"][0]
        assert w["status"] == "Completed"
        assert w["completed_by"] == "u-leo"
        assert w["completed_by_name"] == "officer"
        assert w["completed_at"] is not None

    def test_civilian_is_forbidden(self, client, jane_id) -> None:
        wid = _issue(client, jane_id).json()["id"]
        assert _complete(client, wid, who="civ").status_code == 403

    def test_missing_warrant(self, client) -> None:
        assert _complete(client, "nope").status_code == 404

    def test_repeat_completion_succeeds_and_keeps_first_completer(self, client, engine, jane_id) -> None:
        wid = _issue(client, jane_id).json()["id"]
        assert _complete(client, wid, who="leo").status_code == 200
        with engine.connect() as conn:
            first_at = conn.execute(
                text("SELECT completed_at FROM civilian_warrants WHERE id = :id"), {"id": wid}
            ).scalar_one()

        r = _complete(client, wid, who="judge")
        assert r.status_code == 200
        assert r.json() == {"success": True, "id": wid}

        with engine.connect() as conn:
            row = conn.execute(
                text("SELECT status, completed_by, completed_at FROM civilian_warrants WHERE id = :id"), {"id": wid}
            ).mappings().one()
        assert row["status"] == "Completed"
        assert row["completed_by"] == "u-leo"
        assert row["completed_at"] == first_at


def test_service_guards(engine, jane_id) -> None:
    with engine.begin() as conn:
        with pytest.raises(Forbidden):
            issue_warrant(conn, principal("leo"), jane_id, dict(WARRANT))
        wid = issue_warrant(conn, principal("judge"), jane_id, dict(WARRANT))
        with pytest.raises(Forbidden):
            complete_warrant(conn, principal("civ"), wid)
        complete_warrant(conn, principal("judge"), wid)
        complete_warrant(conn, principal("leo"), wid)
        assert list_warrants(conn, jane_id)[0]["completed_by"] == "u-judge"
