"""Statement Routes — end-to-end intake over HTTP against an in-memory database.

Invariants:
    - Missing or wrong credentials → 401 with WWW-Authenticate, nothing stored
    - Valid submission → 200, one experiences row per statement, no events row
    - Invalid submission → 400, exactly one events row with the violations
    - Malformed body → 400 MALFORMED_PAYLOAD, nothing stored
    - Dry run never persists
"""

import base64

import pytest
from sqlalchemy import func, select

from statement_gate.models.experience_record import ExperienceRecord
from statement_gate.models.quarantined_event import QuarantinedEvent

STATEMENT = {
    "id": "fd41c918-b88b-4b20-a0a5-a4c32391aaa0",
    "actor": {"mbox": "mailto:learner@example.com"},
    "verb": {"id": "http://adlnet.gov/expapi/verbs/attempted"},
    "object": {"id": "http://example.com/activities/1"},
}


async def _count(test_db, model) -> int:
    result = await test_db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ─── Auth ────────────────────────────────────────────────────────

async def test_missing_credentials_returns_401(client, test_db):
    res = await client.post("/xapi/statements", json=STATEMENT)
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Basic"
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
    assert await _count(test_db, ExperienceRecord) == 0


async def test_wrong_password_returns_401(client):
    token = base64.b64encode(b"test-user:wrong").decode()
    res = await client.post(
        "/xapi/statements", json=STATEMENT,
        headers={"Authorization": f"Basic {token}"},
    )
    assert res.status_code == 401


async def test_auth_checked_before_body(client):
    """Bad credentials win over a malformed body."""
    res = await client.post("/xapi/statements", content=b"{not json")
    assert res.status_code == 401


async def test_validate_endpoint_requires_auth(client):
    res = await client.post("/xapi/statements/validate", json=STATEMENT)
    assert res.status_code == 401


# ─── Accepted ────────────────────────────────────────────────────

async def test_valid_statement_stored_in_experiences(client, auth_headers, test_db):
    res = await client.post("/xapi/statements", json=STATEMENT, headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    assert body == {
        "valid": True, "errors": [], "destination": "experiences", "stored": 1,
    }
    records = (await test_db.execute(select(ExperienceRecord))).scalars().all()
    assert len(records) == 1
    assert records[0].statement_id == STATEMENT["id"]
    assert records[0].payload == STATEMENT
    assert await _count(test_db, QuarantinedEvent) == 0


async def test_valid_batch_stores_one_row_per_statement(client, auth_headers, test_db):
    without_id = {key: value for key, value in STATEMENT.items() if key != "id"}
    batch = [without_id, STATEMENT]
    res = await client.post("/xapi/statements", json=batch, headers=auth_headers)

    assert res.status_code == 200
    assert res.json()["stored"] == 2
    assert await _count(test_db, ExperienceRecord) == 2


# ─── Quarantined ─────────────────────────────────────────────────

async def test_invalid_statement_quarantined_in_events(client, auth_headers, test_db):
    payload = dict(STATEMENT, verb={})
    res = await client.post("/xapi/statements", json=payload, headers=auth_headers)

    assert res.status_code == 400
    body = res.json()
    assert body["valid"] is False
    assert body["destination"] == "events"
    assert body["stored"] == 1
    assert body["errors"][0]["kind"] == "MISSING_REQUIRED_FIELD"
    assert body["errors"][0]["detail"]["path"] == "statement.verb"

    events = (await test_db.execute(select(QuarantinedEvent))).scalars().all()
    assert len(events) == 1
    assert events[0].payload == payload
    assert events[0].violations == body["errors"]
    assert await _count(test_db, ExperienceRecord) == 0


async def test_partly_invalid_batch_is_never_partly_accepted(client, auth_headers, test_db):
    batch = [STATEMENT, dict(STATEMENT, id="not-a-uuid")]
    res = await client.post("/xapi/statements", json=batch, headers=auth_headers)

    assert res.status_code == 400
    assert await _count(test_db, ExperienceRecord) == 0
    assert await _count(test_db, QuarantinedEvent) == 1


async def test_json_null_is_quarantined(client, auth_headers, test_db):
    res = await client.post(
        "/xapi/statements", content=b"null", headers=auth_headers,
    )
    assert res.status_code == 400
    assert [e["kind"] for e in res.json()["errors"]] == ["EMPTY_DATA"]
    assert await _count(test_db, QuarantinedEvent) == 1


# ─── Malformed body ──────────────────────────────────────────────

@pytest.mark.parametrize("body", [
    b"", b"   ", b"{not json", b"\x80\x81",
    b"{\"result\": {\"score\": {\"min\": 0, \"max\": 10, \"raw\": NaN}}}",
])
async def test_malformed_body_rejected_without_storing(client, auth_headers, test_db, body):
    res = await client.post("/xapi/statements", content=body, headers=auth_headers)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "MALFORMED_PAYLOAD"
    assert await _count(test_db, ExperienceRecord) == 0
    assert await _count(test_db, QuarantinedEvent) == 0


# ─── Dry run ─────────────────────────────────────────────────────

async def test_validate_endpoint_reports_without_storing(client, auth_headers, test_db):
    res = await client.post(
        "/xapi/statements/validate", json=dict(STATEMENT, verb={}),
        headers=auth_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["valid"] is False
    assert [e["kind"] for e in body["errors"]] == ["MISSING_REQUIRED_FIELD"]
    assert await _count(test_db, QuarantinedEvent) == 0
    assert await _count(test_db, ExperienceRecord) == 0


async def test_validate_endpoint_accepts_conformant(client, auth_headers):
    res = await client.post(
        "/xapi/statements/validate", json=[STATEMENT], headers=auth_headers,
    )
    assert res.json() == {"valid": True, "errors": []}


# ─── Health ──────────────────────────────────────────────────────

async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["service"] == "statement-gate"


async def test_ready(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"
