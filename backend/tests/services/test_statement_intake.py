"""Statement Intake — routing of submissions without a database.

Invariants:
    - Valid → save_accepted with a list (single statement wrapped), destination experiences
    - Invalid → save_quarantined once with the untouched payload and violation dicts
    - Every row of a submission shares one received_at
    - parse_payload raises MalformedPayloadError for empty or non-JSON bodies
"""

from uuid import uuid4

import pytest

from statement_gate.core.domain_types import Destination
from statement_gate.core.errors import MalformedPayloadError
from statement_gate.core.violations import ValidationLimits
from statement_gate.services.statement_intake import (
    StatementIntake,
    check_statements,
    parse_payload,
)

STATEMENT = {
    "actor": {"mbox": "mailto:learner@example.com"},
    "verb": {"id": "http://adlnet.gov/expapi/verbs/attempted"},
    "object": {"id": "http://example.com/activities/1"},
}


class RecordingRepository:
    """In-memory StatementRepository that remembers every call."""

    def __init__(self):
        self.accepted = []
        self.quarantined = []

    async def save_accepted(self, statements, received_at):
        self.accepted.append((statements, received_at))
        return [uuid4() for _ in statements]

    async def save_quarantined(self, payload, violations, received_at):
        self.quarantined.append((payload, violations, received_at))
        return uuid4()


@pytest.fixture
def repository():
    return RecordingRepository()


# ─── submit ──────────────────────────────────────────────────────

async def test_single_statement_wrapped_in_list(repository):
    outcome = await StatementIntake(repository).submit(STATEMENT)

    assert outcome.destination is Destination.EXPERIENCES
    assert outcome.stored == 1
    assert outcome.result.valid
    statements, received_at = repository.accepted[0]
    assert statements == [STATEMENT]
    assert received_at.tzinfo is not None
    assert repository.quarantined == []


async def test_batch_accepted_as_is(repository):
    outcome = await StatementIntake(repository).submit([STATEMENT, STATEMENT])
    assert outcome.stored == 2
    assert repository.accepted[0][0] == [STATEMENT, STATEMENT]


async def test_invalid_submission_quarantined_once(repository):
    payload = [STATEMENT, {"actor": STATEMENT["actor"]}]
    outcome = await StatementIntake(repository).submit(payload)

    assert outcome.destination is Destination.EVENTS
    assert outcome.stored == 1
    assert repository.accepted == []
    assert len(repository.quarantined) == 1
    stored_payload, violations, _ = repository.quarantined[0]
    assert stored_payload is payload
    assert [v["kind"] for v in violations] == ["MISSING_REQUIRED_FIELD"] * 2
    assert {v["detail"]["path"] for v in violations} == {"statements[1]"}


async def test_limits_applied(repository):
    intake = StatementIntake(repository, ValidationLimits(max_batch_size=1))
    outcome = await intake.submit([STATEMENT, STATEMENT])
    assert outcome.result.kinds == ["BATCH_TOO_LARGE"]
    assert outcome.destination is Destination.EVENTS


async def test_non_document_payload_quarantined(repository):
    outcome = await StatementIntake(repository).submit(42)
    assert outcome.result.kinds == ["INVALID_DATA_TYPE"]
    assert repository.quarantined[0][0] == 42


# ─── parse_payload ───────────────────────────────────────────────

def test_parse_payload_returns_document():
    assert parse_payload(b'[{"id": "a"}]') == [{"id": "a"}]


def test_parse_payload_keeps_json_null():
    assert parse_payload(b"null") is None


@pytest.mark.parametrize("body", [
    b"", b" \n\t", b"{", b"\x80",
    b"NaN", b"{\"raw\": Infinity}", b"[-Infinity]",
])
def test_parse_payload_rejects_malformed(body):
    with pytest.raises(MalformedPayloadError) as exc_info:
        parse_payload(body)
    assert exc_info.value.code == "MALFORMED_PAYLOAD"
    assert exc_info.value.http_status == 400


# ─── check_statements ────────────────────────────────────────────

def test_check_statements_returns_verdict():
    assert check_statements(STATEMENT).valid
    assert check_statements({}).kinds == ["MISSING_REQUIRED_FIELD"] * 3
