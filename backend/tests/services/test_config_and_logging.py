"""Settings and structured logging — environment coercion and JSON log shape."""

import json
import logging

import pytest
from pydantic import ValidationError

from statement_gate.config import Settings
from statement_gate.infrastructure.observability import JSONFormatter, setup_logging


def test_postgres_url_coerced_to_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/lrs")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/lrs"


def test_other_urls_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db")
    assert settings.database_url == "sqlite+aiosqlite:///x.db"


def test_validation_limits_from_settings():
    limits = Settings(validator_max_depth=5, validator_max_batch_size=7).validation_limits()
    assert (limits.max_depth, limits.max_batch_size) == (5, 7)


@pytest.mark.parametrize("field", ["validator_max_depth", "validator_max_batch_size"])
def test_limits_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


def test_json_formatter_surfaces_extras():
    record = logging.LogRecord(
        "statement_gate.test", logging.WARNING, __file__, 1,
        "Submission quarantined", None, None,
    )
    record.destination = "events"
    record.violation_count = 3
    log = json.loads(JSONFormatter().format(record))

    assert log["level"] == "WARNING"
    assert log["message"] == "Submission quarantined"
    assert log["destination"] == "events"
    assert log["violation_count"] == 3
    assert "error_code" not in log


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    named = [h for h in logging.root.handlers if h.get_name() == "statement_gate"]
    assert len(named) == 1
    assert logging.root.level == logging.INFO
