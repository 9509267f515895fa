"""Tests for JSONFormatter — structured extras surface only when present."""

import json
import logging

from sitebook.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "sitebook.test", logging.WARNING, __file__, 1, "msg %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "sitebook.test"
    assert log["message"] == "msg x"
    assert "project_id" not in log


def test_extras_are_included():
    log = json.loads(JSONFormatter().format(
        _record(project_id=3, invoice_id=9, storage_key="projects"),
    ))
    assert log["project_id"] == 3
    assert log["invoice_id"] == 9
    assert log["storage_key"] == "projects"
