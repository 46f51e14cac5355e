"""Tests for the JSON log formatter"""

import json
import logging

from lexcase.utils.logging import JSONFormatter, setup_logging


def _record(msg, **extra):
    record = logging.makeLogRecord({
        "name": "lexcase.api.cases",
        "levelno": logging.INFO,
        "levelname": "INFO",
        "msg": msg,
    })
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_area_prefix_is_split_out():
    entry = json.loads(JSONFormatter().format(_record("[cases] Created case: abc")))

    assert entry["area"] == "cases"
    assert entry["msg"] == "Created case: abc"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "lexcase.api.cases"
    assert "context" not in entry


def test_message_without_prefix():
    entry = json.loads(JSONFormatter().format(_record("plain message")))

    assert entry["area"] is None
    assert entry["msg"] == "plain message"


def test_extra_values_kept_as_context():
    entry = json.loads(JSONFormatter().format(_record("[documents] Saved", document_id="d-1")))
    assert entry["context"] == {"document_id": "d-1"}


def test_setup_logging_does_not_stack_handlers():
    logger = setup_logging("lexcase.test_logging", json_format=False)
    setup_logging("lexcase.test_logging", json_format=True)

    ours = [h for h in logger.handlers if getattr(h, "_lexcase_handler", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
