"""Tests for JSON logging."""

import json
import logging
import sys

from relay.logging_config import JSONFormatter, turn_fields


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="relay.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestTurnFields:
    """Tests for turn_fields()."""

    def test_reads_conversation_and_channel(self, make_activity):
        fields = turn_fields(make_activity(conversation_id="c-9", channel_id="slack"))
        assert fields == {"conversation_id": "c-9", "channel": "slack"}

    def test_includes_session_when_known(self, make_activity):
        fields = turn_fields(make_activity(), session_id="session-1")
        assert fields["session_id"] == "session-1"


class TestJSONFormatter:
    """Tests for JSONFormatter.format()."""

    def test_base_fields(self):
        data = json.loads(JSONFormatter().format(make_record("Got message")))

        assert data["level"] == "INFO"
        assert data["logger"] == "relay.test"
        assert data["message"] == "Got message"
        assert "conversation_id" not in data

    def test_turn_fields_are_top_level(self, make_activity):
        record = make_record(**turn_fields(make_activity(), session_id="session-1"))

        data = json.loads(JSONFormatter().format(record))

        assert data["conversation_id"] == "conv-1"
        assert data["channel"] == "msteams"
        assert data["session_id"] == "session-1"

    def test_unknown_extras_are_not_emitted(self):
        data = json.loads(JSONFormatter().format(make_record(password="secret")))
        assert "password" not in data

    def test_exception_is_formatted(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_non_ascii_kept(self):
        data = JSONFormatter().format(make_record("Привет"))
        assert "Привет" in data
