import json
import stat
from datetime import datetime, timedelta, timezone

import pytest

from mcplaunch.audit import AuditError, AuditLogger, Event, format_duration


def _read_events(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line]


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "audit.log"


def test_new_logger_creates_file(log_path):
    with AuditLogger(log_path) as logger:
        assert logger.closed is False
        assert log_path.exists()


def test_new_logger_empty_path():
    with pytest.raises(AuditError):
        AuditLogger("")


def test_new_logger_creates_directory(tmp_path):
    log_dir = tmp_path / "subdir" / "audit"
    with AuditLogger(log_dir / "audit.log"):
        assert log_dir.is_dir()


def test_log_writes_json(log_path):
    with AuditLogger(log_path) as logger:
        logger.log(Event(type="start", package="acme/test", version="1.0.0"))
    (event,) = _read_events(log_path)
    assert event["type"] == "start"
    assert event["package"] == "acme/test"
    assert event["version"] == "1.0.0"


def test_log_multiple_events(log_path):
    with AuditLogger(log_path) as logger:
        logger.log(Event(type="start", package="pkg1"))
        logger.log(Event(type="end", package="pkg1", exit_code=0))
    events = _read_events(log_path)
    assert [e["type"] for e in events] == ["start", "end"]
    assert '"start"' in log_path.read_text()


def test_log_start(log_path):
    with AuditLogger(log_path) as logger:
        logger.log_start("acme/test", "1.0.0", "sha256:abc", "./bin/server", "gitsha123")
    (event,) = _read_events(log_path)
    assert event["type"] == "start"
    assert event["package"] == "acme/test"
    assert event["version"] == "1.0.0"
    assert event["digest"] == "sha256:abc"
    assert event["entrypoint"] == "./bin/server"
    assert event["git_sha"] == "gitsha123"


def test_log_end(log_path):
    with AuditLogger(log_path) as logger:
        logger.log_end("acme/test", "1.0.0", 0, timedelta(seconds=2), "success")
    (event,) = _read_events(log_path)
    assert event["type"] == "end"
    assert event["package"] == "acme/test"
    assert event["version"] == "1.0.0"
    assert "exit_code" not in event
    assert event["outcome"] == "success"
    assert "PT2" in event["duration"]
    assert event["duration"] == "PT2.000000000S"


def test_log_end_nonzero_exit_code(log_path):
    with AuditLogger(log_path) as logger:
        logger.log_end("acme/test", "1.0.0", 124, 1.5, "timeout")
    (event,) = _read_events(log_path)
    assert event["exit_code"] == 124
    assert event["duration"] == "PT1.500000000S"


def test_log_error(log_path):
    with AuditLogger(log_path) as logger:
        logger.log_error("acme/test", "1.0.0", "connection failed")
    (event,) = _read_events(log_path)
    assert event["type"] == "error"
    assert event["package"] == "acme/test"
    assert event["version"] == "1.0.0"
    assert event["error"] == "connection failed"
    assert event["outcome"] == "error"


def test_close_twice_then_log_fails(log_path):
    logger = AuditLogger(log_path)
    logger.close()
    logger.close()
    assert logger.closed is True
    with pytest.raises(AuditError):
        logger.log(Event(type="test"))


def test_log_file_permissions(log_path):
    with AuditLogger(log_path) as logger:
        logger.log(Event(type="test"))
    assert stat.S_IMODE(log_path.stat().st_mode) == 0o600


def test_log_timestamp(log_path):
    before = datetime.now(timezone.utc)
    with AuditLogger(log_path) as logger:
        logger.log(Event(type="test"))
    after = datetime.now(timezone.utc)
    (event,) = _read_events(log_path)
    stamp = datetime.fromisoformat(event["timestamp"].replace("Z", "+00:00"))
    assert before - timedelta(seconds=1) < stamp < after + timedelta(seconds=1)


def test_event_to_dict_omits_empty_fields():
    event = Event(type="start", package="p", version="v",
                  timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    assert event.to_dict() == {
        "timestamp": "2024-01-02T03:04:05.000000Z",
        "type": "start",
        "package": "p",
        "version": "v",
    }


def test_event_to_dict_includes_metadata():
    event = Event(type="x", metadata={"k": "v"})
    assert event.to_dict()["metadata"] == {"k": "v"}


@pytest.mark.parametrize(
    "duration, expected",
    [
        (timedelta(seconds=2), "PT2.000000000S"),
        (timedelta(milliseconds=1500), "PT1.500000000S"),
        (timedelta(0), "PT0.000000000S"),
        (0.25, "PT0.250000000S"),
    ],
)
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected