"""Append-only JSON-lines audit log for package executions."""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)

_NANOS_PER_SECOND = 1_000_000_000


class AuditError(Exception):
    """Raised when the audit log cannot be opened or written."""


def format_duration(duration: timedelta | float | int) -> str:
    """Render a duration as an ISO 8601 string of the form ``PT<s>.<ns>S``."""
    if isinstance(duration, timedelta):
        nanos = (
            (duration.days * 86_400 + duration.seconds) * _NANOS_PER_SECOND
            + duration.microseconds * 1_000
        )
    else:
        nanos = round(float(duration) * _NANOS_PER_SECOND)
    sign = -1 if nanos < 0 else 1
    seconds, remainder = divmod(abs(nanos), _NANOS_PER_SECOND)
    return f"PT{sign * seconds}.{sign * remainder:09d}S"


def _format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass
class Event:
    """One audit record; empty optional fields are left out of the JSON."""

    type: str = ""
    package: str = ""
    version: str = ""
    timestamp: datetime | None = None
    git_sha: str = ""
    digest: str = ""
    entrypoint: str = ""
    exit_code: int = 0
    duration: str = ""
    error: str = ""
    outcome: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping for this event."""
        result: dict[str, Any] = {
            "timestamp": _format_timestamp(self.timestamp) if self.timestamp else None,
            "type": self.type,
            "package": self.package,
            "version": self.version,
        }
        optional = {
            "git_sha": self.git_sha,
            "digest": self.digest,
            "entrypoint": self.entrypoint,
            "exit_code": self.exit_code,
            "duration": self.duration,
            "error": self.error,
            "outcome": self.outcome,
            "metadata": dict(self.metadata),
        }
        result.update({key: value for key, value in optional.items() if value})
        return result


class AuditLogger:
    """Writes audit events as JSON lines to a file opened in append mode."""

    def __init__(self, log_file: str | os.PathLike[str]) -> None:
        if not str(log_file):
            raise AuditError("log file path cannot be empty")
        self.log_file = Path(log_file)
        try:
            self.log_file.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise AuditError(f"failed to create log directory: {exc}") from exc
        try:
            fd = os.open(self.log_file, os.O_CREAT | os.O_WRONLY | os.O_APPEND, 0o600)
        except OSError as exc:
            raise AuditError(f"failed to open log file: {exc}") from exc
        self._file = os.fdopen(fd, "ab")
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._file is None

    def log(self, event: Event) -> None:
        """Write one event; a missing timestamp is set to the current UTC time."""
        if self._file is None:
            raise AuditError("logger file not initialized")
        with self._lock:
            if event.timestamp is None:
                event.timestamp = datetime.now(timezone.utc)
            try:
                line = json.dumps(event.to_dict()).encode("utf-8") + b"\n"
            except (TypeError, ValueError) as exc:
                raise AuditError(f"failed to marshal audit event: {exc}") from exc
            try:
                self._file.write(line)
                self._file.flush()
            except OSError as exc:
                raise AuditError(f"failed to write audit event: {exc}") from exc
            try:
                os.fsync(self._file.fileno())
            except OSError as exc:
                _log.warning("failed to sync audit log file: %s", exc)

    def log_start(
        self, package: str, version: str, digest: str, entrypoint: str, git_sha: str
    ) -> None:
        """Record the start of an execution."""
        self.log(
            Event(
                type="start",
                package=package,
                version=version,
                timestamp=datetime.now(timezone.utc),
                git_sha=git_sha,
                digest=digest,
                entrypoint=entrypoint,
            )
        )

    def log_end(
        self,
        package: str,
        version: str,
        exit_code: int,
        duration: timedelta | float,
        outcome: str,
    ) -> None:
        """Record the end of an execution."""
        self.log(
            Event(
                type="end",
                package=package,
                version=version,
                timestamp=datetime.now(timezone.utc),
                exit_code=exit_code,
                duration=format_duration(duration),
                outcome=outcome,
            )
        )

    def log_error(self, package: str, version: str, message: str) -> None:
        """Record an execution error."""
        self.log(
            Event(
                type="error",
                package=package,
                version=version,
                timestamp=datetime.now(timezone.utc),
                error=message,
                outcome="error",
            )
        )

    def close(self) -> None:
        """Close the log file; closing twice is harmless."""
        with self._lock:
            if self._file is not None:
                try:
                    self._file.close()
                finally:
                    self._file = None

    def __enter__(self) -> AuditLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()