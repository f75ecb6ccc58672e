"""Structured JSONL logger for generation attempts.

One line per event, written to {log_dir}/attempts.jsonl when a log directory is
configured. Request bodies are never logged, only their sizes.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

EVENT_TYPE_ALLOWLIST = frozenset(
    [
        "state_transition",
        "request_sent",
        "response_received",
        "export_saved",
        "error",
    ]
)

logger = logging.getLogger(__name__)

# Module-level registry for loggers
_loggers: dict[Path, "AttemptLogger"] = {}

MAX_MESSAGE_LENGTH = 200


class AttemptLogger:
    """Append-only JSONL event log shared by all attempts of a session."""

    def __init__(self, log_path: Path, level: str = "INFO") -> None:
        self.log_path = log_path
        self.attempt_id: str | None = None
        self._log_level = self._parse_level(level)

    @staticmethod
    def _parse_level(level: str) -> int:
        """Map a level name (as in ClientConfig.log_level) to its number."""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
        }
        return level_map.get(level.upper(), logging.INFO)

    def _ensure_log_dir(self) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def _write_line(self, event: dict[str, Any]) -> None:
        """Append one event; an unwritable log is reported, never raised."""
        try:
            self._ensure_log_dir()
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(event, ensure_ascii=False) + "\n")
                f.flush()
        except OSError as e:
            logger.warning(
                "attempt_log_unwritable",
                extra={"log_path": str(self.log_path), "error_msg": str(e)},
            )

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """Log a structured event.

        Args:
            event_type: Must be in EVENT_TYPE_ALLOWLIST.
            **kwargs: Event-specific fields.
        """
        if event_type not in EVENT_TYPE_ALLOWLIST:
            raise ValueError(
                f"Invalid event_type: {event_type}. Must be in {EVENT_TYPE_ALLOWLIST}"
            )
        if event_type != "error" and self._log_level > logging.INFO:
            return

        event = {
            "timestamp": datetime.now().isoformat(),
            "attempt_id": self.attempt_id,
            "event_type": event_type,
            **kwargs,
        }
        self._write_line(event)

    def log_state_transition(
        self, from_state: str, to_state: str, **kwargs: Any
    ) -> None:
        """Log a phase change of the upload state machine."""
        self.log_event(
            "state_transition",
            from_state=from_state,
            to_state=to_state,
            **kwargs,
        )

    def log_error(self, error_type: str, message: str, **kwargs: Any) -> None:
        """Log an error occurrence, message truncated."""
        self.log_event(
            "error",
            error_type=error_type,
            message=message[:MAX_MESSAGE_LENGTH],
            **kwargs,
        )


def get_logger(log_dir: Path, level: str = "INFO") -> AttemptLogger:
    """Get or create the attempt logger writing under log_dir.

    The level applies when the logger is first created.
    """
    log_path = Path(log_dir) / "attempts.jsonl"
    if log_path not in _loggers:
        _loggers[log_path] = AttemptLogger(log_path, level)
    return _loggers[log_path]


def clear_loggers() -> None:
    """Clear the logger registry. Useful for testing."""
    global _loggers
    _loggers = {}
