"""
Logging setup for the trip client.

Two output formats are available, chosen by ClientConfig.log_format:
pipe-separated text lines for local runs and one JSON object per record
for log collectors. Session state transitions are emitted as records
carrying a compact summary of the session snapshot.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from trip_client.shared.config import ClientConfig, DEFAULT_CONFIG


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that only add request noise at INFO
QUIET_LOGGERS = ("httpcore", "httpx")


class StructuredFormatter(logging.Formatter):
    """
    Render a record as a single JSON line.

    Keys: timestamp (UTC, "Z" suffix), level, logger, message, plus
    "transition" when the record came from log_state_transition and
    "exception" when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        transition = getattr(record, "transition", None)
        if transition is not None:
            entry["transition"] = transition

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: Optional[str] = None,
    structured: bool = True,
) -> logging.Logger:
    """
    Install handlers on a logger, replacing any it already had.

    Args:
        level: Logging level
        log_file: Optional file that receives the same records as stdout
        logger_name: Logger to configure; None configures the root logger
        structured: JSON lines when True, pipe-separated text otherwise

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(config: ClientConfig = DEFAULT_CONFIG) -> logging.Logger:
    """Configure the root logger from the client configuration."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    root = setup_logging(
        level=level,
        log_file=config.log_file or None,
        structured=config.log_format == "json",
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def log_state_transition(
    event: str,
    snapshot: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Emit an INFO record for a session state change.

    Args:
        event: Event name, e.g. "edit_opened" or "trip_loaded"
        snapshot: TripSessionController.snapshot() output
        extra: Event-specific fields, e.g. the modal it came from
        logger: Destination logger (defaults to "trip_client")
    """
    logger = logger or logging.getLogger("trip_client")
    if not logger.isEnabledFor(logging.INFO):
        return

    transition: Dict[str, Any] = {
        "event": event,
        "session_id": snapshot.get("session_id"),
        "trip_id": snapshot.get("trip_id"),
        "modal": snapshot.get("modal"),
        "load_status": snapshot.get("load_status"),
        "loading": snapshot.get("loading"),
    }
    if extra:
        transition["details"] = extra

    logger.info(f"State transition: {event}", extra={"transition": transition})
