"""Logging configuration and utilities."""

from trip_client.shared.logging.config import (
    configure_logging,
    setup_logging,
    log_state_transition,
    StructuredFormatter,
)

__all__ = [
    "configure_logging",
    "setup_logging",
    "log_state_transition",
    "StructuredFormatter",
]
