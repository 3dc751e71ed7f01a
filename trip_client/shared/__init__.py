"""
Shared infrastructure for the trip client.

Modules:
- config: Environment-driven client configuration
- logging: Structured JSON logging
- contracts: Trip models exchanged with the trips API
- messages: User-facing acknowledgment texts
"""

from trip_client.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "setup_logging",
    "log_state_transition",
]
