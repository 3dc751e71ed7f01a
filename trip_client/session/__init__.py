"""Trip session controller and its state types."""

from trip_client.session.controller import TripSessionController
from trip_client.session.state import (
    EntryContext,
    LoadingFlags,
    LoadStatus,
    ModalState,
    Navigation,
    OperationResult,
    Outcome,
)

__all__ = [
    "TripSessionController",
    "EntryContext",
    "LoadingFlags",
    "LoadStatus",
    "ModalState",
    "Navigation",
    "OperationResult",
    "Outcome",
]
