"""
Trip session state types.

Defines the modal state machine values, the per-operation loading flags,
the entry context a session starts from, and the result value every
controller operation returns to the presentation layer.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ModalState(Enum):
    """The modal workflow overlaying the trip screen. Exactly one is active."""

    NONE = "none"
    EDIT_TRIP = "edit_trip"
    PICK_DATES = "pick_dates"
    CONFIRM_ATTENDANCE = "confirm_attendance"


class LoadStatus(Enum):
    """Progress of the trip fetch that backs the screen."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class Outcome(Enum):
    """How a controller operation ended."""

    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    FAILED = "failed"
    NEEDS_CONFIRMATION = "needs_confirmation"
    CANCELLED = "cancelled"
    BUSY = "busy"
    IGNORED = "ignored"
    DISCARDED = "discarded"


class Navigation(Enum):
    """Where the presentation layer should go after an operation."""

    NONE = "none"
    BACK = "back"
    ROOT = "root"


@dataclass
class LoadingFlags:
    """
    Independent in-progress flags, one per network operation.

    A flag is only ever written by the operation it gates.
    """

    fetching_trip: bool = False
    updating_trip: bool = False
    confirming_attendance: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True)
class EntryContext:
    """
    Parameters the trip screen is opened with.

    Attributes:
        trip_id: Trip to display (required for a usable screen)
        participant_id: Set when the screen is opened from an invitation link
    """

    trip_id: Optional[str] = None
    participant_id: Optional[str] = None


@dataclass(frozen=True)
class OperationResult:
    """
    Result of a controller operation.

    Replaces dialog callbacks: the presentation layer decides how to show
    the acknowledgment and whether to navigate.
    """

    outcome: Outcome
    title: str = ""
    message: str = ""
    navigation: Navigation = Navigation.NONE

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    def as_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "title": self.title,
            "message": self.message,
            "navigation": self.navigation.value,
        }


IGNORED = OperationResult(outcome=Outcome.IGNORED)
