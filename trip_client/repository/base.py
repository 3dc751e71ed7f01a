"""
Trip repository - abstract boundary between the session controller and
the outside world (trips API and on-device joined store).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
import logging

from trip_client.shared.contracts import TripCreate, TripDetails
from trip_client.repository.joined_store import JoinedTripStore

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository failures"""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class NetworkError(RepositoryError):
    """Request was sent (or attempted) but did not succeed"""


class TripNotFoundError(RepositoryError):
    """Trip identifier is unknown to the API"""
    def __init__(self, trip_id: str, original_error: Optional[Exception] = None):
        self.trip_id = trip_id
        super().__init__(f"Trip {trip_id} not found", original_error)


class TripValidationError(RepositoryError):
    """API rejected the payload"""


class AlreadyConfirmedError(RepositoryError):
    """Participant has already confirmed attendance"""
    def __init__(self, participant_id: str, original_error: Optional[Exception] = None):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} already confirmed", original_error)


class TripRepository(ABC):
    """
    Abstract trip repository.

    Remote operations (fetch, create, update, confirm) are implemented by
    subclasses; the joined-trip bookkeeping is delegated to a JoinedTripStore.
    """

    name: str = "base"

    def __init__(self, store: JoinedTripStore):
        self.store = store

    @abstractmethod
    async def fetch_trip(self, trip_id: str) -> TripDetails:
        """
        Fetch a trip by id.

        Raises:
            TripNotFoundError: If the id is unknown
            NetworkError: On any other failure
        """
        pass

    @abstractmethod
    async def create_trip(self, payload: TripCreate) -> str:
        """
        Create a trip and return its id.

        Raises:
            TripValidationError: If the payload is rejected
            NetworkError: On any other failure
        """
        pass

    @abstractmethod
    async def update_trip(
        self,
        trip_id: str,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> None:
        """
        Replace a trip's destination and dates.

        Raises:
            TripValidationError: If the payload is rejected
            NetworkError: On any other failure
        """
        pass

    @abstractmethod
    async def confirm_participant(
        self,
        participant_id: str,
        name: str,
        email: str,
    ) -> None:
        """
        Confirm a guest's attendance.

        Raises:
            AlreadyConfirmedError: If the participant already confirmed
            NetworkError: On any other failure
        """
        pass

    async def mark_trip_joined(self, trip_id: str) -> None:
        """Record locally that this device joined the trip (idempotent)"""
        self.store.mark_joined(trip_id)

    async def forget_trip(self, trip_id: str) -> None:
        """Drop the local joined record of a trip"""
        self.store.forget(trip_id)

    async def is_trip_joined(self, trip_id: str) -> bool:
        """Check the local joined record of a trip"""
        return self.store.is_joined(trip_id)
