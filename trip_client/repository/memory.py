"""
In-memory trip repository.

Used when no trips API is configured, and by the tests as a recording
collaborator: every remote call is appended to `calls`, and a failure can
be queued per operation with `fail_next`.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from trip_client.shared.contracts import TripCreate, TripDetails, TripUpdate
from trip_client.repository.base import (
    AlreadyConfirmedError,
    RepositoryError,
    TripNotFoundError,
    TripRepository,
)
from trip_client.repository.joined_store import JoinedTripStore


logger = logging.getLogger(__name__)


class InMemoryTripRepository(TripRepository):
    """Trip repository holding trips and participants in dictionaries."""

    name = "memory"

    def __init__(
        self,
        trips: Optional[List[TripDetails]] = None,
        participants: Optional[List[str]] = None,
        store: Optional[JoinedTripStore] = None,
    ):
        super().__init__(store or JoinedTripStore())
        self.trips: Dict[str, TripDetails] = {t.id: t for t in (trips or [])}
        self.pending_participants: Set[str] = set(participants or [])
        self.confirmed_participants: Dict[str, Tuple[str, str]] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self._failures: Dict[str, RepositoryError] = {}

    def fail_next(self, operation: str, error: RepositoryError) -> None:
        """Make the next call of `operation` raise `error`."""
        self._failures[operation] = error

    def count(self, operation: str) -> int:
        """Number of recorded calls of an operation."""
        return sum(1 for name, _ in self.calls if name == operation)

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, args))
        error = self._failures.pop(operation, None)
        if error is not None:
            logger.debug(f"[repo=memory] Injected failure for {operation}: {error}")
            raise error

    async def fetch_trip(self, trip_id: str) -> TripDetails:
        self._record("fetch_trip", trip_id)
        if trip_id not in self.trips:
            raise TripNotFoundError(trip_id)
        return self.trips[trip_id].model_copy()

    async def create_trip(self, payload: TripCreate) -> str:
        self._record("create_trip", payload)
        trip_id = str(uuid.uuid4())
        self.trips[trip_id] = TripDetails(
            id=trip_id,
            destination=payload.destination,
            starts_at=payload.starts_at,
            ends_at=payload.ends_at,
        )
        self.pending_participants.update(
            f"{trip_id}:{email}" for email in payload.emails_to_invite
        )
        return trip_id

    async def update_trip(
        self,
        trip_id: str,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> None:
        self._record("update_trip", trip_id, destination, starts_at, ends_at)
        if trip_id not in self.trips:
            raise TripNotFoundError(trip_id)
        update = TripUpdate(destination=destination, starts_at=starts_at, ends_at=ends_at)
        self.trips[trip_id] = self.trips[trip_id].model_copy(update=update.model_dump())

    async def confirm_participant(
        self,
        participant_id: str,
        name: str,
        email: str,
    ) -> None:
        self._record("confirm_participant", participant_id, name, email)
        if participant_id in self.confirmed_participants:
            raise AlreadyConfirmedError(participant_id)
        self.pending_participants.discard(participant_id)
        self.confirmed_participants[participant_id] = (name, email)

    async def mark_trip_joined(self, trip_id: str) -> None:
        self._record("mark_trip_joined", trip_id)
        await super().mark_trip_joined(trip_id)

    async def forget_trip(self, trip_id: str) -> None:
        self._record("forget_trip", trip_id)
        await super().forget_trip(trip_id)
