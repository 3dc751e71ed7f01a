"""Trip contracts shared by the repository and the session controller."""

from trip_client.shared.contracts.trip import (
    TripDetails,
    TripUpdate,
    TripCreate,
    TripView,
    truncate_destination,
)

__all__ = ["TripDetails", "TripUpdate", "TripCreate", "TripView", "truncate_destination"]
