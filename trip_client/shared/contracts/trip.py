"""
Trip contracts.

Defines the trip record exchanged with the trips API, the payloads sent to
create or update a trip, and the derived view rendered by the trip screen.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, model_validator

from trip_client.dates.formatting import month_abbreviation, month_name
from trip_client.shared import messages


DESTINATION_MAX_LENGTH = 14


class TripDetails(BaseModel):
    """A persisted trip as returned by the trips API."""

    id: str = Field(description="Opaque trip identifier")
    destination: str = Field(description="Trip destination")
    starts_at: datetime = Field(description="Trip start timestamp")
    ends_at: datetime = Field(description="Trip end timestamp")
    is_confirmed: bool = Field(
        default=False, description="Trip-level confirmation flag"
    )

    @model_validator(mode="after")
    def check_range(self) -> "TripDetails":
        if self.starts_at > self.ends_at:
            raise ValueError("starts_at must not be after ends_at")
        return self


class TripUpdate(BaseModel):
    """Payload for PUT /trips/{id}."""

    destination: str = Field(min_length=1, description="New destination")
    starts_at: datetime = Field(description="New start timestamp")
    ends_at: datetime = Field(description="New end timestamp")

    @model_validator(mode="after")
    def check_range(self) -> "TripUpdate":
        if self.starts_at > self.ends_at:
            raise ValueError("starts_at must not be after ends_at")
        return self


class TripCreate(BaseModel):
    """Payload for POST /trips."""

    destination: str = Field(min_length=1, description="Trip destination")
    starts_at: datetime = Field(description="Trip start timestamp")
    ends_at: datetime = Field(description="Trip end timestamp")
    emails_to_invite: List[str] = Field(
        default_factory=list, description="Guests to invite by email"
    )
    owner_name: str = Field(description="Name of the trip owner")
    owner_email: str = Field(description="Email of the trip owner")

    @model_validator(mode="after")
    def check_range(self) -> "TripCreate":
        if self.starts_at > self.ends_at:
            raise ValueError("starts_at must not be after ends_at")
        return self


def truncate_destination(
    destination: str,
    max_length: int = DESTINATION_MAX_LENGTH,
) -> str:
    """Cut a destination to max_length characters plus "..." when longer."""
    if len(destination) > max_length:
        return destination[:max_length] + "..."
    return destination


class TripView(TripDetails):
    """
    Trip plus the texts the trip screen renders.

    Recomputed from a TripDetails every time the trip is fetched.
    """

    when: str = Field(description="Summary bar range text")
    invitation: str = Field(description="Confirm-attendance modal text")

    @classmethod
    def from_trip(
        cls,
        trip: TripDetails,
        locale: str = "en",
        max_length: int = DESTINATION_MAX_LENGTH,
    ) -> "TripView":
        """
        Derive the view of a trip.

        Args:
            trip: Trip as fetched from the API
            locale: Locale for month names
            max_length: Destination length before truncation

        Returns:
            TripView instance
        """
        destination = truncate_destination(trip.destination, max_length)
        start = trip.starts_at.date()
        end = trip.ends_at.date()

        when = (
            f"{destination} de {start.strftime('%d')} a {end.strftime('%d')} "
            f"de {month_abbreviation(start, locale)}."
        )
        invitation = messages.INVITATION_TEMPLATE.format(
            destination=trip.destination,
            start_day=start.day,
            end_day=end.day,
            month=month_name(end, locale),
        )

        return cls(**trip.model_dump(), when=when, invitation=invitation)
