"""
HTTP Trip Repository - talks to the trips REST API with httpx
"""
from typing import Any, Dict, Optional
from datetime import datetime
import httpx
import logging

from pydantic import ValidationError

from trip_client.shared.config import ClientConfig, DEFAULT_CONFIG
from trip_client.shared.contracts import TripCreate, TripDetails, TripUpdate
from .base import (
    AlreadyConfirmedError,
    NetworkError,
    TripNotFoundError,
    TripRepository,
    TripValidationError,
)
from .joined_store import JoinedTripStore

logger = logging.getLogger(__name__)


class HttpTripRepository(TripRepository):
    """
    Trip repository backed by the trips API.

    Endpoints:
    - GET   /trips/{id}                    -> {"trip": {...}}
    - POST  /trips                         -> {"tripId": "..."}
    - PUT   /trips/{id}
    - PATCH /participants/{id}/confirm
    """

    name = "http"

    def __init__(
        self,
        store: JoinedTripStore,
        config: ClientConfig = DEFAULT_CONFIG,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(store)
        self._base_url = config.api_base_url.rstrip("/")
        self._timeout = config.api_timeout
        self._client = client

    async def _send(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a request, raising HTTPStatusError on non-2xx and transport errors as-is"""
        url = f"{self._base_url}{path}"
        if self._client is not None:
            response = await self._client.request(method, url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            return response

        async with httpx.AsyncClient() as client:
            response = await client.request(method, url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            return response

    async def fetch_trip(self, trip_id: str) -> TripDetails:
        """Fetch a trip from GET /trips/{id}"""
        try:
            response = await self._send("GET", f"/trips/{trip_id}")
            trip = TripDetails.model_validate(response.json()["trip"])
            logger.info(f"[repo=http] Fetched trip {trip_id}")
            return trip

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise TripNotFoundError(trip_id, e)
            raise NetworkError(f"HTTP {e.response.status_code} fetching trip {trip_id}", e)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise NetworkError(f"Malformed trip payload for {trip_id}: {e}", e)
        except httpx.HTTPError as e:
            raise NetworkError(f"Transport error fetching trip {trip_id}: {e}", e)

    async def create_trip(self, payload: TripCreate) -> str:
        """Create a trip with POST /trips"""
        try:
            response = await self._send("POST", "/trips", payload.model_dump(mode="json"))
            trip_id = str(response.json()["tripId"])
            logger.info(f"[repo=http] Created trip {trip_id} for {payload.destination}")
            return trip_id

        except httpx.HTTPStatusError as e:
            if e.response.status_code in (400, 422):
                raise TripValidationError(f"Trip rejected: HTTP {e.response.status_code}", e)
            raise NetworkError(f"HTTP {e.response.status_code} creating trip", e)
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkError(f"Malformed create response: {e}", e)
        except httpx.HTTPError as e:
            raise NetworkError(f"Transport error creating trip: {e}", e)

    async def update_trip(
        self,
        trip_id: str,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
    ) -> None:
        """Replace destination and dates with PUT /trips/{id}"""
        try:
            payload = TripUpdate(destination=destination, starts_at=starts_at, ends_at=ends_at)
        except ValidationError as e:
            raise TripValidationError(f"Invalid update for trip {trip_id}: {e}", e)

        try:
            await self._send("PUT", f"/trips/{trip_id}", payload.model_dump(mode="json"))
            logger.info(f"[repo=http] Updated trip {trip_id}")

        except httpx.HTTPStatusError as e:
            if e.response.status_code in (400, 422):
                raise TripValidationError(f"Update rejected: HTTP {e.response.status_code}", e)
            if e.response.status_code == 404:
                raise TripNotFoundError(trip_id, e)
            raise NetworkError(f"HTTP {e.response.status_code} updating trip {trip_id}", e)
        except httpx.HTTPError as e:
            raise NetworkError(f"Transport error updating trip {trip_id}: {e}", e)

    async def confirm_participant(
        self,
        participant_id: str,
        name: str,
        email: str,
    ) -> None:
        """Confirm attendance with PATCH /participants/{id}/confirm"""
        try:
            await self._send(
                "PATCH",
                f"/participants/{participant_id}/confirm",
                {"name": name, "email": email},
            )
            logger.info(f"[repo=http] Confirmed participant {participant_id}")

        except httpx.HTTPStatusError as e:
            if e.response.status_code == 409:
                raise AlreadyConfirmedError(participant_id, e)
            raise NetworkError(
                f"HTTP {e.response.status_code} confirming participant {participant_id}", e
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Transport error confirming participant {participant_id}: {e}", e)
