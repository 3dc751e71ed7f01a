"""
Tests for the trip repository implementations.

Tests the file-backed joined store, the httpx repository against a mock
transport (wire format and status mapping), and the in-memory repository.
"""

import asyncio
import json
from datetime import datetime

import httpx
import pytest

from trip_client.repository import (
    AlreadyConfirmedError,
    HttpTripRepository,
    InMemoryTripRepository,
    JoinedTripStore,
    NetworkError,
    TripNotFoundError,
    TripValidationError,
)
from trip_client.session import EntryContext, LoadStatus, Outcome, TripSessionController
from trip_client.shared.config import get_config
from trip_client.shared.contracts import TripCreate, TripDetails


BASE_URL = "https://api.trips.test"

TRIP_JSON = {
    "id": "T1",
    "destination": "Lisboa",
    "starts_at": "2024-07-10T00:00:00.000Z",
    "ends_at": "2024-07-14T00:00:00.000Z",
    "is_confirmed": True,
}


def _make_repository(handler, store=None):
    """Create an HttpTripRepository whose requests go to `handler`."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTripRepository(
        store or JoinedTripStore(),
        get_config(api_base_url=BASE_URL),
        client=client,
    )


# ============================================================================
# JoinedTripStore
# ============================================================================


class TestJoinedTripStore:
    """Tests for the on-device joined store."""

    def test_mark_is_idempotent(self, tmp_path):
        store = JoinedTripStore(tmp_path / "joined.json")

        store.mark_joined("T1")
        store.mark_joined("T1")

        assert store.list() == ["T1"]

    def test_survives_restart(self, tmp_path):
        """A new store on the same file sees earlier records."""
        path = tmp_path / "nested" / "joined.json"
        JoinedTripStore(path).mark_joined("T2")
        JoinedTripStore(path).mark_joined("T1")

        reopened = JoinedTripStore(path)

        assert reopened.list() == ["T1", "T2"]
        assert json.loads(path.read_text()) == ["T1", "T2"]

    def test_forget(self, tmp_path):
        path = tmp_path / "joined.json"
        store = JoinedTripStore(path)
        store.mark_joined("T1")
        store.mark_joined("T2")

        store.forget("T1")

        assert store.is_joined("T1") is False
        assert JoinedTripStore(path).list() == ["T2"]

    def test_forget_unknown_is_noop(self, tmp_path):
        path = tmp_path / "joined.json"
        store = JoinedTripStore(path)

        store.forget("T9")

        assert store.list() == []
        assert not path.exists()

    def test_memory_only_store(self):
        store = JoinedTripStore()
        store.mark_joined("T1")

        assert store.is_joined("T1") is True
        assert JoinedTripStore().is_joined("T1") is False

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "joined.json"
        path.write_text('{"T1": true}')

        with pytest.raises(ValueError):
            JoinedTripStore(path)


# ============================================================================
# HttpTripRepository
# ============================================================================


class TestHttpFetchTrip:
    """Tests for GET /trips/{id}."""

    def test_fetch_parses_trip(self):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, json={"trip": TRIP_JSON})

        trip = asyncio.run(_make_repository(handler).fetch_trip("T1"))

        assert seen == [("GET", f"{BASE_URL}/trips/T1")]
        assert isinstance(trip, TripDetails)
        assert trip.destination == "Lisboa"
        assert trip.is_confirmed is True

    def test_404_is_not_found(self):
        repo = _make_repository(lambda request: httpx.Response(404, json={"message": "nope"}))

        with pytest.raises(TripNotFoundError) as exc_info:
            asyncio.run(repo.fetch_trip("T404"))

        assert exc_info.value.trip_id == "T404"

    def test_500_is_network_error(self):
        repo = _make_repository(lambda request: httpx.Response(500))

        with pytest.raises(NetworkError):
            asyncio.run(repo.fetch_trip("T1"))

    def test_transport_error_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(_make_repository(handler).fetch_trip("T1"))

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    def test_malformed_payload_is_network_error(self):
        repo = _make_repository(lambda request: httpx.Response(200, json={"unexpected": {}}))

        with pytest.raises(NetworkError):
            asyncio.run(repo.fetch_trip("T1"))

    @pytest.mark.parametrize("body", [[], "trip", 7])
    def test_non_object_body_is_network_error(self, body):
        repo = _make_repository(lambda request: httpx.Response(200, json=body))

        with pytest.raises(NetworkError):
            asyncio.run(repo.fetch_trip("T1"))

    def test_non_object_body_fails_the_screen_load(self):
        """A list body ends the load as FAILED instead of leaving it LOADING."""
        repo = _make_repository(lambda request: httpx.Response(200, json=[]))
        controller = TripSessionController(repo, EntryContext(trip_id="T1"))

        result = asyncio.run(controller.start())

        assert result.outcome == Outcome.FAILED
        assert controller.load_status == LoadStatus.FAILED
        assert controller.loading.fetching_trip is False

    def test_inverted_dates_are_network_error(self):
        bad = dict(TRIP_JSON, starts_at="2024-07-20T00:00:00Z")
        repo = _make_repository(lambda request: httpx.Response(200, json={"trip": bad}))

        with pytest.raises(NetworkError):
            asyncio.run(repo.fetch_trip("T1"))


class TestHttpUpdateTrip:
    """Tests for PUT /trips/{id}."""

    def test_update_sends_payload(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(204)

        asyncio.run(
            _make_repository(handler).update_trip(
                "T1", "Porto", datetime(2024, 8, 1), datetime(2024, 8, 3)
            )
        )

        assert seen == [
            (
                "PUT",
                "/trips/T1",
                {
                    "destination": "Porto",
                    "starts_at": "2024-08-01T00:00:00",
                    "ends_at": "2024-08-03T00:00:00",
                },
            )
        ]

    def test_400_is_validation_error(self):
        repo = _make_repository(lambda request: httpx.Response(400))

        with pytest.raises(TripValidationError):
            asyncio.run(repo.update_trip("T1", "Porto", datetime(2024, 8, 1), datetime(2024, 8, 3)))

    def test_inverted_range_rejected_before_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(204)

        repo = _make_repository(handler)

        with pytest.raises(TripValidationError):
            asyncio.run(repo.update_trip("T1", "Porto", datetime(2024, 8, 3), datetime(2024, 8, 1)))
        assert calls == []

    def test_503_is_network_error(self):
        repo = _make_repository(lambda request: httpx.Response(503))

        with pytest.raises(NetworkError):
            asyncio.run(repo.update_trip("T1", "Porto", datetime(2024, 8, 1), datetime(2024, 8, 3)))


class TestHttpCreateTrip:
    """Tests for POST /trips."""

    def test_create_returns_trip_id(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(201, json={"tripId": "T77"})

        payload = TripCreate(
            destination="Lima",
            starts_at=datetime(2024, 9, 1),
            ends_at=datetime(2024, 9, 5),
            emails_to_invite=["guest@example.com"],
            owner_name="Owner",
            owner_email="owner@example.com",
        )

        trip_id = asyncio.run(_make_repository(handler).create_trip(payload))

        assert trip_id == "T77"
        assert seen[0]["emails_to_invite"] == ["guest@example.com"]
        assert seen[0]["owner_email"] == "owner@example.com"

    def test_list_body_is_network_error(self):
        repo = _make_repository(lambda request: httpx.Response(201, json=["T77"]))
        payload = TripCreate(
            destination="Lima",
            starts_at=datetime(2024, 9, 1),
            ends_at=datetime(2024, 9, 5),
            owner_name="Owner",
            owner_email="owner@example.com",
        )

        with pytest.raises(NetworkError):
            asyncio.run(repo.create_trip(payload))


class TestHttpConfirmParticipant:
    """Tests for PATCH /participants/{id}/confirm."""

    def test_confirm_sends_name_and_email(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content)))
            return httpx.Response(204)

        asyncio.run(
            _make_repository(handler).confirm_participant("P9", "Ana", "ana@example.com")
        )

        assert seen == [
            ("PATCH", "/participants/P9/confirm", {"name": "Ana", "email": "ana@example.com"})
        ]

    def test_409_is_already_confirmed(self):
        repo = _make_repository(lambda request: httpx.Response(409))

        with pytest.raises(AlreadyConfirmedError):
            asyncio.run(repo.confirm_participant("P9", "Ana", "ana@example.com"))

    def test_500_is_network_error(self):
        repo = _make_repository(lambda request: httpx.Response(500))

        with pytest.raises(NetworkError):
            asyncio.run(repo.confirm_participant("P9", "Ana", "ana@example.com"))


class TestHttpJoinedStore:
    """The HTTP repository delegates joined bookkeeping to its store."""

    def test_mark_and_forget_use_store(self, tmp_path):
        store = JoinedTripStore(tmp_path / "joined.json")
        repo = _make_repository(lambda request: httpx.Response(500), store=store)

        asyncio.run(repo.mark_trip_joined("T1"))
        assert asyncio.run(repo.is_trip_joined("T1")) is True

        asyncio.run(repo.forget_trip("T1"))
        assert asyncio.run(repo.is_trip_joined("T1")) is False


# ============================================================================
# InMemoryTripRepository
# ============================================================================


class TestInMemoryTripRepository:
    """Tests for the in-memory repository."""

    def test_create_then_fetch(self):
        repo = InMemoryTripRepository()
        payload = TripCreate(
            destination="Lima",
            starts_at=datetime(2024, 9, 1),
            ends_at=datetime(2024, 9, 5),
            owner_name="Owner",
            owner_email="owner@example.com",
        )

        trip_id = asyncio.run(repo.create_trip(payload))
        trip = asyncio.run(repo.fetch_trip(trip_id))

        assert trip.destination == "Lima"
        assert repo.count("create_trip") == 1
        assert repo.count("fetch_trip") == 1

    def test_second_confirmation_rejected(self):
        repo = InMemoryTripRepository(participants=["P9"])
        asyncio.run(repo.confirm_participant("P9", "Ana", "ana@example.com"))

        with pytest.raises(AlreadyConfirmedError):
            asyncio.run(repo.confirm_participant("P9", "Ana", "ana@example.com"))

    def test_injected_failure_fires_once(self):
        repo = InMemoryTripRepository(
            trips=[TripDetails.model_validate(TRIP_JSON)],
        )
        repo.fail_next("fetch_trip", NetworkError("offline"))

        with pytest.raises(NetworkError):
            asyncio.run(repo.fetch_trip("T1"))
        assert asyncio.run(repo.fetch_trip("T1")).id == "T1"
