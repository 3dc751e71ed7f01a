"""
FastAPI endpoints for trip sessions.

Hosts one TripSessionController per session id and exposes the screen's
user intents (open/close modals, calendar taps, form submissions) as REST
calls. Every response carries the operation result and the session state
for the presentation layer to render.
"""

import inspect
import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from trip_client.repository import (
    HttpTripRepository,
    InMemoryTripRepository,
    JoinedTripStore,
    TripRepository,
)
from trip_client.session.controller import TripSessionController
from trip_client.session.state import EntryContext, Navigation, OperationResult
from trip_client.shared.config import DEFAULT_CONFIG


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trip-sessions", tags=["trip-sessions"])

# In-memory session storage, one controller per open trip screen
_sessions: Dict[str, TripSessionController] = {}

# Repository instance (shared across sessions)
_repository: Optional[TripRepository] = None


def get_repository() -> TripRepository:
    """Get or create the shared repository from the client configuration."""
    global _repository
    if _repository is None:
        if DEFAULT_CONFIG.api_base_url:
            store = JoinedTripStore(DEFAULT_CONFIG.joined_store_path)
            _repository = HttpTripRepository(store, DEFAULT_CONFIG)
        else:
            logger.warning("TRIP_API_BASE_URL not set, using in-memory trip repository")
            _repository = InMemoryTripRepository()
    return _repository


def set_repository(repository: Optional[TripRepository]) -> None:
    """Replace the shared repository and drop all open sessions."""
    global _repository
    _repository = repository
    _sessions.clear()


# ============================================================================
# Request/Response Models
# ============================================================================


class StartSessionRequest(BaseModel):
    """Entry context of the trip screen."""

    trip_id: Optional[str] = Field(default=None, description="Trip to open")
    participant_id: Optional[str] = Field(
        default=None, description="Participant id from an invitation link"
    )


class DayTapRequest(BaseModel):
    """A tap on a calendar day."""

    day: date = Field(description="Tapped day (YYYY-MM-DD)")


class DestinationRequest(BaseModel):
    """New value of the destination field."""

    destination: str = Field(description="Destination as typed")


class AttendanceRequest(BaseModel):
    """Guest confirmation form."""

    name: str = Field(default="", description="Guest full name")
    email: str = Field(default="", description="Guest email")


class ResultModel(BaseModel):
    """Outcome of the operation triggered by the request."""

    outcome: str
    title: str = ""
    message: str = ""
    navigation: str = "none"


class SessionResponse(BaseModel):
    """Session state after handling a request."""

    session_id: str = Field(description="Session identifier")
    result: Optional[ResultModel] = Field(
        default=None, description="Result of the triggered operation"
    )
    state: Dict[str, Any] = Field(description="Session snapshot")


# ============================================================================
# Helpers
# ============================================================================


def _get_session(session_id: str) -> TripSessionController:
    if session_id not in _sessions:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return _sessions[session_id]


async def _dispatch(
    session_id: str,
    op: str,
    action: Callable[[TripSessionController], Any],
) -> SessionResponse:
    """Run a controller operation for a session, mapping unexpected errors to 500."""
    controller = _get_session(session_id)
    try:
        result = action(controller)
        if inspect.isawaitable(result):
            result = await result
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"[session={session_id}] [api={op}] Request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to handle {op}: {str(e)}",
        )
    return _respond(controller, result)


def _respond(controller: TripSessionController, result: Optional[OperationResult] = None) -> SessionResponse:
    # Navigating away ends the screen
    if result is not None and result.navigation != Navigation.NONE:
        controller.teardown()
        _sessions.pop(controller.session_id, None)
        logger.info(
            f"[session={controller.session_id}] [api=respond] "
            f"Session ended | navigation={result.navigation.value}"
        )

    return SessionResponse(
        session_id=controller.session_id,
        result=ResultModel(**result.as_dict()) if result is not None else None,
        state=controller.snapshot(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post("", response_model=SessionResponse)
async def start_session(request: StartSessionRequest) -> SessionResponse:
    """
    Open a trip screen.

    Creates a controller for the entry context and runs the initial load.
    """
    controller = TripSessionController(
        get_repository(),
        EntryContext(trip_id=request.trip_id, participant_id=request.participant_id),
    )
    _sessions[controller.session_id] = controller

    logger.info(
        f"[session={controller.session_id}] [api=start] Starting session | "
        f"trip={request.trip_id}, invited={request.participant_id is not None}"
    )

    try:
        result = await controller.start()
    except Exception as e:
        logger.exception(f"[session={controller.session_id}] [api=start] Start failed: {e}")
        _sessions.pop(controller.session_id, None)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to start session: {str(e)}",
        )

    return _respond(controller, result)


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "trip-sessions",
    }


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    """Current state of a session."""
    return _respond(_get_session(session_id))


@router.delete("/{session_id}")
async def delete_session(session_id: str) -> Dict[str, str]:
    """Close a session; in-flight responses are discarded."""
    controller = _get_session(session_id)
    controller.teardown()
    del _sessions[session_id]
    return {"message": f"Session {session_id} deleted"}


@router.post("/{session_id}/reload", response_model=SessionResponse)
async def reload_trip(session_id: str) -> SessionResponse:
    """Fetch the trip again after a failed load."""
    return await _dispatch(session_id, "reload", lambda c: c.load_trip())


@router.post("/{session_id}/edit", response_model=SessionResponse)
async def open_edit(session_id: str) -> SessionResponse:
    return await _dispatch(session_id, "edit", lambda c: c.open_edit())


@router.post("/{session_id}/date-picker", response_model=SessionResponse)
async def open_date_picker(session_id: str) -> SessionResponse:
    return await _dispatch(session_id, "date_picker", lambda c: c.open_date_picker())


@router.post("/{session_id}/close", response_model=SessionResponse)
async def close_modal(session_id: str) -> SessionResponse:
    return await _dispatch(session_id, "close", lambda c: c.close_modal())


@router.post("/{session_id}/days", response_model=SessionResponse)
async def tap_day(session_id: str, request: DayTapRequest) -> SessionResponse:
    return await _dispatch(session_id, "days", lambda c: c.tap_day(request.day))


@router.put("/{session_id}/destination", response_model=SessionResponse)
async def set_destination(session_id: str, request: DestinationRequest) -> SessionResponse:
    return await _dispatch(
        session_id, "destination", lambda c: c.set_destination(request.destination)
    )


@router.post("/{session_id}/update", response_model=SessionResponse)
async def update_trip(session_id: str) -> SessionResponse:
    """Submit the edit form."""
    return await _dispatch(session_id, "update", lambda c: c.update_trip())


@router.post("/{session_id}/remove", response_model=SessionResponse)
async def request_remove(session_id: str) -> SessionResponse:
    """Ask for removal; the result carries the confirmation prompt."""
    return await _dispatch(session_id, "remove", lambda c: c.request_remove())


@router.post("/{session_id}/remove/confirm", response_model=SessionResponse)
async def confirm_remove(session_id: str) -> SessionResponse:
    return await _dispatch(session_id, "remove_confirm", lambda c: c.confirm_remove())


@router.post("/{session_id}/remove/cancel", response_model=SessionResponse)
async def cancel_remove(session_id: str) -> SessionResponse:
    return await _dispatch(session_id, "remove_cancel", lambda c: c.cancel_remove())


@router.post("/{session_id}/attendance", response_model=SessionResponse)
async def confirm_attendance(session_id: str, request: AttendanceRequest) -> SessionResponse:
    """Submit the guest confirmation form."""
    return await _dispatch(
        session_id, "attendance", lambda c: c.confirm_attendance(request.name, request.email)
    )
