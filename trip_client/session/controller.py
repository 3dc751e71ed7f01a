"""
Trip session controller.

Owns the state of one trip screen (trip data, active modal, loading flags,
edit form inputs) and runs its workflows: loading the trip, editing
destination and dates, confirming a guest's attendance, and removing the
trip. Every operation returns an OperationResult instead of driving dialogs
itself.

Modal transitions:
    NONE -> CONFIRM_ATTENDANCE   automatic at start when opened from an invitation
    NONE -> EDIT_TRIP            open_edit()
    EDIT_TRIP -> PICK_DATES      open_date_picker()
    PICK_DATES -> EDIT_TRIP      close_modal()
    EDIT_TRIP -> NONE            close_modal(), or a successful update
    CONFIRM_ATTENDANCE -> NONE   a successful confirmation only
"""

import logging
import uuid
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional

from trip_client.attendance.guard import validate_guest
from trip_client.dates.selection import (
    DateSelection,
    EMPTY_SELECTION,
    is_selectable,
    select_day,
)
from trip_client.repository.base import RepositoryError, TripNotFoundError, TripRepository
from trip_client.session.state import (
    IGNORED,
    EntryContext,
    LoadingFlags,
    LoadStatus,
    ModalState,
    Navigation,
    OperationResult,
    Outcome,
)
from trip_client.shared import messages
from trip_client.shared.config import ClientConfig, DEFAULT_CONFIG
from trip_client.shared.contracts import TripView
from trip_client.shared.logging.config import log_state_transition


logger = logging.getLogger(__name__)

BUSY = OperationResult(outcome=Outcome.BUSY, message=messages.BUSY)
DISCARDED = OperationResult(outcome=Outcome.DISCARDED)


class TripSessionController:
    """
    State owner and workflow coordinator for a single trip screen.

    The presentation layer reads the public properties (or snapshot()) and
    calls the operation methods in response to user intents. Nothing else
    mutates the session state.
    """

    def __init__(
        self,
        repository: TripRepository,
        context: EntryContext,
        config: ClientConfig = DEFAULT_CONFIG,
        today: Optional[Callable[[], date]] = None,
        session_id: Optional[str] = None,
    ):
        self.repository = repository
        self.context = context
        self.config = config
        self.session_id = session_id or str(uuid.uuid4())
        self._today = today or date.today

        self._modal = ModalState.NONE
        self._load_status = LoadStatus.IDLE
        self._loading = LoadingFlags()
        self._trip: Optional[TripView] = None
        self._dates: DateSelection = EMPTY_SELECTION
        self._destination_input = ""
        self._remove_requested = False

        # Bumped on teardown; responses started under an older epoch are dropped
        self._epoch = 0
        # Numbers each fetch; only the most recently started one may apply its result
        self._fetch_seq = 0
        self._started = False
        self._closed = False

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def modal(self) -> ModalState:
        return self._modal

    @property
    def load_status(self) -> LoadStatus:
        return self._load_status

    @property
    def loading(self) -> LoadingFlags:
        return LoadingFlags(**self._loading.as_dict())

    @property
    def trip(self) -> Optional[TripView]:
        return self._trip

    @property
    def dates(self) -> DateSelection:
        return self._dates

    @property
    def destination_input(self) -> str:
        return self._destination_input

    @property
    def remove_requested(self) -> bool:
        return self._remove_requested

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict rendering of the session for presentation and logging."""
        return {
            "session_id": self.session_id,
            "trip_id": self.context.trip_id,
            "participant_id": self.context.participant_id,
            "modal": self._modal.value,
            "load_status": self._load_status.value,
            "loading": self._loading.as_dict(),
            "trip": self._trip.model_dump(mode="json") if self._trip else None,
            "destination_input": self._destination_input,
            "dates": {
                "start": self._dates.start.isoformat() if self._dates.start else None,
                "end": self._dates.end.isoformat() if self._dates.end else None,
                "display": self._dates.display,
                "marked": self._dates.marked_dates(),
            },
            "remove_requested": self._remove_requested,
            "closed": self._closed,
        }

    # =========================================================================
    # Internals
    # =========================================================================

    def _log(self, op: str) -> str:
        return f"[session={self.session_id}] [trip={self.context.trip_id}] [op={op}] "

    def _set_modal(self, modal: ModalState, event: str) -> None:
        previous = self._modal
        self._modal = modal
        if modal != ModalState.EDIT_TRIP and modal != ModalState.PICK_DATES:
            self._remove_requested = False
        log_state_transition(
            event,
            self.snapshot(),
            extra={"from": previous.value, "to": modal.value},
            logger=logger,
        )

    def _is_stale(self, epoch: int, op: str) -> bool:
        if epoch != self._epoch:
            logger.warning(f"{self._log(op)}Discarding response for a torn-down session")
            return True
        return False

    # =========================================================================
    # Load
    # =========================================================================

    async def start(self) -> OperationResult:
        """
        Start the session from its entry context.

        Without a trip id the screen cannot be shown and the result asks the
        presentation layer to navigate back. With a participant id the
        confirm-attendance modal opens before the trip is fetched.

        Returns:
            Result of the initial trip load
        """
        _log = self._log("start")
        if self._started or self._closed:
            logger.debug(f"{_log}Session already started")
            return IGNORED
        self._started = True

        if not self.context.trip_id:
            logger.error(f"{_log}Entry context has no trip id, navigating back")
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.LOAD_TITLE,
                message=messages.LOAD_MISSING_TRIP,
                navigation=Navigation.BACK,
            )

        if self.context.participant_id:
            logger.info(
                f"{_log}Invitation detected | participant={self.context.participant_id}"
            )
            self._set_modal(ModalState.CONFIRM_ATTENDANCE, "invitation_detected")

        return await self.load_trip()

    async def load_trip(self) -> OperationResult:
        """
        Fetch the trip and derive its view.

        A failed fetch leaves the screen in the FAILED load status with no
        trip shown. An unknown trip additionally navigates back.
        """
        _log = self._log("load_trip")
        trip_id = self.context.trip_id
        if self._closed or not trip_id:
            return IGNORED
        if self._loading.fetching_trip:
            logger.debug(f"{_log}Fetch already in progress")
            return BUSY
        return await self._fetch("load_trip")

    def _is_superseded(self, seq: int, op: str) -> bool:
        if seq != self._fetch_seq:
            logger.info(f"{self._log(op)}Dropping fetch #{seq}, fetch #{self._fetch_seq} is newer")
            return True
        return False

    async def _fetch(self, op: str) -> OperationResult:
        _log = self._log(op)
        trip_id = self.context.trip_id
        epoch = self._epoch
        self._fetch_seq += 1
        seq = self._fetch_seq
        self._loading.fetching_trip = True
        self._load_status = LoadStatus.LOADING
        logger.info(f"{_log}Fetching trip (#{seq})")

        try:
            trip = await self.repository.fetch_trip(trip_id)
        except TripNotFoundError as e:
            if self._is_stale(epoch, op) or self._is_superseded(seq, op):
                return DISCARDED
            logger.error(f"{_log}Trip not found, navigating back: {e}")
            self._trip = None
            self._load_status = LoadStatus.FAILED
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.LOAD_TITLE,
                message=messages.LOAD_NOT_FOUND,
                navigation=Navigation.BACK,
            )
        except RepositoryError as e:
            if self._is_stale(epoch, op) or self._is_superseded(seq, op):
                return DISCARDED
            logger.error(f"{_log}Trip fetch failed: {e}")
            self._trip = None
            self._load_status = LoadStatus.FAILED
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.LOAD_TITLE,
                message=messages.LOAD_FAILED,
            )
        finally:
            if seq == self._fetch_seq:
                self._loading.fetching_trip = False

        if self._is_stale(epoch, op) or self._is_superseded(seq, op):
            return DISCARDED

        self._trip = TripView.from_trip(
            trip,
            locale=self.config.date_locale,
            max_length=self.config.destination_max_length,
        )
        self._destination_input = trip.destination
        self._load_status = LoadStatus.LOADED
        log_state_transition("trip_loaded", self.snapshot(), logger=logger)
        return OperationResult(outcome=Outcome.SUCCESS)

    # =========================================================================
    # Modal navigation
    # =========================================================================

    def open_edit(self) -> OperationResult:
        """Open the edit form over the trip screen."""
        if self._closed or self._modal != ModalState.NONE:
            return IGNORED
        if self._load_status != LoadStatus.LOADED:
            logger.debug(f"{self._log('open_edit')}Trip not loaded, cannot edit")
            return IGNORED
        self._set_modal(ModalState.EDIT_TRIP, "edit_opened")
        return OperationResult(outcome=Outcome.SUCCESS)

    def open_date_picker(self) -> OperationResult:
        """Open the calendar from inside the edit form."""
        if self._closed or self._modal != ModalState.EDIT_TRIP:
            return IGNORED
        self._set_modal(ModalState.PICK_DATES, "date_picker_opened")
        return OperationResult(outcome=Outcome.SUCCESS)

    def close_modal(self) -> OperationResult:
        """
        Close the active modal.

        The calendar returns to the edit form. The confirm-attendance modal
        has no manual close and stays open until the guest confirms.
        """
        if self._closed:
            return IGNORED
        if self._modal == ModalState.PICK_DATES:
            self._set_modal(ModalState.EDIT_TRIP, "date_picker_closed")
        elif self._modal == ModalState.EDIT_TRIP:
            self._set_modal(ModalState.NONE, "edit_closed")
        else:
            logger.debug(f"{self._log('close_modal')}Nothing to close in {self._modal.value}")
            return IGNORED
        return OperationResult(outcome=Outcome.SUCCESS)

    # =========================================================================
    # Edit form
    # =========================================================================

    def set_destination(self, destination: str) -> OperationResult:
        """Update the destination field of the edit form."""
        if self._closed or self._modal != ModalState.EDIT_TRIP:
            return IGNORED
        self._destination_input = destination
        return OperationResult(outcome=Outcome.SUCCESS)

    def tap_day(self, day: date) -> OperationResult:
        """Apply a calendar tap to the date selection."""
        if self._closed or self._modal != ModalState.PICK_DATES:
            return IGNORED
        if not is_selectable(day, self._today()):
            logger.debug(f"{self._log('tap_day')}Ignoring past day {day.isoformat()}")
            return IGNORED
        self._dates = select_day(self._dates, day, self.config.date_locale)
        return OperationResult(outcome=Outcome.SUCCESS)

    async def update_trip(self) -> OperationResult:
        """
        Submit the edit form.

        Requires a destination and a complete date range; otherwise nothing
        is sent. On success the trip is fetched again and the form closes.
        On failure the form keeps its inputs so the owner can retry.
        """
        _log = self._log("update_trip")
        if self._closed or self._modal != ModalState.EDIT_TRIP:
            return IGNORED
        if self._loading.updating_trip:
            logger.debug(f"{_log}Update already in progress")
            return BUSY

        destination = self._destination_input.strip()
        if not destination or not self._dates.is_complete:
            logger.info(
                f"{_log}Validation failed | destination={bool(destination)}, "
                f"start={self._dates.start}, end={self._dates.end}"
            )
            return OperationResult(
                outcome=Outcome.VALIDATION_ERROR,
                title=messages.UPDATE_TITLE,
                message=messages.UPDATE_INCOMPLETE,
            )

        starts_at = datetime.combine(self._dates.start, time.min)
        ends_at = datetime.combine(self._dates.end, time.min)

        epoch = self._epoch
        self._loading.updating_trip = True
        logger.info(
            f"{_log}Updating trip | destination={destination}, "
            f"starts_at={starts_at.date()}, ends_at={ends_at.date()}"
        )

        try:
            await self.repository.update_trip(
                self.context.trip_id, destination, starts_at, ends_at
            )
        except RepositoryError as e:
            if self._is_stale(epoch, "update_trip"):
                return DISCARDED
            logger.error(f"{_log}Trip update failed: {e}")
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.UPDATE_TITLE,
                message=messages.UPDATE_FAILED,
            )
        finally:
            self._loading.updating_trip = False

        if self._is_stale(epoch, "update_trip"):
            return DISCARDED

        # Trust the server copy, not the values just sent
        # Always fetch, even over an older fetch still in flight; that one is dropped
        reload = await self._fetch("update_trip")
        if self._is_stale(epoch, "update_trip"):
            return DISCARDED
        self._set_modal(ModalState.NONE, "trip_updated")

        return OperationResult(
            outcome=Outcome.SUCCESS,
            title=messages.UPDATE_TITLE,
            message=messages.UPDATE_SUCCESS,
            navigation=reload.navigation,
        )

    # =========================================================================
    # Remove
    # =========================================================================

    def request_remove(self) -> OperationResult:
        """First step of removal: ask the owner to confirm."""
        if self._closed or self._modal != ModalState.EDIT_TRIP:
            return IGNORED
        self._remove_requested = True
        return OperationResult(
            outcome=Outcome.NEEDS_CONFIRMATION,
            title=messages.REMOVE_TITLE,
            message=messages.REMOVE_PROMPT,
        )

    def cancel_remove(self) -> OperationResult:
        """Drop a pending removal request."""
        if not self._remove_requested:
            return IGNORED
        self._remove_requested = False
        return OperationResult(
            outcome=Outcome.CANCELLED,
            title=messages.REMOVE_TITLE,
            message=messages.REMOVE_CANCELLED,
        )

    async def confirm_remove(self) -> OperationResult:
        """
        Second step of removal.

        Forgets the local joined record of the trip and sends the user to
        the trip list. Without a prior request_remove() nothing happens.
        """
        _log = self._log("confirm_remove")
        if self._closed or not self._remove_requested:
            return IGNORED
        self._remove_requested = False

        epoch = self._epoch
        try:
            await self.repository.forget_trip(self.context.trip_id)
        except (RepositoryError, OSError) as e:
            if self._is_stale(epoch, "confirm_remove"):
                return DISCARDED
            logger.error(f"{_log}Trip removal failed: {e}")
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.REMOVE_TITLE,
                message=messages.REMOVE_FAILED,
            )

        if self._is_stale(epoch, "confirm_remove"):
            return DISCARDED

        logger.info(f"{_log}Trip removed, navigating to trip list")
        self._set_modal(ModalState.NONE, "trip_removed")
        return OperationResult(outcome=Outcome.SUCCESS, navigation=Navigation.ROOT)

    # =========================================================================
    # Attendance
    # =========================================================================

    async def confirm_attendance(self, name: str, email: str) -> OperationResult:
        """
        Confirm the invited guest's attendance.

        Args:
            name: Guest name as typed
            email: Guest email as typed

        Returns:
            VALIDATION_ERROR before any request if the form is invalid,
            SUCCESS once confirmed and recorded locally, FAILED otherwise
            (the modal stays open for a retry)
        """
        _log = self._log("confirm_attendance")
        if self._closed:
            return IGNORED
        if self._loading.confirming_attendance:
            logger.debug(f"{_log}Confirmation already in progress")
            return BUSY

        error = validate_guest(self.context.participant_id, name, email)
        if error:
            logger.info(f"{_log}Validation failed: {error}")
            return OperationResult(
                outcome=Outcome.VALIDATION_ERROR,
                title=messages.ATTENDANCE_TITLE,
                message=error,
            )

        if self._modal != ModalState.CONFIRM_ATTENDANCE:
            return IGNORED

        epoch = self._epoch
        self._loading.confirming_attendance = True
        logger.info(f"{_log}Confirming participant {self.context.participant_id}")

        try:
            await self.repository.confirm_participant(
                self.context.participant_id, name.strip(), email.strip()
            )
            await self.repository.mark_trip_joined(self.context.trip_id)
        except (RepositoryError, OSError) as e:
            if self._is_stale(epoch, "confirm_attendance"):
                return DISCARDED
            logger.error(f"{_log}Attendance confirmation failed: {e}")
            return OperationResult(
                outcome=Outcome.FAILED,
                title=messages.ATTENDANCE_TITLE,
                message=messages.ATTENDANCE_FAILED,
            )
        finally:
            self._loading.confirming_attendance = False

        if self._is_stale(epoch, "confirm_attendance"):
            return DISCARDED

        self._set_modal(ModalState.NONE, "attendance_confirmed")
        return OperationResult(
            outcome=Outcome.SUCCESS,
            title=messages.ATTENDANCE_TITLE,
            message=messages.ATTENDANCE_SUCCESS,
        )

    # =========================================================================
    # Teardown
    # =========================================================================

    def teardown(self) -> None:
        """
        Detach the session from the screen.

        Requests still in flight finish, but their responses no longer touch
        the session state.
        """
        self._epoch += 1
        self._closed = True
        logger.info(f"{self._log('teardown')}Session closed at epoch {self._epoch}")
