"""Attendance confirmation input validation."""

from trip_client.attendance.guard import is_valid_email, validate_guest

__all__ = ["is_valid_email", "validate_guest"]
