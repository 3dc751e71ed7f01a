"""
Guest input validation for attendance confirmation.

Checks the invitation form before any confirmation request is sent.
"""

import re
from typing import Optional

from trip_client.shared import messages


# local-part "@" dotted domain; no whitespace, no empty domain labels
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+")


def is_valid_email(text: str) -> bool:
    """
    Syntactic email check.

    Args:
        text: Candidate address

    Returns:
        True if the address has a local part, an "@", and a dotted
        domain, with no whitespace
    """
    if not text:
        return False
    return EMAIL_PATTERN.fullmatch(text) is not None


def validate_guest(
    participant_id: Optional[str],
    name: str,
    email: str,
) -> Optional[str]:
    """
    Validate the attendance form.

    Rules are checked in order and the first failure wins.

    Args:
        participant_id: Participant identifier from the invitation link
        name: Guest name as typed
        email: Guest email as typed

    Returns:
        The user-facing message of the violated rule, or None if valid
    """
    if not participant_id:
        return messages.ATTENDANCE_MISSING_PARTICIPANT

    if not (name or "").strip() or not (email or "").strip():
        return messages.ATTENDANCE_MISSING_FIELDS

    if not is_valid_email(email.strip()):
        return messages.ATTENDANCE_INVALID_EMAIL

    return None
