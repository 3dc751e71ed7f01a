"""Calendar date range selection and date display helpers."""

from trip_client.dates.selection import (
    DateSelection,
    EMPTY_SELECTION,
    select_day,
    is_selectable,
)
from trip_client.dates.formatting import format_numeric, month_abbreviation, month_name

__all__ = [
    "DateSelection",
    "EMPTY_SELECTION",
    "select_day",
    "is_selectable",
    "format_numeric",
    "month_abbreviation",
    "month_name",
]
