"""
Date range selection for the calendar picker.

Turns successive calendar taps into an ordered start/end pair. The first
tap opens a range, the second closes it whatever its order relative to the
first, and a third tap discards the closed range and opens a new one.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, FrozenSet, Iterator, Optional

from trip_client.dates.formatting import DEFAULT_LOCALE, format_numeric


@dataclass(frozen=True)
class DateSelection:
    """
    Immutable state of the calendar picker.

    Attributes:
        start: First day of the range, or None before any tap
        end: Last day of the range, or None while the range is open
        marked: Days highlighted on the calendar
        display: Text shown in the "when" field of the edit form
    """

    start: Optional[date] = None
    end: Optional[date] = None
    marked: FrozenSet[date] = field(default_factory=frozenset)
    display: str = ""

    @property
    def is_complete(self) -> bool:
        """True once both ends of the range are chosen."""
        return self.start is not None and self.end is not None

    def marked_dates(self) -> Dict[str, Dict[str, bool]]:
        """
        Render the marked days the way calendar widgets expect them.

        Returns:
            Mapping of ISO day string to its marking flags
        """
        return {
            day.isoformat(): {
                "selected": True,
                "starting_day": day == self.start,
                "ending_day": day == self.end or (self.end is None and day == self.start),
            }
            for day in sorted(self.marked)
        }


EMPTY_SELECTION = DateSelection()


def _days_between(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def select_day(
    selection: DateSelection,
    day: date,
    locale: str = DEFAULT_LOCALE,
) -> DateSelection:
    """
    Apply one calendar tap to the current selection.

    Args:
        selection: Current picker state
        day: Tapped calendar day
        locale: Locale for the display string

    Returns:
        New DateSelection; the input is never mutated
    """
    # Nothing chosen yet, or a closed range: start over
    if selection.start is None or selection.end is not None:
        return DateSelection(start=day, end=None, marked=frozenset({day}))

    start, end = selection.start, day
    if day < start:
        start, end = day, selection.start

    return DateSelection(
        start=start,
        end=end,
        marked=frozenset(_days_between(start, end)),
        display=f"{format_numeric(start, locale)} - {format_numeric(end, locale)}",
    )


def is_selectable(day: date, today: date) -> bool:
    """Past days are disabled on the calendar."""
    return day >= today
