"""
Trip screen client.

This package contains:
- shared/: Common infrastructure (config, logging, trip contracts, messages)
- dates/: Calendar date range selection
- attendance/: Guest confirmation input validation
- repository/: Trips API client and the on-device joined store
- session/: Trip session controller and its REST adapter
"""

from trip_client.session.controller import TripSessionController
from trip_client.session.state import EntryContext

__all__ = ["TripSessionController", "EntryContext"]
