"""
On-device record of the trips this device has joined.

Stored as a JSON list of trip ids so it survives process restarts.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Set, Union


logger = logging.getLogger(__name__)


class JoinedTripStore:
    """
    File-backed set of joined trip ids.

    With no path the store lives in memory only, which is what the tests
    and the demo server use.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self._trip_ids: Set[str] = self._read()

    def _read(self) -> Set[str]:
        if self.path is None or not self.path.exists():
            return set()

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Joined store {self.path} is not a JSON list")
        return {str(trip_id) for trip_id in data}

    def _write(self) -> None:
        if self.path is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(sorted(self._trip_ids), f)
        tmp_path.replace(self.path)

    def mark_joined(self, trip_id: str) -> None:
        """Add a trip id. Marking the same id twice is harmless."""
        self._trip_ids.add(trip_id)
        self._write()
        logger.info(f"[store=joined] Marked trip {trip_id} as joined")

    def forget(self, trip_id: str) -> None:
        """Remove a trip id; unknown ids are ignored."""
        if trip_id not in self._trip_ids:
            logger.debug(f"[store=joined] Trip {trip_id} was not joined, nothing to forget")
            return
        self._trip_ids.discard(trip_id)
        self._write()
        logger.info(f"[store=joined] Forgot trip {trip_id}")

    def is_joined(self, trip_id: str) -> bool:
        return trip_id in self._trip_ids

    def list(self) -> List[str]:
        return sorted(self._trip_ids)
