"""
Client configuration.

Centralizes the settings of the trip client (API endpoint, local store
location, display locale, logging output) so they can be tuned from the
environment without touching the session wiring.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
load_dotenv()


@dataclass
class ClientConfig:
    """
    Configuration for the trip client.

    Attributes:
        api_base_url: Base URL of the trips API (empty -> in-memory repository)
        api_timeout: HTTP timeout in seconds
        joined_store_path: JSON file holding the ids of joined trips
        date_locale: Locale used for month names and date display ("en" or "pt")
        destination_max_length: Destination length before the summary bar truncates it
        log_format: "text" for pipe-separated lines, "json" for structured records
        log_level: Root logging level name
        log_file: Optional file receiving a copy of the log output
    """

    # Trips API
    api_base_url: str = ""
    api_timeout: float = 10.0

    # Local persistence
    joined_store_path: str = ".trip_client/joined_trips.json"

    # Display
    date_locale: str = "en"
    destination_max_length: int = 14

    # Logging
    log_format: str = "text"
    log_level: str = "INFO"
    log_file: str = ""


def _from_env() -> ClientConfig:
    return ClientConfig(
        api_base_url=os.environ.get("TRIP_API_BASE_URL", ""),
        api_timeout=float(os.environ.get("TRIP_API_TIMEOUT", "10")),
        joined_store_path=os.environ.get(
            "TRIP_JOINED_STORE_PATH", ".trip_client/joined_trips.json"
        ),
        date_locale=os.environ.get("TRIP_DATE_LOCALE", "en"),
        destination_max_length=int(os.environ.get("TRIP_DESTINATION_MAX_LENGTH", "14")),
        log_format=os.environ.get("TRIP_LOG_FORMAT", "text").lower(),
        log_level=os.environ.get("TRIP_LOG_LEVEL", "INFO").upper(),
        log_file=os.environ.get("TRIP_LOG_FILE", ""),
    )


# Default configuration instance
DEFAULT_CONFIG = _from_env()


def _pick(value, default):
    return value if value is not None else default


def get_config(
    api_base_url: Optional[str] = None,
    api_timeout: Optional[float] = None,
    joined_store_path: Optional[str] = None,
    date_locale: Optional[str] = None,
    destination_max_length: Optional[int] = None,
    log_format: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> ClientConfig:
    """
    Create a configuration with optional overrides.

    Only arguments left as None fall back to DEFAULT_CONFIG, so zero and
    empty values are honoured.

    Args:
        api_base_url: Override for the trips API base URL
        api_timeout: Override for the HTTP timeout
        joined_store_path: Override for the joined store file
        date_locale: Override for the display locale
        destination_max_length: Override for the truncation length
        log_format: Override for the log output format
        log_level: Override for the logging level
        log_file: Override for the log file

    Returns:
        ClientConfig with specified overrides applied
    """
    return ClientConfig(
        api_base_url=_pick(api_base_url, DEFAULT_CONFIG.api_base_url),
        api_timeout=_pick(api_timeout, DEFAULT_CONFIG.api_timeout),
        joined_store_path=_pick(joined_store_path, DEFAULT_CONFIG.joined_store_path),
        date_locale=_pick(date_locale, DEFAULT_CONFIG.date_locale),
        destination_max_length=_pick(
            destination_max_length, DEFAULT_CONFIG.destination_max_length
        ),
        log_format=_pick(log_format, DEFAULT_CONFIG.log_format),
        log_level=_pick(log_level, DEFAULT_CONFIG.log_level),
        log_file=_pick(log_file, DEFAULT_CONFIG.log_file),
    )
