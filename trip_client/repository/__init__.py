"""
Trip repository boundary and its implementations.
"""
from .base import (
    TripRepository,
    RepositoryError,
    NetworkError,
    TripNotFoundError,
    TripValidationError,
    AlreadyConfirmedError,
)
from .joined_store import JoinedTripStore
from .http_repository import HttpTripRepository
from .memory import InMemoryTripRepository

__all__ = [
    "TripRepository",
    "RepositoryError",
    "NetworkError",
    "TripNotFoundError",
    "TripValidationError",
    "AlreadyConfirmedError",
    "JoinedTripStore",
    "HttpTripRepository",
    "InMemoryTripRepository",
]
