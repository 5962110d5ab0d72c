"""
Core types shared across the backend
"""
from gaitlab.core.exceptions import (
    GaitLabError,
    ValidationError,
    ConflictError,
    NotFoundError,
    IncompleteStateError,
    StoreError,
    UnexpectedError,
)
from gaitlab.core.enums import SessionState, IngestStatus, WindowStatus

__all__ = [
    "GaitLabError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "IncompleteStateError",
    "StoreError",
    "UnexpectedError",
    "SessionState",
    "IngestStatus",
    "WindowStatus",
]
