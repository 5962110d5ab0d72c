"""
Core enumerations used throughout the system.

These enums are used by multiple components and should be imported from
here (single source of truth).
"""

from enum import Enum


class SessionState(Enum):
    """
    Experiment session lifecycle.

    Values:
        ABSENT: Name has never been started
        OPEN: Started, end time not set yet
        CLOSED: End time set; the window is fixed
    """
    ABSENT = "absent"
    OPEN = "open"
    CLOSED = "closed"


class IngestStatus(Enum):
    """
    Outcome of a batch ingestion request.

    Values:
        STORED: Every submitted entry was stored
        PARTIAL: Some entries were skipped or rejected by the store
    """
    STORED = "stored"
    PARTIAL = "partial"


class WindowStatus(Enum):
    """
    Outcome of a window query.

    Values:
        COMPLETE: Session closed, readings cover the full window
        INCOMPLETE: Session still open, no readings returned
    """
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
