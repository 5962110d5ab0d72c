"""
Pydantic request/response schemas shared by services, API and CLI
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from gaitlab.core.enums import IngestStatus, WindowStatus


# ============================================================================
# Requests
# ============================================================================

class StartSessionRequest(BaseModel):
    """Start session request"""
    experiment_name: str = Field(..., description="Unique experiment name")
    notes: Optional[str] = None


class EndSessionRequest(BaseModel):
    """End session request"""
    experiment_name: str = Field(..., description="Experiment to close")


# ============================================================================
# Session results
# ============================================================================

class SessionStarted(BaseModel):
    experiment_name: str
    start_time: str
    notes: Optional[str] = None
    message: str = "Session started successfully."


class SessionEnded(BaseModel):
    experiment_name: str
    end_time: str
    message: str = "Session ended successfully."


class SessionSummary(BaseModel):
    """One row of the session list"""
    experiment_name: str
    start_time: str
    end_time: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None


class SessionList(BaseModel):
    sessions: List[SessionSummary]


# ============================================================================
# Ingestion results
# ============================================================================

class IngestFailure(BaseModel):
    """Why one entry of a batch was not stored"""
    index: int = Field(..., description="Position of the entry in seconds_data")
    timestamp: Optional[Any] = None
    reason: str = Field(..., description="'invalid_entry' or 'store_error'")
    message: str


class IngestResult(BaseModel):
    """Outcome of one batch ingestion request

    A partial outcome is a normal result, not an exception: the caller gets
    the stored count and the entries to resubmit.
    """
    status: IngestStatus
    device: str
    submitted: int
    stored: int
    skipped: int
    errors: List[IngestFailure] = []
    message: str


# ============================================================================
# Window query results
# ============================================================================

class ReadingRecord(BaseModel):
    device: str
    timestamp: str
    quaternions: List[Dict[str, float]]
    note: Optional[str] = None


class WindowResult(BaseModel):
    """Readings inside a session window, or the marker that it is still open"""
    status: WindowStatus
    experiment_name: str
    session_notes: Optional[str] = None
    start_time: str
    end_time: Optional[str] = None
    data_count: int = 0
    gait_data_records: List[ReadingRecord] = []
    message: str
