"""
Session Lifecycle Manager

Opens and closes named experiment sessions. A name moves absent -> open ->
closed and never back; uniqueness is left to the registry's primary key.
"""
from typing import Any, List, Optional

from gaitlab.core.exceptions import (
    GaitLabError,
    ValidationError,
    ConflictError,
    NotFoundError,
    StoreError,
    UnexpectedError,
)
from gaitlab.core.timeutils import Clock, utc_now, to_iso_z
from gaitlab.logger import logger
from gaitlab.models.schemas import SessionStarted, SessionEnded, SessionSummary
from gaitlab.repositories.session_repository import ExperimentSessionRepository
from gaitlab.services.validation import validate_experiment_name

UNIQUE_VIOLATION_MARKERS = (
    "unique constraint failed",
    "primary key constraint failed",
    "duplicate key",
    "integrityerror",
)


def is_unique_violation(error: Optional[str]) -> bool:
    """True if a store error message reports a uniqueness violation"""
    message = (error or "").lower()
    return any(marker in message for marker in UNIQUE_VIOLATION_MARKERS)


class SessionLifecycleManager:
    """Start, end and list experiment sessions"""

    def __init__(self, sessions: ExperimentSessionRepository, clock: Clock = utc_now):
        self.sessions = sessions
        self.clock = clock

    def start(self, experiment_name: Any, notes: Optional[str] = None) -> SessionStarted:
        """
        Open a new session at the current UTC instant

        Args:
            experiment_name: Unique experiment name
            notes: Optional free text

        Returns:
            SessionStarted with the assigned start time

        Raises:
            ValidationError: Name missing
            ConflictError: Name already started (open or closed)
            StoreError: Any other store failure
        """
        check = validate_experiment_name(experiment_name)
        if not check.valid:
            raise ValidationError("Missing required field: experiment_name.", details=check.summary())

        start_time = to_iso_z(self.clock())
        try:
            result = self.sessions.create_session(experiment_name, start_time, notes or None)
        except GaitLabError:
            raise
        except Exception as e:
            logger.error(f"SESSION_START: Exception for experiment_name '{experiment_name}': {e}")
            raise UnexpectedError("Internal server error, please try again later.", details=str(e)) from e

        if not result.success:
            if is_unique_violation(result.error):
                logger.warning(f"SESSION_START: Session '{experiment_name}' already exists")
                raise ConflictError(
                    f'Experiment name "{experiment_name}" already exists, please choose a unique name.'
                )
            logger.error(f"SESSION_START: Store error for experiment_name '{experiment_name}': {result.error}")
            raise StoreError("Database error, could not start the session.", details=result.error)

        logger.info(f"SESSION_START: Session '{experiment_name}' started successfully at {start_time}.")
        return SessionStarted(experiment_name=experiment_name, start_time=start_time, notes=notes or None)

    def end(self, experiment_name: Any) -> SessionEnded:
        """
        Close a session at the current UTC instant

        Ending an already closed session moves its end time forward.

        Raises:
            ValidationError: Name missing
            NotFoundError: Name never started
            StoreError: Store failure
        """
        check = validate_experiment_name(experiment_name)
        if not check.valid:
            raise ValidationError("Missing required field: experiment_name.", details=check.summary())

        end_time = to_iso_z(self.clock())
        try:
            result = self.sessions.set_end_time(experiment_name, end_time)
        except GaitLabError:
            raise
        except Exception as e:
            logger.error(f"SESSION_END: Exception for experiment_name '{experiment_name}': {e}")
            raise UnexpectedError("Internal server error, please try again later.", details=str(e)) from e

        if not result.success:
            logger.error(f"SESSION_END: Store error for experiment_name '{experiment_name}': {result.error}")
            raise StoreError("Database error, could not end the session.", details=result.error)

        if result.rows_affected == 0:
            logger.warning(f"SESSION_END: No session found with name '{experiment_name}' to end.")
            raise NotFoundError(f'No session named "{experiment_name}" found to end.')

        logger.info(f"SESSION_END: Session '{experiment_name}' ended successfully at {end_time}.")
        return SessionEnded(experiment_name=experiment_name, end_time=end_time)

    def list(self) -> List[SessionSummary]:
        """All sessions, most recent start first"""
        try:
            rows = self.sessions.list_sessions()
        except GaitLabError:
            logger.error("LIST_SESSIONS: Error listing sessions")
            raise
        except Exception as e:
            logger.error(f"LIST_SESSIONS: Error listing sessions: {e}")
            raise UnexpectedError("Error fetching session list.", details=str(e)) from e

        return [
            SessionSummary(
                experiment_name=row["experiment_name"],
                start_time=row["start_time"],
                end_time=row["end_time"],
                notes=row["notes"],
                created_at=row["created_at"].isoformat() if row["created_at"] else None,
            )
            for row in rows
        ]
