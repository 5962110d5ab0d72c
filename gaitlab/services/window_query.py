"""
Window Query Engine

Resolves a session's [start_time, end_time] window from the registry, then
fetches the readings inside it. An open session short-circuits to an
"incomplete" result instead of running an unbounded range query.
"""
import json
from typing import Any

from gaitlab.core.enums import WindowStatus
from gaitlab.core.exceptions import (
    GaitLabError,
    ValidationError,
    NotFoundError,
    IncompleteStateError,
    StoreError,
)
from gaitlab.logger import logger
from gaitlab.models.schemas import ReadingRecord, WindowResult
from gaitlab.repositories.reading_repository import GaitReadingRepository
from gaitlab.repositories.session_repository import ExperimentSessionRepository
from gaitlab.services.validation import validate_experiment_name


class WindowQueryEngine:
    """Session-scoped reading retrieval"""

    def __init__(self, sessions: ExperimentSessionRepository, readings: GaitReadingRepository):
        self.sessions = sessions
        self.readings = readings

    def query(self, experiment_name: Any) -> WindowResult:
        """
        Readings inside a session window

        Args:
            experiment_name: Session to resolve

        Returns:
            WindowResult: COMPLETE with readings ordered by (timestamp, device),
            or INCOMPLETE with no readings while the session is open

        Raises:
            ValidationError: Name missing
            NotFoundError: Unknown session
            StoreError: Any store failure
        """
        check = validate_experiment_name(experiment_name)
        if not check.valid:
            raise ValidationError('The "name" query parameter is required.', details=check.summary())

        try:
            return self._query(experiment_name)
        except GaitLabError:
            raise
        except Exception as e:
            logger.error(f"QUERY: Exception querying data for experiment '{experiment_name}': {e}")
            raise StoreError(
                "Data query failed, check the server logs for details.",
                details=str(e)
            ) from e

    def require_complete(self, experiment_name: Any) -> WindowResult:
        """
        Like query(), but an open session is an error

        Raises:
            IncompleteStateError: Session has not ended yet
        """
        result = self.query(experiment_name)
        if result.status is WindowStatus.INCOMPLETE:
            raise IncompleteStateError(result.message, start_time=result.start_time)
        return result

    def _query(self, experiment_name: str) -> WindowResult:
        logger.info(f"QUERY: Fetching session info for experiment: {experiment_name}")
        session = self.sessions.get_session(experiment_name)

        if session is None:
            logger.warning(f"QUERY: No session found with name: {experiment_name}")
            raise NotFoundError(f'No experiment session named "{experiment_name}" was found.')

        if not session["end_time"]:
            logger.info(f"QUERY: Experiment '{experiment_name}' has started but not yet ended.")
            return WindowResult(
                status=WindowStatus.INCOMPLETE,
                experiment_name=experiment_name,
                session_notes=session["notes"],
                start_time=session["start_time"],
                end_time=None,
                data_count=0,
                gait_data_records=[],
                message=(
                    f'Experiment "{experiment_name}" has started but not yet ended; '
                    f"complete gait data is not available yet."
                ),
            )

        start_time = session["start_time"]
        end_time = session["end_time"]
        logger.info(f"QUERY: Fetching gait data for {experiment_name} between {start_time} and {end_time}")
        rows = self.readings.get_readings_in_window(start_time, end_time)

        records = [
            ReadingRecord(
                device=row["device"],
                timestamp=row["timestamp"],
                quaternions=json.loads(row["quaternions"]),
                note=row["note"],
            )
            for row in rows
        ]

        return WindowResult(
            status=WindowStatus.COMPLETE,
            experiment_name=experiment_name,
            session_notes=session["notes"],
            start_time=start_time,
            end_time=end_time,
            data_count=len(records),
            gait_data_records=records,
            message="Data query succeeded.",
        )
