"""
Experiment Session Repository
Statements against the session registry
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.engine import RowMapping

from gaitlab.models.experiment_session import ExperimentSession
from gaitlab.repositories.store import SqlStore, StoreResult


class ExperimentSessionRepository:
    """Repository for experiment session operations"""

    def __init__(self, store: SqlStore):
        self.store = store

    def create_session(
        self,
        experiment_name: str,
        start_time: str,
        notes: Optional[str] = None
    ) -> StoreResult:
        """
        Insert a new open session

        Args:
            experiment_name: Unique experiment name
            start_time: ISO-8601 UTC start instant
            notes: Optional notes

        Returns:
            StoreResult; a duplicate name is reported as a failed result
        """
        return self.store.insert(
            ExperimentSession.__table__,
            {
                "experiment_name": experiment_name,
                "start_time": start_time,
                "notes": notes,
            }
        )

    def set_end_time(self, experiment_name: str, end_time: str) -> StoreResult:
        """
        Set the end time of a session, matched by name

        Returns:
            StoreResult; rows_affected is 0 when the name is unknown
        """
        return self.store.update(
            ExperimentSession.__table__,
            {"end_time": end_time},
            ExperimentSession.__table__.c.experiment_name == experiment_name
        )

    def get_session(self, experiment_name: str) -> Optional[RowMapping]:
        """
        Get session by name

        Returns:
            Row with start_time, end_time, notes if found, None otherwise
        """
        table = ExperimentSession.__table__
        return self.store.select_one(
            select(table.c.experiment_name, table.c.start_time, table.c.end_time, table.c.notes)
            .where(table.c.experiment_name == experiment_name)
        )

    def list_sessions(self) -> List[RowMapping]:
        """All sessions, most recently started first"""
        table = ExperimentSession.__table__
        return self.store.select_many(
            select(
                table.c.experiment_name,
                table.c.start_time,
                table.c.end_time,
                table.c.notes,
                table.c.created_at,
            ).order_by(table.c.start_time.desc())
        )
