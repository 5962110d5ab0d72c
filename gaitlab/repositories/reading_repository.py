"""
Gait Reading Repository
Statements against the reading store
"""
from typing import List, Optional, Sequence
from sqlalchemy import select
from sqlalchemy.engine import RowMapping

from gaitlab.models.gait_reading import GaitReading
from gaitlab.repositories.store import SqlStore, StoreResult


class GaitReadingRepository:
    """Repository for gait reading operations"""

    def __init__(self, store: SqlStore):
        self.store = store

    @staticmethod
    def prepare_reading(
        device: str,
        timestamp: str,
        quaternions_json: str,
        note: Optional[str] = None
    ):
        """Bind one reading row for a batch insert"""
        return (
            GaitReading.__table__,
            {
                "device": device,
                "timestamp": timestamp,
                "quaternions": quaternions_json,
                "note": note,
            }
        )

    def bulk_create_readings(self, prepared: Sequence) -> List[StoreResult]:
        """
        Insert prepared readings as one batch

        Returns:
            One StoreResult per reading, in order
        """
        return self.store.batch_insert(prepared)

    def get_readings_in_window(self, start_time: str, end_time: str) -> List[RowMapping]:
        """
        Readings with start_time <= timestamp <= end_time

        Returns:
            Rows ordered by timestamp, then device
        """
        table = GaitReading.__table__
        return self.store.select_many(
            select(table.c.device, table.c.timestamp, table.c.quaternions, table.c.note)
            .where(table.c.timestamp >= start_time, table.c.timestamp <= end_time)
            .order_by(table.c.timestamp.asc(), table.c.device.asc())
        )
