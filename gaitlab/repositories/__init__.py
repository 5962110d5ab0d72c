"""
Repositories over the SQL store
"""
from gaitlab.repositories.store import SqlStore, StoreResult
from gaitlab.repositories.session_repository import ExperimentSessionRepository
from gaitlab.repositories.reading_repository import GaitReadingRepository

__all__ = [
    "SqlStore",
    "StoreResult",
    "ExperimentSessionRepository",
    "GaitReadingRepository",
]
