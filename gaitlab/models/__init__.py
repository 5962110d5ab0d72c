"""
Database models and schemas
"""
from gaitlab.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    build_session_factory,
    init_db,
    close_db,
)
from gaitlab.models.experiment_session import ExperimentSession
from gaitlab.models.gait_reading import GaitReading

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "init_db",
    "close_db",
    "ExperimentSession",
    "GaitReading",
]
