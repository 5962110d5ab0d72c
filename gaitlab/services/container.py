"""
Service wiring
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from gaitlab.config import Settings, settings as default_settings
from gaitlab.core.timeutils import Clock, utc_now
from gaitlab.repositories import SqlStore, ExperimentSessionRepository, GaitReadingRepository
from gaitlab.services.ingestion import IngestionPipeline
from gaitlab.services.session_lifecycle import SessionLifecycleManager
from gaitlab.services.window_query import WindowQueryEngine


@dataclass
class ServiceContainer:
    ingestion: IngestionPipeline
    lifecycle: SessionLifecycleManager
    window_query: WindowQueryEngine


def build_services(
    session_factory: sessionmaker,
    config: Optional[Settings] = None,
    clock: Clock = utc_now
) -> ServiceContainer:
    """Wire repositories and services over one session factory"""
    config = config or default_settings
    store = SqlStore(session_factory)
    sessions = ExperimentSessionRepository(store)
    readings = GaitReadingRepository(store)
    return ServiceContainer(
        ingestion=IngestionPipeline(readings, config.INGEST.expected_samples_per_second),
        lifecycle=SessionLifecycleManager(sessions, clock=clock),
        window_query=WindowQueryEngine(sessions, readings),
    )
