"""
Business services: ingestion, session lifecycle, window queries
"""
from gaitlab.services.ingestion import IngestionPipeline
from gaitlab.services.session_lifecycle import SessionLifecycleManager
from gaitlab.services.window_query import WindowQueryEngine
from gaitlab.services.container import ServiceContainer, build_services

__all__ = [
    "IngestionPipeline",
    "SessionLifecycleManager",
    "WindowQueryEngine",
    "ServiceContainer",
    "build_services",
]
