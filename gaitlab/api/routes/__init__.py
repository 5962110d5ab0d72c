"""
API routers
"""
from gaitlab.api.routes import ingest, sessions, query

__all__ = ["ingest", "sessions", "query"]
