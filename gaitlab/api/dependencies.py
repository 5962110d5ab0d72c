"""
FastAPI dependencies
"""
from fastapi import Request

from gaitlab.services.container import ServiceContainer


def get_services(request: Request) -> ServiceContainer:
    """Services wired by the app factory"""
    return request.app.state.services
