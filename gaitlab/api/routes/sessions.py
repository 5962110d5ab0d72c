"""
Session API Routes
Start, end and list experiment sessions
"""
import asyncio
from fastapi import APIRouter, Depends, status

from gaitlab.api.dependencies import get_services
from gaitlab.models.schemas import (
    StartSessionRequest,
    EndSessionRequest,
    SessionStarted,
    SessionEnded,
    SessionList,
)
from gaitlab.services.container import ServiceContainer

router = APIRouter(prefix="/api", tags=["Sessions"])


@router.post("/session/start", response_model=SessionStarted, status_code=status.HTTP_201_CREATED)
async def start_session(
    body: StartSessionRequest,
    services: ServiceContainer = Depends(get_services)
):
    """Open a new experiment session; 409 if the name was used before"""
    return await asyncio.to_thread(services.lifecycle.start, body.experiment_name, body.notes)


@router.api_route("/session/end", methods=["POST", "PUT"], response_model=SessionEnded)
async def end_session(
    body: EndSessionRequest,
    services: ServiceContainer = Depends(get_services)
):
    """Close an experiment session; 404 if it was never started"""
    return await asyncio.to_thread(services.lifecycle.end, body.experiment_name)


@router.get("/sessions", response_model=SessionList)
async def list_sessions(services: ServiceContainer = Depends(get_services)):
    """All sessions, most recent first"""
    sessions = await asyncio.to_thread(services.lifecycle.list)
    return SessionList(sessions=sessions)
