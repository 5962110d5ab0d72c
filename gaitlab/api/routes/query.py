"""
Query API Routes
Readings inside an experiment session window
"""
import asyncio
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from gaitlab.api.dependencies import get_services
from gaitlab.core.enums import WindowStatus
from gaitlab.services.container import ServiceContainer

router = APIRouter(prefix="/api/data", tags=["Query"])


@router.get("/experiment")
async def query_experiment(
    name: Optional[str] = Query(None, description="Experiment name"),
    services: ServiceContainer = Depends(get_services)
):
    """
    Gait data recorded during an experiment

    Returns 200 with readings ordered by timestamp and device, or 202 with
    an empty list while the session has not ended.
    """
    result = await asyncio.to_thread(services.window_query.query, name)

    status_code = (
        status.HTTP_200_OK
        if result.status is WindowStatus.COMPLETE
        else status.HTTP_202_ACCEPTED
    )
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
