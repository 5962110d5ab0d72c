"""
Ingestion API Routes
Batched per-second quaternion readings from the wearable devices
"""
import asyncio
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from gaitlab.api.dependencies import get_services
from gaitlab.core.enums import IngestStatus
from gaitlab.core.exceptions import ValidationError
from gaitlab.logger import logger
from gaitlab.services.container import ServiceContainer

router = APIRouter(prefix="/api", tags=["Ingest"])


@router.post("/ingest")
async def ingest_batch(request: Request, services: ServiceContainer = Depends(get_services)):
    """
    Store a batch of per-second readings for one device

    Body:
        {"device": "hip", "seconds_data": [{"timestamp": ..., "quaternions": [...], "note": ...}]}

    Returns 201 when every entry was stored, 207 when some were skipped or
    rejected (the body lists them).
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("INGESTION: Invalid JSON payload for batch ingestion")
        raise ValidationError("Invalid JSON payload for batch ingestion")

    result = await asyncio.to_thread(services.ingestion.ingest, payload)

    status_code = (
        status.HTTP_201_CREATED
        if result.status is IngestStatus.STORED
        else status.HTTP_207_MULTI_STATUS
    )
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
