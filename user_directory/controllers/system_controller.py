# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints: health, readiness, metrics."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from user_directory.core.config import settings
from user_directory.core.dependencies import get_relay_service
from user_directory.services.relay_service import RelayService

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}


@router.get("/health/ready")
async def readiness_check(relay: RelayService = Depends(get_relay_service)):
    if await relay.ping():
        return {"status": "ok", "service": settings.SERVICE_NAME, "upstream": "reachable"}
    return JSONResponse(
        status_code=503,
        content={"status": "degraded", "service": settings.SERVICE_NAME, "upstream": "unreachable"},
    )


@router.get("/metrics")
async def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
