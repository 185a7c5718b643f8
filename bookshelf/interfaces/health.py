"""
Health check router.

Reports whether the process is up and MongoDB answers a ping.
Answers 503 while storage is unreachable so a load balancer can drain
the instance.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from bookshelf.core.config import settings
from bookshelf.infrastructure.library.mongo_gateway import MongoGateway
from bookshelf.interfaces.library.dependencies import get_gateway
from bookshelf.interfaces.library.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Storage unreachable"}},
    summary="Health check",
)
def health_check(gateway: MongoGateway = Depends(get_gateway)):
    try:
        gateway.ping()
    except PyMongoError as exc:
        logger.error("Storage ping failed: %s", type(exc).__name__)
        body = HealthResponse(status="degraded", storage="unreachable", version=settings.version)
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(status="ok", storage="ok", version=settings.version)
