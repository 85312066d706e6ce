# API Router for Health Checks
from fastapi import APIRouter
import logging

from beer_verification_service.app.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/health", tags=["Monitoring"])
async def health_check():
    return {
        "status": "ok",
        "components": {"kafka_topic": settings.KAFKA_TOPIC_NAME},
        "service_name": settings.SERVICE_NAME_API,
    }
