# API Router for Beer Verifications
from fastapi import APIRouter, Depends, HTTPException, Body
import logging

from beer_verification_service.app.dependencies.verification_service import get_age_checking_service
from beer_verification_service.app.service.exceptions import ChannelError
from beer_verification_service.app.service.models import VerificationRequest, VerificationResult
from beer_verification_service.app.service.verification_service import AgeCheckingService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post(
    "/verifications",
    status_code=202,
    response_model=VerificationResult,
    summary="Check whether a patron should get a beer",
    tags=["Verifications"],
)
async def create_verification_api(
    request_data: VerificationRequest = Body(...),
    service: AgeCheckingService = Depends(get_age_checking_service)
):
    """
    Decide for the given age and publish the verification envelope.
    """
    try:
        return service.should_get_beer(request_data.age)
    except ChannelError as ce:
        logger.error(f"Kafka channel error publishing verification for age {request_data.age}: {ce}", exc_info=True)
        raise HTTPException(status_code=502, detail=f"Failed to publish verification: {ce}")
