from fastapi import Depends

from beer_verification_service.app.service.interfaces.message_publisher import AbstractMessagePublisher
from beer_verification_service.app.service.verification_service import AgeCheckingService
from beer_verification_service.infrastructure.kafka.producer import get_message_publisher


async def get_age_checking_service(
    message_publisher: AbstractMessagePublisher = Depends(get_message_publisher)
) -> AgeCheckingService:
    """
    FastAPI dependency provider for the AgeCheckingService.
    The publisher wraps the process-wide Kafka producer singleton.
    """
    return AgeCheckingService(message_publisher)
