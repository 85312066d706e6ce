# Default verification handler used by the consumer process
import logging

from beer_verification_service.app.service.interfaces.verification_handler import AbstractVerificationHandler
from beer_verification_service.app.service.models import VerificationResult

logger = logging.getLogger(__name__)


class LoggingVerificationHandler(AbstractVerificationHandler):
    def process(self, verification: VerificationResult) -> None:
        outcome = "approved" if verification.approved else "rejected"
        logger.info(
            f"Verification {outcome} for {verification.name} from {verification.city}: "
            f"{verification.beers_count} beers, born {verification.date_of_birth.isoformat()}"
        )
