from abc import ABC, abstractmethod

from beer_verification_service.app.service.models import VerificationResult


class AbstractVerificationHandler(ABC):
    @abstractmethod
    def process(self, verification: VerificationResult) -> None:
        """
        Handles one successfully decoded verification.

        Args:
            verification: The decoded VerificationResult for a single inbound message.
        """
        pass
