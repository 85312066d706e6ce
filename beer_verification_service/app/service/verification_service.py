# Producer side: decide, encode and publish a verification
import logging

from opentelemetry import trace

from beer_verification_service.app.observability import tracer, verifications_published_counter
from beer_verification_service.app.service.decision import decide
from beer_verification_service.app.service.interfaces.message_publisher import AbstractMessagePublisher
from beer_verification_service.app.service.models import VerificationResult
from beer_verification_service.infrastructure.codec.envelope import approved_to_status, encode_envelope

logger = logging.getLogger(__name__)


class AgeCheckingService:
    def __init__(self, message_publisher: AbstractMessagePublisher):
        self.message_publisher = message_publisher

    def should_get_beer(self, age: int) -> VerificationResult:
        with tracer.start_as_current_span("should_get_beer", kind=trace.SpanKind.PRODUCER) as span:
            verification = decide(age)
            status = approved_to_status(verification.approved).name
            span.set_attribute("verification.age", age)
            span.set_attribute("verification.status", status)

            envelope_bytes = encode_envelope(verification)
            span.set_attribute("messaging.message.payload_size_bytes", len(envelope_bytes))

            # ChannelError propagates to the caller.
            self.message_publisher.publish_message(envelope_bytes)

            verifications_published_counter.add(1, {"status": status})
            logger.info(f"Published {status} verification for age {age} ({len(envelope_bytes)} bytes)")
            return verification
