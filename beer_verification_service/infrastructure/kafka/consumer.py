# Kafka Consumer Implementation
import logging
from typing import Optional

from confluent_kafka import Consumer, KafkaError, KafkaException

from opentelemetry.trace import SpanKind
from opentelemetry.trace.status import StatusCode, Status

from beer_verification_service.app.config import settings
from beer_verification_service.app.service.exceptions import ChannelError, DecodeError
from beer_verification_service.app.service.interfaces.verification_handler import AbstractVerificationHandler
from beer_verification_service.app.service.models import VerificationResult
from beer_verification_service.infrastructure.codec.envelope import decode_envelope
from beer_verification_service.app.observability import (
    tracer,
    kafka_messages_consumed_counter,
    decode_failures_counter,
    extract_trace_context_from_kafka_headers,
    setup_opentelemetry
)


logger = logging.getLogger(__name__)


class VerificationListener:
    """Decodes inbound envelope bytes and hands the verification to the registered handler."""

    def __init__(self, handler: AbstractVerificationHandler, expected_message_type: Optional[str] = None):
        self.handler = handler
        self.expected_message_type = expected_message_type or settings.MESSAGE_TYPE

    def handle(self, raw_message: bytes) -> VerificationResult:
        """
        Raises:
            DecodeError: The handler is not invoked.
        """
        verification = decode_envelope(raw_message, expected_message_type=self.expected_message_type)
        self.handler.process(verification)
        return verification


def consume_verification_events(listener: VerificationListener):
    logger.info("Initializing Kafka consumer...")
    conf = {
        'bootstrap.servers': settings.KAFKA_BOOTSTRAP_SERVERS,
        'group.id': settings.KAFKA_CONSUMER_GROUP_ID,
        'auto.offset.reset': 'earliest',
        'enable.auto.commit': False
    }
    consumer = Consumer(conf)

    try:
        consumer.subscribe([settings.KAFKA_TOPIC_NAME])
        logger.info(f"Kafka consumer subscribed to {settings.KAFKA_TOPIC_NAME} with group {settings.KAFKA_CONSUMER_GROUP_ID}. Waiting for messages...")

        while True:
            msg = consumer.poll(timeout=1.0)
            if msg is None:
                continue

            if msg.error():
                if msg.error().code() == KafkaError._PARTITION_EOF:
                    continue
                logger.error(f"Kafka error while receiving from {settings.KAFKA_TOPIC_NAME}: {msg.error()}")
                raise ChannelError(f"Kafka receive failed: {msg.error()}")

            parent_context = extract_trace_context_from_kafka_headers(msg.headers())
            with tracer.start_as_current_span("kafka_message_received", kind=SpanKind.CONSUMER, context=parent_context) as consume_span:
                msg_topic = msg.topic()
                msg_partition = msg.partition()
                msg_offset = msg.offset()
                raw_message = msg.value() or b""

                consume_span.set_attribute("messaging.system", "kafka")
                consume_span.set_attribute("messaging.destination.name", msg_topic)
                consume_span.set_attribute("messaging.kafka.partition", msg_partition)
                consume_span.set_attribute("messaging.kafka.message.offset", msg_offset)
                consume_span.set_attribute("messaging.message.payload_size_bytes", len(raw_message))

                kafka_messages_consumed_counter.add(1, {"topic": msg_topic, "kafka_partition": str(msg_partition)})
                logger.info(f"Consumed message from {msg_topic}/{msg_partition}/{msg_offset}")

                try:
                    verification = listener.handle(raw_message)
                    consume_span.set_attribute("verification.approved", verification.approved)
                    consume_span.add_event("VerificationDispatched")
                    consume_span.set_status(Status(StatusCode.OK))
                except DecodeError as e:
                    # Poison message: logged and skipped, never retried.
                    logger.error(f"Decode error for message at {msg_topic}/{msg_partition}/{msg_offset}: {e}", exc_info=True)
                    decode_failures_counter.add(1, {"topic": msg_topic, "error.type": type(e).__name__})
                    consume_span.record_exception(e)
                    consume_span.set_status(Status(StatusCode.ERROR, description=f"Decode Error: {type(e).__name__}"))

                consumer.commit(message=msg, asynchronous=False)
                consume_span.add_event("OffsetCommitted")
    except KeyboardInterrupt:
        logger.info("Kafka consumer process interrupted by user.")
    except KafkaException as ke:
        logger.critical(f"Critical KafkaException in consumer: {ke}", exc_info=True)
        raise ChannelError(f"Kafka consumer failed: {ke}") from ke
    finally:
        logger.info("Closing Kafka consumer...")
        consumer.close()
        logger.info("Kafka consumer closed.")


if __name__ == '__main__':
    setup_opentelemetry(service_name=settings.SERVICE_NAME_CONSUMER)

    from beer_verification_service.app.service.handlers import LoggingVerificationHandler

    logger.info("Starting Kafka consumer with the logging verification handler...")
    consume_verification_events(VerificationListener(LoggingVerificationHandler()))
