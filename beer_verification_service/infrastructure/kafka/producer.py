# Kafka Producer Utility
import asyncio
import logging
from confluent_kafka import KafkaException, Producer
from typing import Optional, Callable, Any, List, Tuple

from beer_verification_service.app.config import settings
from beer_verification_service.app.observability import inject_trace_context_into_kafka_headers
from beer_verification_service.app.service.exceptions import ChannelError, ConfigurationError
from beer_verification_service.app.service.interfaces.message_publisher import AbstractMessagePublisher

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "contentType"

class KafkaProducerService:
    def __init__(self, bootstrap_servers: str):
        self.producer_config = {
            'bootstrap.servers': bootstrap_servers,
        }
        self.producer = Producer(self.producer_config)
        self._cancelled = False
        self._poll_loop_task: Optional[asyncio.Task] = None
        logger.info(f"KafkaProducer initialized with servers: {bootstrap_servers}")

    def _delivery_report(self, err, msg):
        """ Called once for each message produced to indicate delivery result. """
        if err is not None:
            logger.error(f'Message delivery failed: Topic {msg.topic()} Key {msg.key()!r}: {err}')
        else:
            logger.info(f'Message delivered: Topic {msg.topic()} Key {msg.key()!r} Partition [{msg.partition()}] @ Offset {msg.offset()}')

    async def _poll_loop(self):
        """ Polls the producer for delivery reports. """
        while not self._cancelled:
            self.producer.poll(0.1)
            await asyncio.sleep(0.1)
        logger.info("KafkaProducer poll loop stopped.")

    def produce_message(
        self,
        topic: str,
        value: bytes,
        key: Optional[str] = None,
        headers: Optional[List[Tuple[str, bytes]]] = None,
        callback: Optional[Callable[[Any, Any], None]] = None # err, msg
    ):
        """ Produces raw bytes to a Kafka topic. Raises ChannelError if the client refuses them. """
        if self._cancelled:
            logger.warning(f"Producer is cancelled, not producing message to {topic}.")
            raise ChannelError(f"Kafka producer is shut down, message to topic {topic} not produced")

        try:
            self.producer.produce(
                topic,
                value=value,
                key=key.encode('utf-8') if key else None,
                headers=headers or [],
                callback=callback if callback else self._delivery_report
            )
            logger.debug(f"Message enqueued to topic {topic} (key: {key}, {len(value)} bytes)")
        except BufferError as e:
            logger.error(f"Kafka producer queue full. Message to {topic} not produced. Error: {e}")
            raise ChannelError(f"Kafka producer queue full for topic {topic}: {e}") from e
        except KafkaException as e:
            logger.error(f"Error producing message to Kafka topic {topic}: {e}", exc_info=True)
            raise ChannelError(f"Failed to produce message to topic {topic}: {e}") from e

    async def start_polling(self):
        if self._poll_loop_task is None or self._poll_loop_task.done():
            self._cancelled = False
            self._poll_loop_task = asyncio.create_task(self._poll_loop())
            logger.info("KafkaProducer polling started.")

    async def stop_polling(self):
        if self._poll_loop_task and not self._cancelled:
            self._cancelled = True
            try:
                await asyncio.wait_for(self._poll_loop_task, timeout=5.0)
            except asyncio.TimeoutError:
                logger.warning("KafkaProducer poll loop did not stop in time.")
            self._poll_loop_task = None

    def flush(self, timeout: float = 10.0) -> int:
        """Wait for all messages in the Producer queue to be delivered. Returns the number still queued."""
        remaining = self.producer.flush(timeout)
        if remaining > 0:
            logger.warning(f"{remaining} messages still in Kafka producer queue after flush timeout.")
        else:
            logger.info("All Kafka messages flushed successfully.")
        return remaining


class MessagePublisher(AbstractMessagePublisher):
    """Publishes envelope bytes to the verification topic with a content type header."""

    def __init__(
        self,
        producer_service: KafkaProducerService,
        topic: Optional[str] = None,
        content_type: Optional[str] = None,
    ):
        self.producer_service = producer_service
        self.topic = topic or settings.KAFKA_TOPIC_NAME
        self.content_type = content_type or settings.MESSAGE_CONTENT_TYPE

    def publish_message(self, envelope_bytes: bytes) -> None:
        headers = inject_trace_context_into_kafka_headers(
            [(CONTENT_TYPE_HEADER, self.content_type.encode('utf-8'))]
        )
        self.producer_service.produce_message(self.topic, envelope_bytes, headers=headers)


_kafka_producer_instance: Optional[KafkaProducerService] = None

def get_kafka_producer() -> KafkaProducerService:
    global _kafka_producer_instance
    if _kafka_producer_instance is None:
        if not settings.KAFKA_BOOTSTRAP_SERVERS:
            logger.error("KAFKA_BOOTSTRAP_SERVERS not configured in settings. KafkaProducer cannot be initialized.")
            raise ConfigurationError("KAFKA_BOOTSTRAP_SERVERS not configured.")
        _kafka_producer_instance = KafkaProducerService(
            bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS
        )
    return _kafka_producer_instance

def get_message_publisher() -> MessagePublisher:
    return MessagePublisher(get_kafka_producer())

async def startup_kafka_producer():
    producer = get_kafka_producer()
    await producer.start_polling()

async def shutdown_kafka_producer():
    if _kafka_producer_instance:
        logger.info("Flushing Kafka producer before shutdown...")
        _kafka_producer_instance.flush()
        await _kafka_producer_instance.stop_polling()
        logger.info("Kafka producer shutdown complete.")
    else:
        logger.info("Kafka producer was not initialized, skipping shutdown steps.")
