import pytest

from beer_verification_service.app.service.interfaces.message_publisher import AbstractMessagePublisher
from beer_verification_service.app.service.interfaces.verification_handler import AbstractVerificationHandler
from beer_verification_service.infrastructure.kafka import producer as kafka_producer_module


class RecordingVerificationHandler(AbstractVerificationHandler):
    """Keeps the last verification it was asked to process."""
    def __init__(self):
        self.verification = None
        self.calls = 0

    def process(self, verification):
        self.verification = verification
        self.calls += 1

    def reset(self):
        self.verification = None
        self.calls = 0


class InMemoryChannel(AbstractMessagePublisher):
    """Publisher double that queues envelope bytes instead of sending them to Kafka."""
    def __init__(self):
        self.messages = []

    def publish_message(self, envelope_bytes: bytes) -> None:
        self.messages.append(envelope_bytes)

    def receive(self) -> bytes:
        return self.messages.pop(0)


@pytest.fixture
def recording_handler():
    return RecordingVerificationHandler()


@pytest.fixture
def in_memory_channel():
    return InMemoryChannel()


@pytest.fixture
def reset_kafka_producer_singleton():
    kafka_producer_module._kafka_producer_instance = None
    yield
    kafka_producer_module._kafka_producer_instance = None
