# End-to-end producer -> channel -> consumer scenarios
import datetime
import pytest
from unittest.mock import patch

from beer_verification_service.app.service.verification_service import AgeCheckingService
from beer_verification_service.infrastructure.kafka.consumer import VerificationListener
from beer_verification_service.infrastructure.kafka.producer import KafkaProducerService, MessagePublisher


@pytest.mark.parametrize("age, expected", [
    (45, {
        "name": "santiago vasquez", "approved": True, "beers_count": 7, "city": "medellin",
        "date_of_birth": datetime.datetime(1975, 4, 1, 12, 0, 0, tzinfo=datetime.timezone.utc),
    }),
    (9, {
        "name": "sebastian vasquez", "approved": False, "beers_count": 0, "city": "new york",
        "date_of_birth": datetime.datetime(2011, 2, 15, 15, 15, 15, tzinfo=datetime.timezone.utc),
    }),
])
def test_age_to_handler_through_in_memory_channel(age, expected, in_memory_channel, recording_handler):
    AgeCheckingService(in_memory_channel).should_get_beer(age)
    assert len(in_memory_channel.messages) == 1

    VerificationListener(recording_handler).handle(in_memory_channel.receive())

    assert recording_handler.calls == 1
    assert recording_handler.verification.model_dump() == expected


@patch('beer_verification_service.infrastructure.kafka.producer.Producer')
def test_age_to_handler_through_kafka_producer(MockConfluentProducer, recording_handler):
    publisher = MessagePublisher(KafkaProducerService(bootstrap_servers="fake_server:9092"))

    AgeCheckingService(publisher).should_get_beer(45)

    produce_call = MockConfluentProducer.return_value.produce.call_args
    VerificationListener(recording_handler).handle(produce_call.kwargs["value"])
    assert recording_handler.verification.name == "santiago vasquez"
    assert recording_handler.verification.approved is True
    assert recording_handler.verification.date_of_birth.isoformat() == "1975-04-01T12:00:00+00:00"


def test_messages_are_handled_independently(in_memory_channel, recording_handler):
    service = AgeCheckingService(in_memory_channel)
    listener = VerificationListener(recording_handler)

    service.should_get_beer(9)
    service.should_get_beer(45)

    assert listener.handle(in_memory_channel.receive()).approved is False
    assert listener.handle(in_memory_channel.receive()).approved is True
    assert recording_handler.calls == 2
