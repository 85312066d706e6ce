# Provider side: the producer must publish exactly what the pact describes
import pytest
from unittest.mock import patch

from beer_verification_service.app.service.verification_service import AgeCheckingService
from beer_verification_service.infrastructure.kafka.producer import CONTENT_TYPE_HEADER, KafkaProducerService, MessagePublisher

PROVIDER_STATES = {
    "the patron is 45 years old": 45,
    "the patron is 9 years old": 9,
}


@pytest.mark.parametrize("description", ["an accepted verification message", "a rejected verification message"])
@patch('beer_verification_service.infrastructure.kafka.producer.Producer')
def test_producer_publishes_pact_message(MockConfluentProducer, description, pact_message, pact_contents_for):
    message = pact_message(description)
    age = PROVIDER_STATES[message["providerStates"][0]["name"]]
    publisher = MessagePublisher(KafkaProducerService(bootstrap_servers="fake_server:9092"))

    AgeCheckingService(publisher).should_get_beer(age)

    MockConfluentProducer.return_value.produce.assert_called_once()
    produce_call = MockConfluentProducer.return_value.produce.call_args
    assert pact_contents_for(produce_call.kwargs["value"]) == message["contents"]

    headers = dict(produce_call.kwargs["headers"])
    assert headers[CONTENT_TYPE_HEADER].decode("utf-8") == message["metaData"]["contentType"]
