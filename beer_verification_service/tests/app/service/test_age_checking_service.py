import pytest
from unittest.mock import MagicMock, patch

from beer_verification_service.app.service.exceptions import ChannelError
from beer_verification_service.app.service.handlers import LoggingVerificationHandler
from beer_verification_service.app.service.interfaces.message_publisher import AbstractMessagePublisher
from beer_verification_service.app.service.verification_service import AgeCheckingService
from beer_verification_service.app.service.decision import ACCEPTED_VERIFICATION, REJECTED_VERIFICATION
from beer_verification_service.app.service import handlers as handlers_module
from beer_verification_service.infrastructure.codec.envelope import decode_envelope, parse_envelope


@pytest.fixture
def mock_publisher():
    return MagicMock(spec=AbstractMessagePublisher)


def test_should_get_beer_publishes_exactly_one_envelope(mock_publisher):
    service = AgeCheckingService(mock_publisher)

    result = service.should_get_beer(45)

    assert result == ACCEPTED_VERIFICATION
    mock_publisher.publish_message.assert_called_once()
    envelope_bytes = mock_publisher.publish_message.call_args.args[0]
    assert parse_envelope(envelope_bytes).message_type == "foo-message-type"
    assert decode_envelope(envelope_bytes) == ACCEPTED_VERIFICATION


def test_should_get_beer_rejected_branch(mock_publisher):
    service = AgeCheckingService(mock_publisher)

    result = service.should_get_beer(9)

    assert result == REJECTED_VERIFICATION
    assert decode_envelope(mock_publisher.publish_message.call_args.args[0]) == REJECTED_VERIFICATION


@patch('beer_verification_service.app.service.verification_service.verifications_published_counter')
def test_should_get_beer_counts_by_status(mock_counter, mock_publisher):
    service = AgeCheckingService(mock_publisher)

    service.should_get_beer(9)
    service.should_get_beer(21)

    mock_counter.add.assert_any_call(1, {"status": "NOT_OK"})
    mock_counter.add.assert_any_call(1, {"status": "OK"})


@patch('beer_verification_service.app.service.verification_service.verifications_published_counter')
def test_should_get_beer_propagates_channel_error(mock_counter, mock_publisher):
    mock_publisher.publish_message.side_effect = ChannelError("queue full")
    service = AgeCheckingService(mock_publisher)

    with pytest.raises(ChannelError, match="queue full"):
        service.should_get_beer(45)
    mock_counter.add.assert_not_called()


def test_logging_handler_logs_outcome():
    with patch.object(handlers_module.logger, 'info') as mock_logger_info:
        LoggingVerificationHandler().process(REJECTED_VERIFICATION)

    log_message = mock_logger_info.call_args[0][0]
    assert "rejected for sebastian vasquez from new york" in log_message
    assert "0 beers" in log_message
    assert "2011-02-15T15:15:15+00:00" in log_message
