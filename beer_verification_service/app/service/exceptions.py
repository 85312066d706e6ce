"""
Custom exceptions for the Beer Verification service.
"""

class BaseBeerVerificationError(Exception):
    """Base class for exceptions in this module."""
    pass

class DecodeError(BaseBeerVerificationError):
    """Raised when envelope or verification payload bytes cannot be decoded."""
    def __init__(self, message: str, payload_size: int = 0):
        self.payload_size = payload_size
        super().__init__(message)

class UnsupportedMessageTypeError(DecodeError):
    """Raised when an envelope carries a message type this consumer does not decode."""
    def __init__(self, message_type: str, expected_message_type: str):
        self.message_type = message_type
        self.expected_message_type = expected_message_type
        super().__init__(
            f"Unsupported envelope message type '{message_type}'. "
            f"Expected '{expected_message_type}'."
        )

class ChannelError(BaseBeerVerificationError):
    """Raised when the Kafka channel fails to accept or deliver a message."""
    pass

class ConfigurationError(BaseBeerVerificationError):
    """Raised when a configuration issue is detected."""
    pass
