from abc import ABC, abstractmethod


class AbstractMessagePublisher(ABC):
    @abstractmethod
    def publish_message(self, envelope_bytes: bytes) -> None:
        """
        Places one envelope onto the outbound channel. Fire-and-forget.

        Args:
            envelope_bytes: The serialized envelope to send.

        Raises:
            ChannelError: If the channel refuses the message.
        """
        pass
