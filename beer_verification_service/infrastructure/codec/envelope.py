# Envelope and verification payload codec
import datetime
import logging
from typing import Optional

from google.protobuf import message as protobuf_message
from google.protobuf import unknown_fields
from pydantic import BaseModel, ValidationError

from beer_verification_service.app.config import settings
from beer_verification_service.app.service.exceptions import DecodeError, UnsupportedMessageTypeError
from beer_verification_service.app.service.models import VerificationResult
from .schemas import BeerCheckStatus, Response, SomeCustomEnvelope

logger = logging.getLogger(__name__)


class Envelope(BaseModel):
    message_type: str
    event_data: bytes

    model_config = {
        "frozen": True,
    }


# --- Status variant <-> approved flag ---

def approved_to_status(approved: bool) -> BeerCheckStatus:
    return BeerCheckStatus.OK if approved else BeerCheckStatus.NOT_OK

def status_to_approved(status: int) -> bool:
    try:
        return BeerCheckStatus(status) is BeerCheckStatus.OK
    except ValueError as e:
        raise DecodeError(f"Invalid BeerCheckStatus value: {status}") from e


# --- Wire record <-> application view ---

def to_wire(verification: VerificationResult) -> Response:
    return Response(
        name=verification.name,
        status=approved_to_status(verification.approved).value,
        beers_count=verification.beers_count,
        city=verification.city,
        dob=int(verification.date_of_birth.timestamp()),
    )

def from_wire(response: Response) -> VerificationResult:
    approved = status_to_approved(response.status)
    try:
        date_of_birth = datetime.datetime.fromtimestamp(response.dob, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise DecodeError(f"dob {response.dob} is not a representable epoch second") from e
    try:
        return VerificationResult(
            name=response.name,
            approved=approved,
            beers_count=response.beers_count,
            city=response.city,
            date_of_birth=date_of_birth,
        )
    except ValidationError as e:
        raise DecodeError(f"Decoded verification failed validation: {e}") from e


def _parse(message_cls, data: bytes, description: str):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"{description} must be bytes, got {type(data).__name__}")
    data = bytes(data)
    parsed = message_cls()
    try:
        parsed.ParseFromString(data)
    except protobuf_message.DecodeError as e:
        raise DecodeError(f"Malformed {description}: {e}", payload_size=len(data)) from e
    # Wire-type mismatches and foreign field numbers land in the unknown field set.
    unknown_count = len(unknown_fields.UnknownFieldSet(parsed))
    if unknown_count:
        raise DecodeError(
            f"Malformed {description}: {unknown_count} unexpected wire tag(s)",
            payload_size=len(data),
        )
    return parsed


# --- Verification payload ---

def encode_verification(verification: VerificationResult) -> bytes:
    return to_wire(verification).SerializeToString()

def decode_verification(payload: bytes) -> VerificationResult:
    return from_wire(_parse(Response, payload, "verification payload"))


# --- Envelope ---

def wrap(payload: bytes, message_type: Optional[str] = None) -> bytes:
    envelope = SomeCustomEnvelope(
        message_type=message_type or settings.MESSAGE_TYPE,
        event_data=payload,
    )
    return envelope.SerializeToString()

def parse_envelope(envelope_bytes: bytes) -> Envelope:
    parsed = _parse(SomeCustomEnvelope, envelope_bytes, "envelope")
    return Envelope(message_type=parsed.message_type, event_data=parsed.event_data)

def unwrap(envelope_bytes: bytes, expected_message_type: Optional[str] = None) -> bytes:
    """
    Returns the payload bytes carried by an envelope.
    Args:
        envelope_bytes: Serialized SomeCustomEnvelope.
        expected_message_type: When given, envelopes tagged otherwise are rejected.
    Raises:
        DecodeError: On malformed bytes or an unexpected message type.
    """
    envelope = parse_envelope(envelope_bytes)
    if expected_message_type is not None and not envelope.message_type:
        raise DecodeError("Envelope carries no message type", payload_size=len(envelope_bytes))
    if expected_message_type is not None and envelope.message_type != expected_message_type:
        raise UnsupportedMessageTypeError(envelope.message_type, expected_message_type)
    return envelope.event_data

def encode_envelope(verification: VerificationResult, message_type: Optional[str] = None) -> bytes:
    return wrap(encode_verification(verification), message_type=message_type)

def decode_envelope(envelope_bytes: bytes, expected_message_type: Optional[str] = None) -> VerificationResult:
    payload = unwrap(envelope_bytes, expected_message_type=expected_message_type or settings.MESSAGE_TYPE)
    verification = decode_verification(payload)
    logger.debug(f"Decoded verification for {verification.name} (approved={verification.approved})")
    return verification
