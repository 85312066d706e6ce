# Message pact shared by the consumer and provider contract tests
import base64
import json
import pathlib

import pytest

PACT_FILE = pathlib.Path(__file__).parent / "pacts" / "pact-beer-api-consumer-pact-beer-api-producer.json"
PROTO_BYTE_STRING = "proto-byte-string"


@pytest.fixture(scope="session")
def beer_api_pact():
    with PACT_FILE.open(encoding="utf-8") as pact_file:
        return json.load(pact_file)


@pytest.fixture
def pact_message(beer_api_pact):
    def _find(description: str) -> dict:
        for message in beer_api_pact["messages"]:
            if message["description"] == description:
                return message
        raise KeyError(f"No pact message described as '{description}'")
    return _find


@pytest.fixture
def envelope_bytes_from_pact():
    def _decode(message: dict) -> bytes:
        return base64.b64decode(message["contents"][PROTO_BYTE_STRING])
    return _decode


@pytest.fixture
def pact_contents_for():
    def _encode(envelope_bytes: bytes) -> dict:
        return {PROTO_BYTE_STRING: base64.b64encode(envelope_bytes).decode("ascii")}
    return _encode
