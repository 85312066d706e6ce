# Protobuf message classes for the envelope and verification wire formats
import enum

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

# Mirrors proto/beer_verification.proto; field numbers must not change.
PROTO_PACKAGE = "beer_verification"

_FieldProto = descriptor_pb2.FieldDescriptorProto


class BeerCheckStatus(enum.IntEnum):
    """Wire-level status variant carried by Response.status."""
    OK = 0
    NOT_OK = 1


def _add_field(message_proto, name: str, number: int, field_type: int, type_name: str = None):
    field = message_proto.field.add(
        name=name,
        number=number,
        type=field_type,
        label=_FieldProto.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name
    return field


def build_file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="beer_verification.proto",
        package=PROTO_PACKAGE,
        syntax="proto3",
    )

    envelope = file_proto.message_type.add(name="SomeCustomEnvelope")
    _add_field(envelope, "message_type", 1, _FieldProto.TYPE_STRING)
    _add_field(envelope, "event_data", 2, _FieldProto.TYPE_BYTES)

    response = file_proto.message_type.add(name="Response")
    status_enum = response.enum_type.add(name="BeerCheckStatus")
    for status in BeerCheckStatus:
        status_enum.value.add(name=status.name, number=status.value)
    _add_field(response, "name", 1, _FieldProto.TYPE_STRING)
    _add_field(response, "status", 2, _FieldProto.TYPE_ENUM, f".{PROTO_PACKAGE}.Response.BeerCheckStatus")
    _add_field(response, "beers_count", 3, _FieldProto.TYPE_INT32)
    _add_field(response, "city", 4, _FieldProto.TYPE_STRING)
    _add_field(response, "dob", 5, _FieldProto.TYPE_INT64)

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(build_file_descriptor_proto().SerializeToString())

SomeCustomEnvelope = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.SomeCustomEnvelope")
)
Response = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.Response")
)
