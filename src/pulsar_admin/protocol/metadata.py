"""
SingleMessageMetadata, the protobuf record that precedes each sub-message
inside a batched entry.

The message classes are built at import time from a descriptor matching
Pulsar's PulsarApi.proto (proto2), registered in a private pool so they never
clash with other Pulsar bindings loaded in the same process.
"""

from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError

from pulsar_admin.errors import MalformedMetadata

_PACKAGE = "pulsar.proto"
_Field = descriptor_pb2.FieldDescriptorProto

# (name, number, type, label, type_name)
_SINGLE_MESSAGE_METADATA_FIELDS = [
    ("properties", 1, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, f".{_PACKAGE}.KeyValue"),
    ("partition_key", 2, _Field.TYPE_STRING, _Field.LABEL_OPTIONAL, None),
    ("payload_size", 3, _Field.TYPE_INT32, _Field.LABEL_REQUIRED, None),
    ("compacted_out", 4, _Field.TYPE_BOOL, _Field.LABEL_OPTIONAL, None),
    ("event_time", 5, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
    ("partition_key_b64_encoded", 6, _Field.TYPE_BOOL, _Field.LABEL_OPTIONAL, None),
    ("ordering_key", 7, _Field.TYPE_BYTES, _Field.LABEL_OPTIONAL, None),
    ("sequence_id", 8, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
    ("null_value", 9, _Field.TYPE_BOOL, _Field.LABEL_OPTIONAL, None),
    ("null_partition_key", 10, _Field.TYPE_BOOL, _Field.LABEL_OPTIONAL, None),
]


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="pulsar_admin/single_message_metadata.proto",
        package=_PACKAGE,
        syntax="proto2",
    )

    key_value = proto.message_type.add(name="KeyValue")
    key_value.field.add(name="key", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_REQUIRED)
    key_value.field.add(name="value", number=2, type=_Field.TYPE_STRING, label=_Field.LABEL_REQUIRED)

    metadata = proto.message_type.add(name="SingleMessageMetadata")
    for name, number, field_type, label, type_name in _SINGLE_MESSAGE_METADATA_FIELDS:
        field = metadata.field.add(name=name, number=number, type=field_type, label=label)
        if type_name:
            field.type_name = type_name
    return proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor().SerializeToString())

KeyValue: Any = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{_PACKAGE}.KeyValue"))
SingleMessageMetadata: Any = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{_PACKAGE}.SingleMessageMetadata")
)


def decode_single_message_metadata(data: bytes) -> Any:
    """Parse one SingleMessageMetadata record, raising MalformedMetadata on any defect."""
    metadata = SingleMessageMetadata()
    try:
        metadata.ParseFromString(data)
    except DecodeError as e:
        raise MalformedMetadata(f"cannot decode single message metadata: {e}") from e
    if not metadata.IsInitialized():
        missing = ", ".join(metadata.FindInitializationErrors())
        raise MalformedMetadata(f"single message metadata is missing required fields: {missing}")
    if metadata.payload_size < 0:
        raise MalformedMetadata(f"negative payload size {metadata.payload_size}")
    return metadata


def encode_single_message_metadata(payload_size: int, properties: dict[str, str]) -> bytes:
    metadata = SingleMessageMetadata(payload_size=payload_size)
    for key, value in properties.items():
        metadata.properties.add(key=key, value=value)
    return metadata.SerializeToString()


def metadata_properties(metadata: Any) -> dict[str, str]:
    return {kv.key: kv.value for kv in metadata.properties}
