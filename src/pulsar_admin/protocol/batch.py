"""
Batched entry codec.

A batch body is `batch_size` consecutive records, each laid out as

    [u32 big-endian metadata length][SingleMessageMetadata][payload]

where the payload length comes from the metadata's `payload_size`.
"""

import logging
import struct
from typing import Any, Iterable

from pulsar_admin.errors import TruncatedStream
from pulsar_admin.models.message import Message, MessageID
from pulsar_admin.protocol.metadata import (
    decode_single_message_metadata,
    encode_single_message_metadata,
    metadata_properties,
)

logger = logging.getLogger(__name__)

_META_SIZE = struct.Struct(">I")


def _take(buffer: bytes, offset: int, size: int, what: str) -> bytes:
    available = len(buffer) - offset
    if size > available:
        raise TruncatedStream(
            f"truncated batch: {what} needs {size} bytes at offset {offset}, {available} left",
            details={"offset": offset, "needed": size, "available": available},
        )
    return buffer[offset:offset + size]


def read_single_message(buffer: bytes, offset: int = 0) -> tuple[Any, bytes, int]:
    """Decode one record starting at `offset`.

    Returns (metadata, payload, offset past the record).
    """
    meta_size = _META_SIZE.unpack(_take(buffer, offset, _META_SIZE.size, "metadata length"))[0]
    offset += _META_SIZE.size

    metadata = decode_single_message_metadata(_take(buffer, offset, meta_size, "metadata"))
    offset += meta_size

    payload = _take(buffer, offset, metadata.payload_size, "payload")
    offset += metadata.payload_size
    return metadata, payload, offset


def unpack_batch(
    topic: str,
    data: bytes,
    batch_size: int,
    message_id: MessageID,
    properties: dict[str, str],
) -> list[Message]:
    """Split a batch body into `batch_size` messages sharing `message_id`'s coordinate.

    Each message gets the shared properties overlaid by its own; the first
    decode error aborts the whole batch.
    """
    messages: list[Message] = []
    offset = 0
    for index in range(batch_size):
        metadata, payload, offset = read_single_message(data, offset)
        messages.append(Message(
            topic=topic,
            message_id=message_id.with_batch_index(index),
            payload=payload,
            properties={**properties, **metadata_properties(metadata)},
        ))

    if offset < len(data):
        logger.debug("ignoring %d trailing bytes after batch of %d", len(data) - offset, batch_size)
    logger.debug("unpacked batch of %d messages at %s", batch_size, message_id)
    return messages


def pack_single_message(payload: bytes, properties: dict[str, str]) -> bytes:
    meta = encode_single_message_metadata(len(payload), properties)
    return _META_SIZE.pack(len(meta)) + meta + payload


def pack_batch(entries: Iterable[tuple[bytes, dict[str, str]]]) -> bytes:
    """Encode (payload, properties) pairs as a batch body."""
    return b"".join(pack_single_message(payload, properties) for payload, properties in entries)
