"""
Peek response interpretation.

Headers are classified in a single pass into either a SingleMessage (body is
the payload) or BatchedMessages (body is a batch of `batch_size` records).
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Union

import httpx
from pydantic import BaseModel

from pulsar_admin.errors import BodyReadError, InvalidBatchSize, InvalidMessageID
from pulsar_admin.models.message import Message, MessageID
from pulsar_admin.protocol.batch import unpack_batch

MESSAGE_ID_HEADER = "X-Pulsar-Message-ID"
PUBLISH_TIME_HEADER = "X-Pulsar-Publish-Time"
BATCH_HEADER = "X-Pulsar-Num-Batch-Message"
PROPERTY_PREFIX = "X-Pulsar-PROPERTY-"

PUBLISH_TIME_PROPERTY = "publish-time"

_BATCH_SIZE = re.compile(r"\d+")

HeadersLike = Union[httpx.Headers, Mapping[str, str], Iterable[tuple[str, str]]]


class SingleMessage(BaseModel):
    message_id: MessageID
    properties: dict[str, str]

    model_config = {"frozen": True}


class BatchedMessages(BaseModel):
    message_id: MessageID
    properties: dict[str, str]
    batch_size: int

    model_config = {"frozen": True}


Classification = Union[SingleMessage, BatchedMessages]


def _header_items(headers: HeadersLike) -> list[tuple[str, str]]:
    # httpx.Headers lowercases keys everywhere except .raw; property names keep their case
    if isinstance(headers, httpx.Headers):
        return [(k.decode(headers.encoding), v.decode(headers.encoding)) for k, v in headers.raw]
    if isinstance(headers, Mapping):
        return list(headers.items())
    return list(headers)


def _parse_batch_size(value: str) -> int:
    if not _BATCH_SIZE.fullmatch(value.strip()):
        raise InvalidBatchSize(f"{BATCH_HEADER} is not a non-negative integer: {value!r}")
    return int(value)


def classify_headers(headers: HeadersLike) -> Classification:
    raw_message_id = None
    batch_size = None
    properties: dict[str, str] = {}
    prefix = PROPERTY_PREFIX.lower()

    for name, value in _header_items(headers):
        lowered = name.lower()
        if lowered == MESSAGE_ID_HEADER.lower():
            raw_message_id = value
        elif lowered == PUBLISH_TIME_HEADER.lower():
            if value:
                properties[PUBLISH_TIME_PROPERTY] = value
        elif lowered == BATCH_HEADER.lower():
            if value:
                batch_size = _parse_batch_size(value)
                properties[BATCH_HEADER] = value
        elif lowered.startswith(prefix) and len(name) > len(PROPERTY_PREFIX):
            properties[name[len(PROPERTY_PREFIX):]] = value

    if raw_message_id is None:
        raise InvalidMessageID(f"response has no {MESSAGE_ID_HEADER} header")
    message_id = MessageID.parse(raw_message_id)

    if batch_size is None:
        return SingleMessage(message_id=message_id, properties=properties)
    return BatchedMessages(message_id=message_id, properties=properties, batch_size=batch_size)


def build_messages(topic: str, classified: Classification, body: bytes) -> list[Message]:
    if isinstance(classified, BatchedMessages):
        return unpack_batch(topic, body, classified.batch_size, classified.message_id, classified.properties)
    return [Message(
        topic=topic,
        message_id=classified.message_id,
        payload=body,
        properties=dict(classified.properties),
    )]


def interpret_response(topic: str, headers: HeadersLike, body: bytes) -> list[Message]:
    """Turn one peek response (headers + full body) into its messages."""
    return build_messages(topic, classify_headers(headers), body)


async def read_response(topic: str, response: httpx.Response) -> list[Message]:
    """Classify a streamed peek response, read its body and decode it.

    The caller owns the response and is responsible for closing it.
    """
    classified = classify_headers(response.headers)
    try:
        body = await response.aread()
    except (httpx.HTTPError, httpx.StreamError) as e:
        raise BodyReadError(f"failed to read peek response body: {e}") from e
    return build_messages(topic, classified, body)
