"""
pulsar-admin: Pulsar admin REST client for Python.

Subscription management and message peeking over the broker's
`/admin/v2` HTTP interface, including batched-entry decoding.
"""

from pulsar_admin.client import PulsarAdmin, AsyncPulsarAdmin
from pulsar_admin.subscriptions import SubscriptionsAPI
from pulsar_admin.models.message import Message, MessageID
from pulsar_admin.models.topic import TopicName
from pulsar_admin.errors import (
    PulsarAdminError,
    TransportError,
    InvalidMessageID,
    InvalidTopicName,
    BodyReadError,
    TruncatedStream,
    MalformedMetadata,
    InvalidBatchSize,
)

__version__ = "0.1.0"
__all__ = [
    "PulsarAdmin",
    "AsyncPulsarAdmin",
    "SubscriptionsAPI",
    "Message",
    "MessageID",
    "TopicName",
    "PulsarAdminError",
    "TransportError",
    "InvalidMessageID",
    "InvalidTopicName",
    "BodyReadError",
    "TruncatedStream",
    "MalformedMetadata",
    "InvalidBatchSize",
]
