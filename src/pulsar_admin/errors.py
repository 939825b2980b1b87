"""
Pulsar admin error types. Every failure carries a stable `code`.
"""

from typing import Any, Optional


class PulsarAdminError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(PulsarAdminError):
    """Connection failure or non-2xx status from the admin endpoint."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("transport_error", message, details)


class InvalidMessageID(PulsarAdminError):
    def __init__(self, message: str):
        super().__init__("invalid_message_id", message)


class InvalidTopicName(PulsarAdminError):
    def __init__(self, message: str):
        super().__init__("invalid_topic_name", message)


class BodyReadError(PulsarAdminError):
    def __init__(self, message: str):
        super().__init__("body_read_error", message)


class TruncatedStream(PulsarAdminError):
    """Fewer bytes left in a batch buffer than a record declares."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("truncated_stream", message, details)


class MalformedMetadata(PulsarAdminError):
    def __init__(self, message: str):
        super().__init__("malformed_metadata", message)


class InvalidBatchSize(PulsarAdminError):
    def __init__(self, message: str):
        super().__init__("invalid_batch_size", message)
