"""
PulsarAdmin / AsyncPulsarAdmin: main admin clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from pulsar_admin.models.message import Message, MessageID
from pulsar_admin.subscriptions import SubscriptionsAPI, Topic
from pulsar_admin.transport.http import DEFAULT_BASE_URL, HttpClient


class AsyncPulsarAdmin:
    """Async Pulsar admin client (primary)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = HttpClient(base_url=base_url, token=token, timeout=timeout, transport=transport)
        self.subscriptions = SubscriptionsAPI(self.http)

    @property
    def base_url(self) -> str:
        return self.http.base_url

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncPulsarAdmin":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class PulsarAdmin:
    """Sync wrapper around AsyncPulsarAdmin. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncPulsarAdmin(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def base_url(self) -> str:
        return self._async.base_url

    def create_subscription(self, topic: Topic, subscription: str, message_id: Optional[MessageID] = None) -> None:
        self._run(self._async.subscriptions.create(topic, subscription, message_id))

    def delete_subscription(self, topic: Topic, subscription: str) -> None:
        self._run(self._async.subscriptions.delete(topic, subscription))

    def list_subscriptions(self, topic: Topic) -> list[str]:
        return self._run(self._async.subscriptions.list(topic))

    def reset_cursor_to_message_id(self, topic: Topic, subscription: str, message_id: MessageID) -> None:
        self._run(self._async.subscriptions.reset_cursor_to_message_id(topic, subscription, message_id))

    def reset_cursor_to_timestamp(self, topic: Topic, subscription: str, timestamp_ms: int) -> None:
        self._run(self._async.subscriptions.reset_cursor_to_timestamp(topic, subscription, timestamp_ms))

    def clear_backlog(self, topic: Topic, subscription: str) -> None:
        self._run(self._async.subscriptions.clear_backlog(topic, subscription))

    def skip_messages(self, topic: Topic, subscription: str, count: int) -> None:
        self._run(self._async.subscriptions.skip_messages(topic, subscription, count))

    def expire_messages(self, topic: Topic, subscription: str, expire_seconds: int) -> None:
        self._run(self._async.subscriptions.expire_messages(topic, subscription, expire_seconds))

    def expire_all_messages(self, topic: Topic, expire_seconds: int) -> None:
        self._run(self._async.subscriptions.expire_all_messages(topic, expire_seconds))

    def peek_messages(self, topic: Topic, subscription: str, count: int) -> list[Message]:
        """Peek at least `count` messages (blocking)."""
        return self._run(self._async.subscriptions.peek_messages(topic, subscription, count))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "PulsarAdmin":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
