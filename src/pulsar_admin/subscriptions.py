"""
Subscriptions REST API: subscription management and message peeking.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional, Union
from urllib.parse import quote

from pulsar_admin.models.message import Message, MessageID
from pulsar_admin.models.topic import TopicName, as_topic
from pulsar_admin.protocol.response import read_response
from pulsar_admin.transport.http import HttpClient

logger = logging.getLogger(__name__)

Topic = Union[TopicName, str]


def _sub(subscription: str) -> str:
    return quote(subscription, safe="")


class SubscriptionsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(self, topic: Topic, subscription: str, message_id: Optional[MessageID] = None) -> None:
        """Create a subscription positioned at `message_id` (latest by default)."""
        t = as_topic(topic)
        position = message_id or MessageID.latest()
        await self._http.put(f"/{t.rest_path}/subscription/{_sub(subscription)}", position.to_json())

    async def delete(self, topic: Topic, subscription: str) -> None:
        """Delete a subscription. It must have no active consumers."""
        t = as_topic(topic)
        await self._http.delete(f"/{t.rest_path}/subscription/{_sub(subscription)}")

    async def list(self, topic: Topic) -> list[str]:
        t = as_topic(topic)
        return await self._http.get(f"/{t.rest_path}/subscriptions") or []

    async def reset_cursor_to_message_id(self, topic: Topic, subscription: str, message_id: MessageID) -> None:
        """Reset the cursor to `message_id`, or the nearest earlier one if it does not exist."""
        t = as_topic(topic)
        await self._http.post(f"/{t.rest_path}/subscription/{_sub(subscription)}/resetcursor", message_id.to_json())

    async def reset_cursor_to_timestamp(self, topic: Topic, subscription: str, timestamp_ms: int) -> None:
        """Reset the cursor to the position closest to `timestamp_ms` (ms since epoch)."""
        t = as_topic(topic)
        await self._http.post(f"/{t.rest_path}/subscription/{_sub(subscription)}/resetcursor/{int(timestamp_ms)}")

    async def clear_backlog(self, topic: Topic, subscription: str) -> None:
        """Skip every message in the subscription's backlog."""
        t = as_topic(topic)
        await self._http.post(f"/{t.rest_path}/subscription/{_sub(subscription)}/skip_all")

    async def skip_messages(self, topic: Topic, subscription: str, count: int) -> None:
        t = as_topic(topic)
        await self._http.post(f"/{t.rest_path}/subscription/{_sub(subscription)}/skip/{int(count)}")

    async def expire_messages(self, topic: Topic, subscription: str, expire_seconds: int) -> None:
        """Expire messages older than `expire_seconds` for one subscription."""
        t = as_topic(topic)
        await self._http.post(
            f"/{t.rest_path}/subscription/{_sub(subscription)}/expireMessages/{int(expire_seconds)}"
        )

    async def expire_all_messages(self, topic: Topic, expire_seconds: int) -> None:
        """Expire messages older than `expire_seconds` for every subscription of the topic."""
        t = as_topic(topic)
        await self._http.post(f"/{t.rest_path}/all_subscription/expireMessages/{int(expire_seconds)}")

    async def peek_nth_message(self, topic: Topic, subscription: str, position: int) -> list[Message]:
        """Peek the entry at 1-based backlog `position`; a batched entry yields several messages."""
        t = as_topic(topic)
        path = f"/{t.rest_path}/subscription/{_sub(subscription)}/position/{int(position)}"
        async with self._http.stream(path) as resp:
            return await read_response(str(t), resp)

    async def iter_messages(self, topic: Topic, subscription: str) -> AsyncIterator[Message]:
        """Yield backlog messages lazily, one position request at a time.

        Positions are requested sequentially starting at 1; iteration never
        ends on its own, so stop consuming once you have enough. Running past
        the end of the backlog surfaces the broker's error.
        """
        t = as_topic(topic)
        position = 1
        while True:
            for message in await self.peek_nth_message(t, subscription, position):
                yield message
            position += 1

    async def peek_messages(self, topic: Topic, subscription: str, count: int) -> list[Message]:
        """Peek at least `count` messages from the front of the backlog.

        A batched entry is always returned whole, so the result can hold more
        than `count` messages. At most `count` positions are requested, so
        empty batches can leave the result short. Any failure discards what
        was collected.
        """
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        t = as_topic(topic)
        messages: list[Message] = []
        position = 1
        while len(messages) < count and position <= count:
            messages.extend(await self.peek_nth_message(t, subscription, position))
            position += 1
        logger.debug("peeked %d messages from %s/%s over %d positions", len(messages), t, subscription, position - 1)
        return messages
