"""
Integration tests for pulsar-admin, run against a real broker.

Requires environment variables:
  PULSAR_ADMIN_URL    (optional) defaults to http://localhost:8080
  PULSAR_TEST_TOPIC   topic with at least 3 published messages

Run: PULSAR_INTEGRATION=1 pytest tests/integration/ -v
"""

import os
import uuid

import pytest

from pulsar_admin import AsyncPulsarAdmin, MessageID

SKIP = not os.environ.get("PULSAR_INTEGRATION")
BASE_URL = os.environ.get("PULSAR_ADMIN_URL", "http://localhost:8080")
TOPIC = os.environ.get("PULSAR_TEST_TOPIC", "persistent://public/default/pulsar-admin-it")

pytestmark = pytest.mark.skipif(SKIP, reason="PULSAR_INTEGRATION not set")


class TestSubscriptionLifecycle:
    @pytest.mark.asyncio
    async def test_create_list_delete(self):
        name = f"it-{uuid.uuid4().hex[:8]}"
        async with AsyncPulsarAdmin(base_url=BASE_URL) as client:
            await client.subscriptions.create(TOPIC, name, MessageID.earliest())
            try:
                assert name in await client.subscriptions.list(TOPIC)
                await client.subscriptions.skip_messages(TOPIC, name, 1)
                await client.subscriptions.reset_cursor_to_timestamp(TOPIC, name, 0)
                await client.subscriptions.clear_backlog(TOPIC, name)
            finally:
                await client.subscriptions.delete(TOPIC, name)


class TestPeek:
    @pytest.mark.asyncio
    async def test_peek_three(self):
        name = f"it-peek-{uuid.uuid4().hex[:8]}"
        async with AsyncPulsarAdmin(base_url=BASE_URL) as client:
            await client.subscriptions.create(TOPIC, name, MessageID.earliest())
            try:
                messages = await client.subscriptions.peek_messages(TOPIC, name, 3)
                assert len(messages) >= 3
                assert all(m.topic == TOPIC for m in messages)
                print(f"  Peeked {len(messages)} messages, first id {messages[0].message_id}")
            finally:
                await client.subscriptions.delete(TOPIC, name)
