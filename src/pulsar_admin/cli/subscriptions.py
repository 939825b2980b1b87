"""CLI: pulsar-admin subscriptions list|create|delete|reset-cursor|clear-backlog|skip|expire|expire-all|peek"""

import base64
import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from pulsar_admin.errors import InvalidMessageID
from pulsar_admin.models.message import Message, MessageID

console = Console()


def _get_client():
    from pulsar_admin.cli.main import _get_client
    return _get_client()


def _run(coro):
    from pulsar_admin.cli.main import _run
    return _run(coro)


def _parse_message_id(value: str) -> MessageID:
    try:
        return MessageID.parse(value)
    except InvalidMessageID as e:
        raise click.BadParameter(str(e))


def _payload_text(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return payload.hex()


def _message_json(message: Message) -> dict:
    return {
        "topic": message.topic,
        "message_id": str(message.message_id),
        "properties": message.properties,
        "payload": base64.b64encode(message.payload).decode("ascii"),
    }


@click.group()
def subscriptions():
    """Subscription management."""


@subscriptions.command("list")
@click.argument("topic")
@click.option("--json-output", "--json", is_flag=True)
def subscriptions_list(topic, json_output):
    """List subscriptions of a topic."""

    async def _list():
        async with _get_client() as client:
            names = await client.subscriptions.list(topic)
        if json_output:
            click.echo(json.dumps(names, indent=2))
            return
        table = Table(title=f"Subscriptions ({len(names)} total)")
        table.add_column("Name", style="bold")
        for name in names:
            table.add_row(name)
        console.print(table)

    _run(_list())


@subscriptions.command("create")
@click.argument("topic")
@click.argument("subscription")
@click.option("--message-id", default=None, help="Initial position, ledger:entry[:partition[:batch]]")
@click.option("--earliest", is_flag=True, help="Start from the earliest message")
def subscriptions_create(topic, subscription, message_id: Optional[str], earliest: bool):
    """Create a subscription (at the latest message by default)."""
    position = None
    if message_id:
        position = _parse_message_id(message_id)
    elif earliest:
        position = MessageID.earliest()

    async def _create():
        async with _get_client() as client:
            with console.status("Creating subscription..."):
                await client.subscriptions.create(topic, subscription, position)
        console.print(f"[green]Subscription {subscription} created on {topic}.[/green]")

    _run(_create())


@subscriptions.command("delete")
@click.argument("topic")
@click.argument("subscription")
def subscriptions_delete(topic, subscription):
    """Delete a subscription."""

    async def _delete():
        async with _get_client() as client:
            with console.status("Deleting..."):
                await client.subscriptions.delete(topic, subscription)
        console.print(f"[green]Subscription {subscription} deleted.[/green]")

    _run(_delete())


@subscriptions.command("reset-cursor")
@click.argument("topic")
@click.argument("subscription")
@click.option("--message-id", default=None, help="Target message, ledger:entry[:partition[:batch]]")
@click.option("--time", "timestamp", default=None, type=int, help="Target time in ms since epoch")
def subscriptions_reset_cursor(topic, subscription, message_id: Optional[str], timestamp: Optional[int]):
    """Reset the cursor to a message ID or a timestamp."""
    if (message_id is None) == (timestamp is None):
        raise click.UsageError("pass exactly one of --message-id or --time")
    position = _parse_message_id(message_id) if message_id else None

    async def _reset():
        async with _get_client() as client:
            if position is not None:
                await client.subscriptions.reset_cursor_to_message_id(topic, subscription, position)
            else:
                await client.subscriptions.reset_cursor_to_timestamp(topic, subscription, timestamp)
        console.print(f"[green]Cursor of {subscription} reset.[/green]")

    _run(_reset())


@subscriptions.command("clear-backlog")
@click.argument("topic")
@click.argument("subscription")
def subscriptions_clear_backlog(topic, subscription):
    """Skip all messages in the backlog."""

    async def _clear():
        async with _get_client() as client:
            await client.subscriptions.clear_backlog(topic, subscription)
        console.print(f"[green]Backlog of {subscription} cleared.[/green]")

    _run(_clear())


@subscriptions.command("skip")
@click.argument("topic")
@click.argument("subscription")
@click.argument("count", type=click.IntRange(min=1))
def subscriptions_skip(topic, subscription, count):
    """Skip COUNT messages."""

    async def _skip():
        async with _get_client() as client:
            await client.subscriptions.skip_messages(topic, subscription, count)
        console.print(f"[green]Skipped {count} messages on {subscription}.[/green]")

    _run(_skip())


@subscriptions.command("expire")
@click.argument("topic")
@click.argument("subscription")
@click.argument("seconds", type=click.IntRange(min=0))
def subscriptions_expire(topic, subscription, seconds):
    """Expire messages older than SECONDS."""

    async def _expire():
        async with _get_client() as client:
            await client.subscriptions.expire_messages(topic, subscription, seconds)
        console.print(f"[green]Expired messages older than {seconds}s on {subscription}.[/green]")

    _run(_expire())


@subscriptions.command("expire-all")
@click.argument("topic")
@click.argument("seconds", type=click.IntRange(min=0))
def subscriptions_expire_all(topic, seconds):
    """Expire messages older than SECONDS on every subscription."""

    async def _expire_all():
        async with _get_client() as client:
            await client.subscriptions.expire_all_messages(topic, seconds)
        console.print(f"[green]Expired messages older than {seconds}s on all subscriptions.[/green]")

    _run(_expire_all())


@subscriptions.command("peek")
@click.argument("topic")
@click.argument("subscription")
@click.option("-n", "--count", default=1, type=click.IntRange(min=1))
@click.option("--json-output", "--json", is_flag=True)
def subscriptions_peek(topic, subscription, count, json_output):
    """Peek messages without consuming them."""

    async def _peek():
        async with _get_client() as client:
            with console.status("Peeking..."):
                messages = await client.subscriptions.peek_messages(topic, subscription, count)
        if json_output:
            click.echo(json.dumps([_message_json(m) for m in messages], indent=2))
            return
        table = Table(title=f"Messages ({len(messages)})")
        table.add_column("Message ID", style="bold")
        table.add_column("Properties")
        table.add_column("Payload")
        for m in messages:
            props = ", ".join(f"{k}={v}" for k, v in sorted(m.properties.items()))
            table.add_row(str(m.message_id), props, _payload_text(m.payload))
        console.print(table)

    _run(_peek())
