"""
sailhouse publish / get / wait - Event commands.
"""

import asyncio
from datetime import datetime
from typing import List, Optional

import typer

from sailhouse.exceptions import SailhouseError, WaitGroupError
from sailhouse.models import PublishOptions, WaitEvent, WaitOptions

from ._common import build_client, fail, parse_json, parse_metadata


def publish_event(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic to publish to."),
    data: str = typer.Argument(..., help="Event payload as JSON."),
    metadata: Optional[List[str]] = typer.Option(
        None,
        "--metadata", "-m",
        help="Metadata entry as KEY=VALUE. Repeatable.",
    ),
    send_at: Optional[datetime] = typer.Option(
        None,
        "--send-at",
        help="Schedule delivery at this time, in UTC.",
    ),
):
    """
    Publish one event and print its id.

    Examples:

        sailhouse publish orders '{"order_id": "ORD-001"}'

        sailhouse publish reminders '{"n": 1}' --send-at 2026-01-01T09:00:00 -m kind=reminder
    """
    payload = parse_json(data)
    options = PublishOptions(
        metadata=parse_metadata(metadata) if metadata else None,
        send_at=send_at,
    )
    client = build_client(ctx)

    async def _publish():
        try:
            return await client.publish(topic, payload, options)
        finally:
            await client.close()

    try:
        result = asyncio.run(_publish())
    except SailhouseError as e:
        fail(str(e))
    typer.echo(result.id)


def get_events(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic name."),
    subscription: str = typer.Argument(..., help="Subscription name."),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Maximum number of events."),
    offset: Optional[int] = typer.Option(None, "--offset", min=0, help="Pagination offset."),
    ack: bool = typer.Option(False, "--ack", help="Acknowledge each event after printing it."),
):
    """
    Pull events and print one JSON object per line.
    """
    client = build_client(ctx)

    async def _get():
        try:
            response = await client.get_events(topic, subscription, limit=limit, offset=offset)
            for event in response.events:
                typer.echo(event.model_dump_json(include={"id", "data"}))
                if ack:
                    await event.ack()
            return len(response.events)
        finally:
            await client.close()

    try:
        count = asyncio.run(_get())
    except SailhouseError as e:
        fail(str(e))
    if count == 0:
        typer.echo("No events.", err=True)


def wait_group(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic for the wait group and its events."),
    data: List[str] = typer.Argument(..., help="Event payloads as JSON, one argument per event."),
    ttl: Optional[str] = typer.Option(None, "--ttl", help="Wait-group time-to-live, e.g. 5m."),
):
    """
    Publish every DATA payload to TOPIC inside one wait group.
    """
    events = [WaitEvent(topic=topic, body=parse_json(item)) for item in data]
    client = build_client(ctx)

    async def _wait():
        try:
            await client.wait(topic, events, WaitOptions(ttl=ttl))
        finally:
            await client.close()

    try:
        asyncio.run(_wait())
    except WaitGroupError as e:
        if e.events_published:
            typer.echo(
                f"⚠️  {e.published} of {len(events)} events were published "
                f"under wait group {e.wait_group_instance_id}",
                err=True,
            )
        fail(str(e))
    except SailhouseError as e:
        fail(str(e))
    typer.echo(f"✅ Published {len(events)} events as one wait group on {topic}")
