"""
sailhouse subscribe - Register a push subscription.
"""

import asyncio
from typing import Optional

import typer

from sailhouse.admin import AdminClient
from sailhouse.exceptions import SailhouseError
from sailhouse.models import FilterOption

from ._common import build_client, fail


def register_push(
    ctx: typer.Context,
    topic: str = typer.Argument(..., help="Topic name."),
    subscription: str = typer.Argument(..., help="Subscription name."),
    endpoint: str = typer.Argument(..., help="URL events are pushed to."),
    filter_path: Optional[str] = typer.Option(None, "--filter-path", help="Payload path to filter on."),
    filter_value: Optional[str] = typer.Option(None, "--filter-value", help="Value the path must equal."),
):
    """
    Create or update a push subscription and print the outcome.
    """
    if (filter_path is None) != (filter_value is None):
        raise typer.BadParameter("--filter-path and --filter-value must be given together")
    event_filter = FilterOption(path=filter_path, value=filter_value) if filter_path is not None else None
    client = build_client(ctx)

    async def _register():
        try:
            return await AdminClient(client).register_push_subscription(
                topic, subscription, endpoint, filter=event_filter
            )
        finally:
            await client.close()

    try:
        result = asyncio.run(_register())
    except SailhouseError as e:
        fail(str(e))
    typer.echo(result.outcome)
