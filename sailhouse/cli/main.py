"""
Sailhouse CLI - Main entry point.

Commands:
    sailhouse publish <topic> <data>            - Publish an event
    sailhouse get <topic> <subscription>        - Pull (and optionally acknowledge) events
    sailhouse wait <topic> <data>...            - Publish events as one wait group
    sailhouse subscribe <topic> <sub> <url>     - Register a push subscription
"""

import logging
from typing import Optional

import typer

from .commands import events, subscriptions

app = typer.Typer(
    name="sailhouse",
    help="Sailhouse CLI - Publish, pull and coordinate events from the terminal.",
    no_args_is_help=True,
)


@app.callback()
def configure(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="API token. Defaults to SAILHOUSE_TOKEN.",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="API base URL. Defaults to SAILHOUSE_BASE_URL or the public endpoint.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Log every request.",
    ),
):
    """
    Options shared by every command.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"token": token, "base_url": base_url}


# Register commands
app.command(name="publish", help="Publish an event to a topic.")(events.publish_event)
app.command(name="get", help="Pull events from a subscription.")(events.get_events)
app.command(name="wait", help="Publish events as one wait group.")(events.wait_group)
app.command(name="subscribe", help="Register a push subscription.")(subscriptions.register_push)


@app.command()
def version():
    """
    Show the Sailhouse SDK version.
    """
    from sailhouse import __version__
    typer.echo(f"Sailhouse SDK v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
