"""
Helpers shared by the CLI commands.
"""

import json
from typing import Any, Dict, List, NoReturn

import typer

from sailhouse.client import SailhouseClient
from sailhouse.config import Settings
from sailhouse.exceptions import ConfigurationError


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    typer.echo(f"❌ Error: {message}", err=True)
    raise typer.Exit(1)


def build_client(ctx: typer.Context) -> SailhouseClient:
    """Build a client from the environment plus any --token/--base-url overrides."""
    overrides = {key: value for key, value in (ctx.obj or {}).items() if value is not None}
    try:
        return SailhouseClient.from_settings(Settings(**overrides))
    except ConfigurationError as e:
        fail(str(e))


def parse_json(value: str, param: str = "DATA") -> Any:
    """Parse a JSON command-line argument."""
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"not valid JSON: {e}", param_hint=param)


def parse_metadata(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated KEY=VALUE options into a metadata dict."""
    metadata: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--metadata")
        metadata[key] = value
    return metadata
