"""Click commands for running and calling the itemledger service."""

from __future__ import annotations

import asyncio
import sys

import click
import httpx

from itemledger import __version__

_DEFAULT_URL = "http://localhost:7052"


@click.group()
@click.version_option(version=__version__, prog_name="itemledger")
def cli() -> None:
    """Item records and audit history over a key-value ledger."""


@cli.command()
def serve() -> None:
    """Run the REST service (configured via ITEMLEDGER_* variables)."""
    from itemledger.app import main

    asyncio.run(main())


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("function")
@click.argument("args", nargs=-1)
@click.option("--url", default=_DEFAULT_URL, show_default=True, envvar="ITEMLEDGER_URL", help="Service base URL.")
@click.option("--timeout", default=10.0, show_default=True, help="Request timeout in seconds.")
def invoke(function: str, args: tuple[str, ...], url: str, timeout: float) -> None:
    """Invoke FUNCTION with ARGS, e.g. ``itemledger invoke query i1``."""
    try:
        response = httpx.post(
            f"{url.rstrip('/')}/api/v1/invoke",
            json={"function": function, "args": list(args)},
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        click.echo(f"error: request failed: {exc}", err=True)
        sys.exit(1)

    try:
        body = response.json()
    except ValueError:
        click.echo(f"error: unexpected response ({response.status_code}): {response.text[:200]}", err=True)
        sys.exit(1)

    if not response.is_success:
        click.echo(f"error: {body.get('error', 'UNKNOWN')}: {body.get('detail', '')}", err=True)
        sys.exit(1)

    payload = body.get("payload")
    if payload is not None:
        click.echo(payload)
