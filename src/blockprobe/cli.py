"""Command-line interface for blockprobe.

Commands:
- serve: Run the HTTP probe server
"""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from blockprobe.core.config import DEFAULT_HOST, DEFAULT_PORT, ProbeConfig


@click.group()
@click.version_option(package_name="blockprobe")
def cli() -> None:
    """blockprobe - Block production liveness checks for Ethereum-style nodes."""


@cli.command()
@click.option(
    "--host",
    default=None,
    help=f"Interface to listen on (default: BLOCKPROBE_HOST or {DEFAULT_HOST}).",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help=f"Port to listen on (default: PORT or {DEFAULT_PORT}).",
)
def serve(host: str | None, port: int | None) -> None:
    """Run the probe server.

    Examples:

        # Listen on the port named by PORT, or 9999
        blockprobe serve

        # Listen on a specific port
        blockprobe serve --port 8080
    """
    import uvicorn

    from blockprobe.server.app import create_app, setup_logging

    try:
        config = ProbeConfig.from_env()
        overrides = {name: value for name, value in (("host", host), ("port", port)) if value is not None}
        config = replace(config, **overrides)
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)

    setup_logging(config.log_path)
    click.echo(f"Starting server on port {config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = ["cli", "main"]
