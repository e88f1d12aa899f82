"""FastAPI dependencies for API routes."""

from __future__ import annotations

import re
from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from blockprobe.client.rpc import RPCClient
from blockprobe.core.config import ProbeConfig
from blockprobe.server.prober import LivenessProber

_INT_RE = re.compile(r"[+-]?[0-9]+")


def get_config(request: Request) -> ProbeConfig:
    """Get configuration from app state."""
    config: ProbeConfig = request.app.state.config
    return config


def get_prober(request: Request) -> LivenessProber:
    """Get the liveness prober from app state."""
    prober: LivenessProber = request.app.state.prober
    return prober


async def get_rpc_client(
    rpc: str | None = None,
    config: ProbeConfig = Depends(get_config),
) -> AsyncGenerator[RPCClient, None]:
    """Open an RPC client for the endpoint named by the ``rpc`` query parameter.

    The client lives for one request and is closed once the response is sent.
    """
    async with RPCClient(config.resolve_rpc_url(rpc), timeout=config.rpc_timeout) as client:
        yield client


def parse_optional_int(value: str | None) -> int | None:
    """Parse an optional integer query value, treating garbage as absent."""
    if value is None or _INT_RE.fullmatch(value) is None:
        return None
    return int(value)
