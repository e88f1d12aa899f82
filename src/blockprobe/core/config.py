"""Configuration for the blockprobe service.

Settings come from environment variables with defaults. They are read once
when the application is built, see ``ProbeConfig.from_env``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_PORT = 9999
DEFAULT_HOST = "0.0.0.0"
DEFAULT_SAMPLE_INTERVAL = 30.0


@dataclass
class ProbeConfig:
    """Runtime settings for the prober.

    Attributes:
        default_rpc_url: Node endpoint used when a request does not name one.
        sample_interval: Seconds to wait between the two block height samples.
        rpc_timeout: Outbound request timeout in seconds. None disables the
            timeout, so a hung node holds the request until the transport gives up.
        host: Interface the HTTP server listens on.
        port: Port the HTTP server listens on.
        log_path: Optional log file written in addition to stdout.
    """

    default_rpc_url: str = DEFAULT_RPC_URL
    sample_interval: float = DEFAULT_SAMPLE_INTERVAL
    rpc_timeout: float | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate numeric settings."""
        if self.sample_interval < 0:
            raise ValueError(f"sample_interval must be >= 0, got {self.sample_interval}")
        if self.rpc_timeout is not None and self.rpc_timeout <= 0:
            raise ValueError(f"rpc_timeout must be > 0, got {self.rpc_timeout}")
        if not 0 < self.port < 65536:
            raise ValueError(f"port out of range: {self.port}")

    def resolve_rpc_url(self, rpc_url: str | None) -> str:
        """Return rpc_url, or the default endpoint when it is empty."""
        return rpc_url or self.default_rpc_url

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProbeConfig:
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Returns:
            Parsed configuration.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        timeout = env.get("BLOCKPROBE_RPC_TIMEOUT")
        log_path = env.get("BLOCKPROBE_LOG_PATH")

        return cls(
            default_rpc_url=env.get("BLOCKPROBE_DEFAULT_RPC") or DEFAULT_RPC_URL,
            sample_interval=float(
                env.get("BLOCKPROBE_SAMPLE_INTERVAL", DEFAULT_SAMPLE_INTERVAL)
            ),
            rpc_timeout=float(timeout) if timeout else None,
            host=env.get("BLOCKPROBE_HOST", DEFAULT_HOST),
            port=int(env.get("PORT") or DEFAULT_PORT),
            log_path=Path(log_path) if log_path else None,
        )
