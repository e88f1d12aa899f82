"""FastAPI application for the blockprobe server.

This module creates and configures the FastAPI application with:
- GET / liveness probe of a node's block production
- Finality lag and balance checks
- A health endpoint for the prober itself

Usage:
    uvicorn blockprobe.server.app:app_factory --factory --host 0.0.0.0 --port 9999
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from blockprobe import __version__
from blockprobe.core.config import ProbeConfig
from blockprobe.server.api.router import router as api_router
from blockprobe.server.prober import LivenessProber

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(log_path: Path | None = None) -> None:
    """Configure logging to output to stdout and optionally to a file.

    Safe to call more than once: handlers are only attached the first time.

    Args:
        log_path: Optional path to a log file.
    """
    root_logger = logging.getLogger("blockprobe")
    root_logger.setLevel(logging.INFO)
    if root_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    # Stdout handler
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    if log_path is None:
        return

    # File handler
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Also capture uvicorn logs to file
    for uvicorn_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(uvicorn_name).addHandler(file_handler)


def create_app(config: ProbeConfig | None = None, prober: LivenessProber | None = None) -> FastAPI:
    """Create FastAPI application with the given configuration.

    Args:
        config: Service configuration (defaults to ProbeConfig()).
        prober: Liveness prober (defaults to one using config.sample_interval).

    Returns:
        Configured FastAPI application.
    """
    config = config or ProbeConfig()
    prober = prober or LivenessProber(interval=config.sample_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logger.info("=" * 60)
        logger.info("blockprobe %s starting", __version__)
        logger.info("=" * 60)
        logger.info("  Default RPC:     %s", config.default_rpc_url)
        logger.info("  Sample interval: %ss", prober.interval)
        if config.rpc_timeout is None:
            logger.info("  RPC timeout:     none")
        else:
            logger.info("  RPC timeout:     %ss", config.rpc_timeout)
        if config.log_path:
            logger.info("  Logs:            %s", config.log_path.absolute())
        logger.info("=" * 60)

        yield

        logger.info("blockprobe shutting down")

    application = FastAPI(
        title="blockprobe",
        description="Block production liveness checks for Ethereum-style nodes",
        version=__version__,
        lifespan=lifespan,
    )

    application.state.config = config
    application.state.prober = prober

    application.include_router(api_router)

    return application


def app_factory() -> FastAPI:
    """Factory function for uvicorn --factory mode."""
    config = ProbeConfig.from_env()
    setup_logging(config.log_path)
    return create_app(config)
