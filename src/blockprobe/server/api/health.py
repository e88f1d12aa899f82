"""Health check API route for the prober process itself."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from blockprobe import __version__
from blockprobe.core.config import ProbeConfig
from blockprobe.server.api.deps import get_config, get_prober
from blockprobe.server.prober import LivenessProber
from blockprobe.server.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    config: ProbeConfig = Depends(get_config),
    prober: LivenessProber = Depends(get_prober),
) -> HealthResponse:
    """Report that the prober is serving, without contacting any node."""
    return HealthResponse(
        status="ok",
        version=__version__,
        default_rpc_url=config.default_rpc_url,
        sample_interval=prober.interval,
    )
