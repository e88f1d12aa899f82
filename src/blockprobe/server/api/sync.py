"""Liveness probe API route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from blockprobe.client.rpc import RPCClient, RPCError
from blockprobe.server.api.deps import get_prober, get_rpc_client
from blockprobe.server.prober import LivenessProber
from blockprobe.server.schemas import BlockResponse, sync_to_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sync"])

# The probe answers whatever method the caller's health checker uses
PROBE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route(
    "/",
    methods=PROBE_METHODS,
    response_model=BlockResponse,
    responses={500: {"model": BlockResponse, "description": "Not synced, or the node call failed"}},
)
async def check_sync(
    client: RPCClient = Depends(get_rpc_client),
    prober: LivenessProber = Depends(get_prober),
) -> Response:
    """Report whether the node's block height advances over the sample interval.

    Query parameter ``rpc`` names the node endpoint. A failed node call yields
    HTTP 500 with an empty body. A height that did not move yields HTTP 500
    with status ``not_synced``.
    """
    try:
        result = await prober.probe(client)
    except RPCError as e:
        logger.warning("Liveness probe of %s failed: %s", client.rpc_url, e)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    status_code = status.HTTP_200_OK if result.is_synced else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content=sync_to_response(result).model_dump())
