"""Finality lag and balance check API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from blockprobe.client.rpc import RPCClient, RPCError
from blockprobe.server.api.deps import get_rpc_client, parse_optional_int
from blockprobe.server.prober import check_balance, check_finality
from blockprobe.server.schemas import (
    BlockDiffResponse,
    CheckBalanceResponse,
    balance_to_response,
    finality_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checks"])


@router.get(
    "/finalized_latest_diff",
    response_model=BlockDiffResponse,
    responses={500: {"model": BlockDiffResponse, "description": "Lag too large, or the node call failed"}},
)
async def finalized_latest_diff(
    diff: str | None = None,
    client: RPCClient = Depends(get_rpc_client),
) -> Response:
    """Check that the latest block is less than ``diff`` blocks past the finalized one."""
    max_diff = parse_optional_int(diff) or 0
    try:
        result = await check_finality(client, max_diff)
    except RPCError as e:
        logger.warning("Finality check of %s failed: %s", client.rpc_url, e)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(
        "Finality of %s: finalized %d, latest %d, difference %d (limit %d)",
        client.rpc_url,
        result.finalized,
        result.latest,
        result.difference,
        max_diff,
    )
    status_code = status.HTTP_200_OK if result.is_healthy else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content=finality_to_response(result).model_dump())


@router.get(
    "/check_balance",
    response_model=CheckBalanceResponse,
    responses={500: {"model": CheckBalanceResponse, "description": "Balance low, or the node call failed"}},
)
async def check_balance_route(
    address: str = "",
    alert: str | None = None,
    client: RPCClient = Depends(get_rpc_client),
) -> Response:
    """Check that ``address`` holds more than ``alert`` wei."""
    threshold = parse_optional_int(alert)
    if threshold is None or threshold < 0:
        threshold = 0
    try:
        result = await check_balance(client, address, threshold)
    except RPCError as e:
        logger.warning("Balance check of %s on %s failed: %s", address, client.rpc_url, e)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("Balance of %s on %s: %d (alert below %d)", address, client.rpc_url, result.balance, threshold)
    status_code = status.HTTP_200_OK if result.is_healthy else status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content=balance_to_response(result).model_dump())
