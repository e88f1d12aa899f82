"""Pydantic schemas for API response models."""

from __future__ import annotations

from pydantic import BaseModel

from blockprobe.core.hexutil import encode_quantity
from blockprobe.server.prober import BalanceResult, FinalityResult, SyncResult

# === Liveness schemas ===


class BlockResponse(BaseModel):
    """Liveness probe result."""

    block_number_hex: str
    block_number_decimal: int
    status: str


def sync_to_response(result: SyncResult) -> BlockResponse:
    """Convert a SyncResult to a response, reporting the second sample."""
    return BlockResponse(
        block_number_hex=result.block_number_hex,
        block_number_decimal=result.second,
        status=result.status.value,
    )


# === Finality schemas ===


class BlockDiffResponse(BaseModel):
    """Finality lag check result."""

    finalized_block: int
    latest_block: int
    difference: int
    finalized_hex: str
    latest_hex: str


def finality_to_response(result: FinalityResult) -> BlockDiffResponse:
    """Convert a FinalityResult to a response."""
    return BlockDiffResponse(
        finalized_block=result.finalized,
        latest_block=result.latest,
        difference=result.difference,
        finalized_hex=encode_quantity(result.finalized),
        latest_hex=encode_quantity(result.latest),
    )


# === Balance schemas ===


class CheckBalanceResponse(BaseModel):
    """Balance check result."""

    address: str
    balance: str
    balance_decimal: int
    alert_threshold: int
    status: str


def balance_to_response(result: BalanceResult) -> CheckBalanceResponse:
    """Convert a BalanceResult to a response."""
    return CheckBalanceResponse(
        address=result.address,
        balance=encode_quantity(result.balance),
        balance_decimal=result.balance,
        alert_threshold=result.alert_threshold,
        status=result.status.value,
    )


# === Health schemas ===


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    default_rpc_url: str
    sample_interval: float
