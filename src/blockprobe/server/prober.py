"""Block production checks run against a node.

This module provides:
- LivenessProber: samples the block height twice and reports whether it moved
- check_finality: compares the latest and finalized block numbers
- check_balance: compares an address balance against an alert threshold

Checks raise RPCError when a call to the node fails. Turning results and
failures into HTTP responses is left to the API routes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from blockprobe.core.config import DEFAULT_SAMPLE_INTERVAL
from blockprobe.core.hexutil import encode_quantity

logger = logging.getLogger(__name__)


class BlockSource(Protocol):
    """Anything that can report a node's block data (RPCClient in production)."""

    @property
    def rpc_url(self) -> str: ...

    async def get_block_number(self) -> int: ...

    async def get_block_by_tag(self, tag: str) -> int: ...

    async def get_balance(self, address: str) -> int: ...


class SyncStatus(str, Enum):
    """Liveness verdict."""

    SYNCED = "synced"
    NOT_SYNCED = "not_synced"


class BalanceStatus(str, Enum):
    """Balance verdict."""

    SUFFICIENT = "balance_sufficient"
    LOW = "balance_low"


@dataclass
class SyncResult:
    """Outcome of one liveness probe."""

    first: int
    second: int

    @property
    def delta(self) -> int:
        return self.second - self.first

    @property
    def status(self) -> SyncStatus:
        # Any movement counts, including a height that went backwards
        return SyncStatus.SYNCED if self.delta != 0 else SyncStatus.NOT_SYNCED

    @property
    def is_synced(self) -> bool:
        return self.status is SyncStatus.SYNCED

    @property
    def block_number_hex(self) -> str:
        return encode_quantity(self.second)


@dataclass
class FinalityResult:
    """Outcome of a finality lag check."""

    finalized: int
    latest: int
    max_diff: int

    @property
    def difference(self) -> int:
        return self.latest - self.finalized

    @property
    def is_healthy(self) -> bool:
        return self.difference < self.max_diff


@dataclass
class BalanceResult:
    """Outcome of a balance check."""

    address: str
    balance: int
    alert_threshold: int

    @property
    def status(self) -> BalanceStatus:
        if self.balance > self.alert_threshold:
            return BalanceStatus.SUFFICIENT
        return BalanceStatus.LOW

    @property
    def is_healthy(self) -> bool:
        return self.status is BalanceStatus.SUFFICIENT


class LivenessProber:
    """Detects whether a node is importing new blocks.

    The node is sampled, the prober waits ``interval`` seconds, and the node
    is sampled again. The wait suspends only the calling task, so probes for
    concurrent requests overlap.
    """

    def __init__(
        self,
        interval: float = DEFAULT_SAMPLE_INTERVAL,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the prober.

        Args:
            interval: Seconds between the two samples.
            sleep: Coroutine function used for the wait.
        """
        self._interval = interval
        self._sleep = sleep

    @property
    def interval(self) -> float:
        return self._interval

    async def probe(self, source: BlockSource) -> SyncResult:
        """Sample the block height twice and compare.

        Args:
            source: Node to sample. Both samples use the same source.

        Returns:
            The sample pair and its verdict.

        Raises:
            RPCError: If either sample fails. Nothing is retried.
        """
        first = await source.get_block_number()
        logger.debug("First sample from %s: %d, waiting %ss", source.rpc_url, first, self._interval)

        await self._sleep(self._interval)

        second = await source.get_block_number()
        result = SyncResult(first=first, second=second)
        logger.info(
            "Probe of %s: %d -> %d (delta %d), %s",
            source.rpc_url,
            first,
            second,
            result.delta,
            result.status.value,
        )
        return result


async def check_finality(source: BlockSource, max_diff: int = 0) -> FinalityResult:
    """Measure how far the finalized block trails the latest block.

    Args:
        source: Node to query.
        max_diff: The check passes when latest - finalized is below this.

    Raises:
        RPCError: If either block cannot be fetched.
    """
    finalized = await source.get_block_by_tag("finalized")
    latest = await source.get_block_by_tag("latest")
    return FinalityResult(finalized=finalized, latest=latest, max_diff=max_diff)


async def check_balance(source: BlockSource, address: str, alert_threshold: int = 0) -> BalanceResult:
    """Compare an address balance against an alert threshold.

    Raises:
        RPCError: If the balance cannot be fetched.
    """
    balance = await source.get_balance(address)
    return BalanceResult(address=address, balance=balance, alert_threshold=alert_threshold)
