"""Tests for block production checks."""

from __future__ import annotations

import asyncio
import time

import pytest

from blockprobe.client.rpc import RPCTransportError
from blockprobe.server.prober import (
    BalanceStatus,
    LivenessProber,
    SyncResult,
    SyncStatus,
    check_balance,
    check_finality,
)


class FakeSource:
    """Block source returning scripted heights."""

    rpc_url = "http://fake:8545"

    def __init__(
        self,
        heights: list[int | Exception] | None = None,
        tags: dict[str, int] | None = None,
        balance: int = 0,
    ) -> None:
        self._heights = list(heights or [])
        self._tags = tags or {}
        self._balance = balance
        self.calls = 0

    async def get_block_number(self) -> int:
        self.calls += 1
        value = self._heights.pop(0)
        if isinstance(value, Exception):
            raise value
        return value

    async def get_block_by_tag(self, tag: str) -> int:
        return self._tags[tag]

    async def get_balance(self, address: str) -> int:
        return self._balance


class RecordingSleep:
    """Sleep replacement that records requested waits."""

    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


class TestSyncResult:
    """Tests for SyncResult verdicts."""

    def test_advancing_height_is_synced(self) -> None:
        result = SyncResult(first=100, second=101)
        assert result.delta == 1
        assert result.status is SyncStatus.SYNCED
        assert result.block_number_hex == "0x65"

    def test_unchanged_height_is_not_synced(self) -> None:
        result = SyncResult(first=100, second=100)
        assert result.delta == 0
        assert result.status is SyncStatus.NOT_SYNCED
        assert not result.is_synced

    def test_shrinking_height_counts_as_synced(self) -> None:
        """Any nonzero delta is treated as progress, even a negative one."""
        result = SyncResult(first=101, second=100)
        assert result.delta == -1
        assert result.status is SyncStatus.SYNCED


class TestLivenessProber:
    """Tests for LivenessProber.probe."""

    @pytest.mark.asyncio
    async def test_samples_twice_around_one_wait(self) -> None:
        """Should take two samples separated by the configured interval."""
        sleep = RecordingSleep()
        source = FakeSource(heights=[100, 101])

        result = await LivenessProber(interval=30, sleep=sleep).probe(source)

        assert sleep.waits == [30]
        assert source.calls == 2
        assert (result.first, result.second) == (100, 101)
        assert result.is_synced

    @pytest.mark.asyncio
    async def test_first_sample_failure_skips_wait(self) -> None:
        """A failed first sample should end the probe immediately."""
        sleep = RecordingSleep()
        source = FakeSource(heights=[RPCTransportError("refused")])

        with pytest.raises(RPCTransportError):
            await LivenessProber(interval=30, sleep=sleep).probe(source)

        assert sleep.waits == []
        assert source.calls == 1

    @pytest.mark.asyncio
    async def test_second_sample_failure_propagates(self) -> None:
        """A failed second sample should propagate without a verdict."""
        source = FakeSource(heights=[100, RPCTransportError("reset")])

        with pytest.raises(RPCTransportError):
            await LivenessProber(interval=0, sleep=RecordingSleep()).probe(source)

    @pytest.mark.asyncio
    async def test_concurrent_probes_overlap(self) -> None:
        """Waits of concurrent probes should run in parallel, not in sequence."""
        prober = LivenessProber(interval=0.2)
        sources = [FakeSource(heights=[1, 2]) for _ in range(5)]

        start = time.monotonic()
        results = await asyncio.gather(*(prober.probe(s) for s in sources))
        elapsed = time.monotonic() - start

        assert all(r.is_synced for r in results)
        assert elapsed < 0.2 * len(sources) / 2


class TestCheckFinality:
    """Tests for check_finality."""

    @pytest.mark.asyncio
    async def test_healthy_when_below_limit(self) -> None:
        source = FakeSource(tags={"finalized": 100, "latest": 164})

        result = await check_finality(source, max_diff=100)

        assert result.difference == 64
        assert result.is_healthy

    @pytest.mark.asyncio
    async def test_default_limit_fails_any_lag(self) -> None:
        """With the default limit of 0 even an equal pair is unhealthy."""
        result = await check_finality(FakeSource(tags={"finalized": 100, "latest": 100}))

        assert result.difference == 0
        assert not result.is_healthy


class TestCheckBalance:
    """Tests for check_balance."""

    @pytest.mark.asyncio
    async def test_sufficient(self) -> None:
        result = await check_balance(FakeSource(balance=10**18), "0xabc", alert_threshold=10**17)
        assert result.status is BalanceStatus.SUFFICIENT

    @pytest.mark.asyncio
    async def test_equal_to_threshold_is_low(self) -> None:
        result = await check_balance(FakeSource(balance=5), "0xabc", alert_threshold=5)
        assert result.status is BalanceStatus.LOW
        assert not result.is_healthy
