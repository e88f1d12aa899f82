"""Tests for service configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from blockprobe.core.config import DEFAULT_RPC_URL, ProbeConfig


class TestProbeConfig:
    """Tests for ProbeConfig class."""

    def test_defaults(self) -> None:
        """Should default to the local node, a 30s window and no timeout."""
        config = ProbeConfig()
        assert config.default_rpc_url == "http://127.0.0.1:8545"
        assert config.sample_interval == 30.0
        assert config.rpc_timeout is None
        assert config.port == 9999
        assert config.log_path is None

    def test_resolve_rpc_url(self) -> None:
        """Empty or missing endpoints should fall back to the default."""
        config = ProbeConfig()
        assert config.resolve_rpc_url(None) == DEFAULT_RPC_URL
        assert config.resolve_rpc_url("") == DEFAULT_RPC_URL
        assert config.resolve_rpc_url("http://node:8545") == "http://node:8545"

    def test_rejects_negative_interval(self) -> None:
        """Should reject a negative sample interval."""
        with pytest.raises(ValueError):
            ProbeConfig(sample_interval=-1)

    def test_rejects_non_positive_timeout(self) -> None:
        """Should reject a zero timeout."""
        with pytest.raises(ValueError):
            ProbeConfig(rpc_timeout=0)

    def test_rejects_bad_port(self) -> None:
        """Should reject ports outside the TCP range."""
        with pytest.raises(ValueError):
            ProbeConfig(port=70000)


class TestFromEnv:
    """Tests for ProbeConfig.from_env."""

    def test_empty_environment(self) -> None:
        """Should use defaults when nothing is set."""
        assert ProbeConfig.from_env({}) == ProbeConfig()

    def test_empty_port_uses_default(self) -> None:
        """An empty PORT should behave like an unset one."""
        assert ProbeConfig.from_env({"PORT": ""}).port == 9999

    def test_reads_all_variables(self, tmp_path: Path) -> None:
        """Should read every supported variable."""
        config = ProbeConfig.from_env(
            {
                "PORT": "8080",
                "BLOCKPROBE_HOST": "127.0.0.1",
                "BLOCKPROBE_DEFAULT_RPC": "http://geth:8545",
                "BLOCKPROBE_SAMPLE_INTERVAL": "12.5",
                "BLOCKPROBE_RPC_TIMEOUT": "10",
                "BLOCKPROBE_LOG_PATH": str(tmp_path / "probe.log"),
            }
        )
        assert config.port == 8080
        assert config.host == "127.0.0.1"
        assert config.default_rpc_url == "http://geth:8545"
        assert config.sample_interval == 12.5
        assert config.rpc_timeout == 10.0
        assert config.log_path == tmp_path / "probe.log"

    def test_invalid_number(self) -> None:
        """Should raise on unparsable numbers."""
        with pytest.raises(ValueError):
            ProbeConfig.from_env({"PORT": "not-a-port"})
