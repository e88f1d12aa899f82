"""Core module - Hex quantity codec and configuration."""

from blockprobe.core.config import DEFAULT_RPC_URL, ProbeConfig
from blockprobe.core.hexutil import decode_quantity, encode_quantity

__all__ = [
    # Config
    "DEFAULT_RPC_URL",
    "ProbeConfig",
    # Hex
    "decode_quantity",
    "encode_quantity",
]
