"""blockprobe - Block production liveness checks for Ethereum-style nodes."""

__version__ = "0.1.0"
