"""Client module - JSON-RPC access to blockchain nodes."""

from blockprobe.client.rpc import (
    RPCClient,
    RPCEncodingError,
    RPCError,
    RPCProtocolError,
    RPCResponse,
    RPCTransportError,
    get_block_number,
)

__all__ = [
    "RPCClient",
    "RPCEncodingError",
    "RPCError",
    "RPCProtocolError",
    "RPCResponse",
    "RPCTransportError",
    "get_block_number",
]
