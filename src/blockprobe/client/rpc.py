"""JSON-RPC client for Ethereum-style nodes.

This module provides:
- RPCClient: async client issuing single JSON-RPC calls to one endpoint
- Block height, block-by-tag and balance queries
- An error hierarchy separating transport, protocol and encoding failures
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

import httpx

from blockprobe.core.config import DEFAULT_RPC_URL
from blockprobe.core.hexutil import decode_quantity

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class RPCError(Exception):
    """Base exception for JSON-RPC call failures."""

    def __init__(self, message: str, method: str | None = None) -> None:
        super().__init__(message)
        self.method = method


class RPCTransportError(RPCError):
    """Endpoint malformed or unreachable, connection reset or read failure."""


class RPCProtocolError(RPCError):
    """Response is not a usable JSON-RPC envelope."""


class RPCEncodingError(RPCError):
    """Result is not a valid hex quantity."""


@dataclass
class RPCResponse:
    """JSON-RPC response envelope."""

    jsonrpc: str
    id: int | None
    result: Any

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCResponse:
        """Create from a decoded response body."""
        return cls(
            jsonrpc=data.get("jsonrpc", ""),
            id=data.get("id"),
            result=data["result"],
        )


def new_request_id() -> int:
    """Return an id used to correlate a call with its log lines."""
    return random.randint(1, 100)


class RPCClient:
    """Async JSON-RPC client bound to one node endpoint."""

    def __init__(self, rpc_url: str | None = None, timeout: float | None = None) -> None:
        """Initialize the RPC client.

        Args:
            rpc_url: Node endpoint. Empty or None selects the local default.
            timeout: Request timeout in seconds. None waits indefinitely.
        """
        self._rpc_url = rpc_url or DEFAULT_RPC_URL
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def rpc_url(self) -> str:
        """Endpoint every call is posted to."""
        return self._rpc_url

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> RPCClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def call(self, method: str, params: list[Any] | None = None) -> RPCResponse:
        """Perform one JSON-RPC call.

        Args:
            method: JSON-RPC method name.
            params: Positional parameters (empty list when omitted).

        Returns:
            Decoded response envelope.

        Raises:
            RPCTransportError: If the request could not be completed.
            RPCProtocolError: If the response is not a successful JSON-RPC reply.
        """
        request_id = new_request_id()
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": params if params is not None else [],
            "id": request_id,
        }

        try:
            response = await self._client.post(self._rpc_url, json=payload)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning("ID %d %s: request to %s failed: %s", request_id, method, self._rpc_url, e)
            raise RPCTransportError(f"Request to {self._rpc_url} failed: {e}", method) from e

        if not response.is_success:
            logger.warning("ID %d %s: HTTP %d from %s", request_id, method, response.status_code, self._rpc_url)
            raise RPCProtocolError(f"HTTP {response.status_code} from {self._rpc_url}", method)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("ID %d %s: response is not JSON: %s", request_id, method, e)
            raise RPCProtocolError(f"Response is not JSON: {e}", method) from e

        if not isinstance(data, dict):
            raise RPCProtocolError("Response is not a JSON object", method)
        if data.get("error") is not None:
            logger.warning("ID %d %s: node returned error %s", request_id, method, data["error"])
            raise RPCProtocolError(f"Node returned error: {data['error']}", method)
        if "result" not in data:
            raise RPCProtocolError("Response has no result", method)

        envelope = RPCResponse.from_dict(data)
        logger.info("ID %d %s result: %s", request_id, method, envelope.result)
        return envelope

    async def get_block_number(self) -> int:
        """Get the node's current block height.

        Returns:
            Block height decoded from the hex result.

        Raises:
            RPCError: On transport, protocol or encoding failure.
        """
        envelope = await self.call("eth_blockNumber")
        block_number = _decode(envelope.result, "eth_blockNumber")
        logger.info("ID %s Block Number (Decimal): %d", envelope.id, block_number)
        return block_number

    async def get_block_by_tag(self, tag: str) -> int:
        """Get the number of the block selected by a tag.

        Args:
            tag: Block tag such as "latest" or "finalized".

        Returns:
            Block number of the tagged block.

        Raises:
            RPCProtocolError: If the node has no block for the tag.
            RPCError: On any other call failure.
        """
        method = "eth_getBlockByNumber"
        envelope = await self.call(method, [tag, False])
        block = envelope.result
        if not isinstance(block, dict) or not isinstance(block.get("number"), str):
            raise RPCProtocolError(f"Block {tag!r} not found or invalid response", method)
        block_number = _decode(block["number"], method)
        logger.info("ID %s Block %s Number (Decimal): %d", envelope.id, tag, block_number)
        return block_number

    async def get_balance(self, address: str) -> int:
        """Get the latest balance of an address, in wei.

        Raises:
            RPCError: On transport, protocol or encoding failure.
        """
        method = "eth_getBalance"
        envelope = await self.call(method, [address, "latest"])
        return _decode(envelope.result, method)


def _decode(value: Any, method: str) -> int:
    """Decode a hex quantity, mapping failures to RPCEncodingError."""
    try:
        return decode_quantity(value)
    except ValueError as e:
        logger.warning("%s: %s", method, e)
        raise RPCEncodingError(str(e), method) from e


async def get_block_number(rpc_url: str | None = None, timeout: float | None = None) -> int:
    """Fetch the block height of a node with a one-shot client.

    Args:
        rpc_url: Node endpoint. Empty or None selects the local default.
        timeout: Request timeout in seconds. None waits indefinitely.

    Returns:
        Current block height.
    """
    async with RPCClient(rpc_url, timeout=timeout) as client:
        return await client.get_block_number()
