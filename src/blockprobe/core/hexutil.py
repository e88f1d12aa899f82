"""Hex quantity encoding used by Ethereum JSON-RPC.

Quantities are ``0x``-prefixed base-16 integers without a fixed width,
e.g. ``"0x5b9ac0"``. Leading zeros are accepted on input and never
produced on output.
"""

from __future__ import annotations

import re

HEX_PREFIX = "0x"

_QUANTITY_RE = re.compile(r"0x[0-9a-fA-F]+")


def decode_quantity(value: object) -> int:
    """Decode a hex quantity string into an integer.

    Args:
        value: Value taken from a JSON-RPC response.

    Returns:
        The decoded non-negative integer.

    Raises:
        ValueError: If value is not a ``0x``-prefixed hex string.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected hex string, got {type(value).__name__}")
    # int(x, 16) alone would also accept whitespace, signs and underscores
    if _QUANTITY_RE.fullmatch(value) is None:
        raise ValueError(f"Invalid hex quantity: {value!r}")
    return int(value[len(HEX_PREFIX) :], 16)


def encode_quantity(number: int) -> str:
    """Encode a non-negative integer as a hex quantity string.

    Raises:
        ValueError: If number is negative.
    """
    if number < 0:
        raise ValueError(f"Quantity must be non-negative, got {number}")
    return f"{HEX_PREFIX}{number:x}"
