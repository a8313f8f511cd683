"""Shared type definitions for ledger-facing models.

Coin types are Move type tags such as ``0x2::iota::IOTA``. The ledger
reports addresses both in short form (``0x2``) and fully padded to 32 bytes,
so every comparison goes through normalize_coin_type().
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from swapcore.constants import U64_MAX

_ADDRESS_HEX_LEN = 64
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def validate_u64(value: Any) -> str:
    """Validate that a value is a u64 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as a decimal string

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if int_value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")
    return str(int_value)


# 64-bit unsigned integer as decimal string (validated)
U64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# Ledger object id (32 bytes, hex)
ObjectId = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{1,64}$")]


def normalize_object_id(object_id: str) -> str:
    """Normalize an object id or address to lowercase, 0x-prefixed, 64 hex chars.

    Raises:
        ValueError: If the id is not hexadecimal or longer than 32 bytes
    """
    raw = object_id.strip().lower()
    if raw.startswith("0x"):
        raw = raw[2:]
    if not raw or not _HEX_RE.match(raw) or len(raw) > _ADDRESS_HEX_LEN:
        raise ValueError(f"Invalid object id: {object_id}")
    return "0x" + raw.zfill(_ADDRESS_HEX_LEN)


def normalize_coin_type(coin_type: str) -> str:
    """Normalize a Move coin type so short and long address forms compare equal.

    ``0x2::iota::IOTA`` becomes ``0x000...002::iota::IOTA``. Module and struct
    names are case-sensitive in Move and are kept as-is.

    Raises:
        ValueError: If the coin type is not of the form address::module::Struct
    """
    parts = coin_type.strip().split("::", 2)
    if len(parts) != 3 or not parts[1] or not parts[2]:
        raise ValueError(f"Invalid coin type: {coin_type}")
    address, module, struct = parts
    return f"{normalize_object_id(address)}::{module}::{struct}"


def short_coin(coin_type: str) -> str:
    """Compact form for log lines: module::Struct."""
    parts = coin_type.split("::", 1)
    return parts[1] if len(parts) == 2 else coin_type
