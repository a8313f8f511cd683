"""Ledger node access: JSON-RPC client, object decoders and errors."""

from swapcore.ledger.client import IotaRpcClient, LedgerClient
from swapcore.ledger.errors import (
    LedgerError,
    LedgerNetworkError,
    LedgerTimeoutError,
    MalformedResponseError,
    PoolDecodeError,
)
from swapcore.ledger.schema import decode_lp_token, decode_pool

__all__ = [
    "IotaRpcClient",
    "LedgerClient",
    "LedgerError",
    "LedgerNetworkError",
    "LedgerTimeoutError",
    "MalformedResponseError",
    "PoolDecodeError",
    "decode_lp_token",
    "decode_pool",
]
