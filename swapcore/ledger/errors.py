"""Ledger access errors.

Every failure to get a usable answer from the node is a LedgerNetworkError,
so callers can tell "the node could not be read" apart from "there is no
pool" (which is a None result, not an exception).
"""


class LedgerError(Exception):
    """Base error for ledger access."""


class LedgerNetworkError(LedgerError):
    """The node could not be reached or did not answer usefully. Retryable."""


class LedgerTimeoutError(LedgerNetworkError):
    """The request did not complete before its timeout."""


class MalformedResponseError(LedgerNetworkError):
    """The node answered with something that is not a valid JSON-RPC result."""


class PoolDecodeError(MalformedResponseError):
    """An object does not match the expected simple_dex layout."""
