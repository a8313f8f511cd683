"""Data models for pools and quotes."""

from swapcore.models.pool import Pool
from swapcore.models.quote import Quote
from swapcore.models.types import U64, normalize_coin_type, normalize_object_id

__all__ = [
    "Pool",
    "Quote",
    "U64",
    "normalize_coin_type",
    "normalize_object_id",
]
