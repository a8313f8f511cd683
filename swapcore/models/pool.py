"""Snapshot of an on-chain simple_dex liquidity pool."""

from __future__ import annotations

from dataclasses import dataclass

from swapcore.constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR
from swapcore.models.types import normalize_coin_type


def _check_amount(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Pool {name} must be a non-negative int, got {value!r}")


@dataclass(frozen=True)
class Pool:
    """A constant-product pool for an ordered coin pair.

    The (coin_type_a, coin_type_b) order is the one fixed by the Move type
    ``Pool<A, B>`` at creation. Callers that ask for a pair in the other
    order get the same snapshot and must use get_reserves() / is_a_to_b()
    to orient their swap.

    Snapshots are read-only: reserves only change on chain, and a fresh
    snapshot is fetched through the registry.
    """

    pool_id: str
    coin_type_a: str
    coin_type_b: str
    reserve_a: int
    reserve_b: int
    lp_supply: int
    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    # Accumulated protocol counters, informational only. None when the
    # object does not carry them.
    fees_a: int | None = None
    fees_b: int | None = None
    total_volume_a: int | None = None
    total_volume_b: int | None = None

    def __post_init__(self) -> None:
        for name in ("reserve_a", "reserve_b", "lp_supply"):
            _check_amount(name, getattr(self, name))
        for name in ("fees_a", "fees_b", "total_volume_a", "total_volume_b"):
            value = getattr(self, name)
            if value is not None:
                _check_amount(name, value)
        if (self.reserve_a == 0) != (self.reserve_b == 0):
            raise ValueError(
                f"Pool {self.pool_id} has one empty side: "
                f"reserve_a={self.reserve_a}, reserve_b={self.reserve_b}"
            )
        if not 0 <= self.fee_numerator < self.fee_denominator:
            raise ValueError(
                f"Invalid fee {self.fee_numerator}/{self.fee_denominator} for pool {self.pool_id}"
            )

    @property
    def is_empty(self) -> bool:
        """True if the pool holds no liquidity."""
        return self.reserve_a == 0

    @property
    def k(self) -> int:
        """The constant-product invariant reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    @property
    def pair_key(self) -> frozenset[str]:
        """Unordered, normalized coin pair."""
        return frozenset(
            [normalize_coin_type(self.coin_type_a), normalize_coin_type(self.coin_type_b)]
        )

    def has_coin(self, coin_type: str) -> bool:
        return normalize_coin_type(coin_type) in self.pair_key

    def is_a_to_b(self, coin_in: str) -> bool:
        """Swap direction for an input coin.

        Raises:
            ValueError: If coin_in is not one of the pool's coins
        """
        coin_norm = normalize_coin_type(coin_in)
        if coin_norm == normalize_coin_type(self.coin_type_a):
            return True
        if coin_norm == normalize_coin_type(self.coin_type_b):
            return False
        raise ValueError(f"Coin {coin_in} not in pool {self.pool_id}")

    def get_reserves(self, coin_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if self.is_a_to_b(coin_in):
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def get_coin_out(self, coin_in: str) -> str:
        """Get the output coin for a given input coin."""
        return self.coin_type_b if self.is_a_to_b(coin_in) else self.coin_type_a
