"""LP-token discovery for an owner address.

An LPToken<A, B> object carries the amount and the coin pair, but not the
pool it came from. LPPositionIndex remembers which pool minted which LP
token (the application records it from add-liquidity transactions) and
falls back to the pool directory by coin pair.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from swapcore.constants import DEX_MODULE, LP_TOKEN_STRUCT
from swapcore.ledger.client import LedgerClient
from swapcore.ledger.errors import PoolDecodeError
from swapcore.ledger.schema import decode_lp_token
from swapcore.models.types import normalize_object_id
from swapcore.pools.directory import PoolDirectory

logger = structlog.get_logger()


@dataclass(frozen=True)
class LPPosition:
    object_id: str
    amount: int
    coin_type_a: str
    coin_type_b: str
    pool_id: str | None = None


async def find_lp_positions(
    client: LedgerClient,
    owner: str,
    package_id: str,
) -> list[LPPosition]:
    """List the LP tokens of a package held by an owner.

    Objects that cannot be decoded are skipped with a warning; a malformed
    LP token must not hide the owner's other positions.

    Raises:
        LedgerNetworkError: If the ledger could not be read
    """
    struct_type = f"{normalize_object_id(package_id)}::{DEX_MODULE}::{LP_TOKEN_STRUCT}"
    objects = await client.get_owned_objects(owner, struct_type)

    positions: list[LPPosition] = []
    for data in objects:
        try:
            object_id, amount, coin_a, coin_b = decode_lp_token(data)
        except PoolDecodeError as e:
            logger.warning("lp_token_skipped", owner=owner[-8:], error=str(e))
            continue
        positions.append(
            LPPosition(object_id=object_id, amount=amount, coin_type_a=coin_a, coin_type_b=coin_b)
        )
    return positions


class LPPositionIndex:
    """LP token id to pool id mapping, with a directory fallback."""

    def __init__(self, directory: PoolDirectory | None = None) -> None:
        self._directory = directory
        self._pool_by_token: dict[str, str] = {}

    def record(self, lp_token_id: str, pool_id: str) -> None:
        self._pool_by_token[normalize_object_id(lp_token_id)] = normalize_object_id(pool_id)

    def pool_for(self, lp_token_id: str) -> str | None:
        return self._pool_by_token.get(normalize_object_id(lp_token_id))

    def resolve(self, positions: list[LPPosition], network: str) -> list[LPPosition]:
        """Attach pool ids to positions where they are known."""
        resolved = []
        for position in positions:
            pool_id = self.pool_for(position.object_id)
            if pool_id is None and self._directory is not None:
                pool_id = self._directory.lookup(
                    position.coin_type_a, position.coin_type_b, network
                )
            resolved.append(
                LPPosition(
                    object_id=position.object_id,
                    amount=position.amount,
                    coin_type_a=position.coin_type_a,
                    coin_type_b=position.coin_type_b,
                    pool_id=pool_id,
                )
            )
        return resolved
