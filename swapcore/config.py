"""Runtime configuration.

Defaults live in frozen dataclasses; load_settings() applies environment
overrides:

- SWAPCORE_NETWORKS: comma-separated networks to serve (default: testnet)
- SWAPCORE_RPC_URL_<NETWORK>: RPC URL override per network
- SWAPCORE_KNOWN_POOLS_<NETWORK>: pools to seed the directory with, as
  "pool_id=coin_a,coin_b" entries separated by ";"
- SWAPCORE_POOL_CACHE_TTL: pool cache time-to-live in seconds (default: 10)
- SWAPCORE_FETCH_TIMEOUT: ledger fetch timeout in seconds (default: 8)
- SWAPCORE_HOST / SWAPCORE_PORT / SWAPCORE_DEBUG: quote service binding
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

ZERO_PACKAGE = "0x0"


@dataclass(frozen=True)
class NetworkConfig:
    """Ledger endpoints and deployment for one network.

    Attributes:
        name: Network name used in lookups and URLs
        rpc_url: JSON-RPC endpoint of a full node
        package_id: simple_dex package id, "0x0" while not deployed
        known_pools: Pool ids for coin pairs known ahead of time,
            keyed by (coin_type_a, coin_type_b) in either order
    """

    name: str
    rpc_url: str
    package_id: str = ZERO_PACKAGE
    known_pools: Mapping[tuple[str, str], str] = field(default_factory=dict)

    @property
    def is_deployed(self) -> bool:
        return self.package_id != ZERO_PACKAGE


@dataclass(frozen=True)
class RegistryConfig:
    """Pool registry behaviour.

    Attributes:
        cache_ttl: Seconds a fetched pool snapshot stays valid
        fetch_timeout: Seconds allowed for one ledger fetch
    """

    cache_ttl: float = 10.0
    fetch_timeout: float = 8.0


@dataclass(frozen=True)
class Settings:
    networks: Mapping[str, NetworkConfig]
    registry: RegistryConfig = RegistryConfig()
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False


DEFAULT_NETWORKS: dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(name="mainnet", rpc_url="https://api.mainnet.iota.cafe"),
    "testnet": NetworkConfig(
        name="testnet",
        rpc_url="https://api.testnet.iota.cafe",
        package_id="0xd84fe8b6622ff910dc5e097c06de5ac31055c169453435d162ff999c8fb65202",
    ),
    "devnet": NetworkConfig(name="devnet", rpc_url="https://api.devnet.iota.cafe"),
}

DEFAULT_REGISTRY_CONFIG = RegistryConfig()


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number, got {raw!r}") from err
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _parse_known_pools(name: str, raw: str) -> dict[tuple[str, str], str]:
    pools: dict[tuple[str, str], str] = {}
    for entry in raw.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        pool_id, sep, coins = entry.partition("=")
        coin_types = [c.strip() for c in coins.split(",")]
        if not sep or not pool_id.strip() or len(coin_types) != 2 or not all(coin_types):
            raise ValueError(f"{name} entries must look like pool_id=coin_a,coin_b, got {entry!r}")
        pools[(coin_types[0], coin_types[1])] = pool_id.strip()
    return pools


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from defaults plus environment overrides.

    Raises:
        ValueError: On unknown networks, malformed numeric values or
            malformed known-pool entries
    """
    env = os.environ if env is None else env

    names = [n.strip() for n in env.get("SWAPCORE_NETWORKS", "testnet").split(",") if n.strip()]
    networks: dict[str, NetworkConfig] = {}
    for name in names:
        if name not in DEFAULT_NETWORKS:
            raise ValueError(f"Unknown network {name!r}, expected one of {sorted(DEFAULT_NETWORKS)}")
        network = DEFAULT_NETWORKS[name]
        rpc_override = env.get(f"SWAPCORE_RPC_URL_{name.upper()}")
        if rpc_override:
            network = replace(network, rpc_url=rpc_override)
        pools_var = f"SWAPCORE_KNOWN_POOLS_{name.upper()}"
        if env.get(pools_var):
            known_pools = {**network.known_pools, **_parse_known_pools(pools_var, env[pools_var])}
            network = replace(network, known_pools=known_pools)
        networks[name] = network

    registry = RegistryConfig(
        cache_ttl=_env_float(env, "SWAPCORE_POOL_CACHE_TTL", DEFAULT_REGISTRY_CONFIG.cache_ttl),
        fetch_timeout=_env_float(
            env, "SWAPCORE_FETCH_TIMEOUT", DEFAULT_REGISTRY_CONFIG.fetch_timeout
        ),
    )

    return Settings(
        networks=networks,
        registry=registry,
        host=env.get("SWAPCORE_HOST", "0.0.0.0"),
        port=int(env.get("SWAPCORE_PORT", "8000")),
        debug=env.get("SWAPCORE_DEBUG", "false").lower() in ("true", "1", "yes"),
    )
