"""Base classes for AMM implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from swapcore.models.pool import Pool


@dataclass
class SwapResult:
    """Result of simulating a swap through a pool."""

    amount_in: int
    amount_out: int
    pool_id: str
    coin_in: str
    coin_out: str
    is_a_to_b: bool


class AMM(ABC):
    """Abstract base class for AMM pricing.

    Implementations may add optional parameters (e.g. a fee rate) to the
    reserve-level methods.
    """

    @abstractmethod
    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for a given input."""
        ...

    @abstractmethod
    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for a desired output."""
        ...

    @abstractmethod
    def simulate_swap(self, pool: Pool, coin_in: str, amount_in: int) -> SwapResult:
        """Simulate an exact-input swap through a pool."""
        ...

    @abstractmethod
    def simulate_swap_exact_output(self, pool: Pool, coin_in: str, amount_out: int) -> SwapResult:
        """Simulate a swap that must deliver amount_out."""
        ...
