"""Integer math helpers."""

from swapcore.math.integer import ceil_div, integer_sqrt, mul_div

__all__ = ["ceil_div", "integer_sqrt", "mul_div"]
