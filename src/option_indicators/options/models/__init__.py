"""Numeric pricing helpers used by the Greek kernel."""

from .binomial_tree import LATTICE_STEPS, binomial_tree_price, crr_theoretical_price
from .black_scholes import bs_d1, bs_price

__all__ = [
    "LATTICE_STEPS",
    "binomial_tree_price",
    "crr_theoretical_price",
    "bs_d1",
    "bs_price",
]
