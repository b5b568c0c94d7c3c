"""Price feed implementations."""

from .base import PriceFeed, Series
from .synthetic import PriceSeriesGenerator

__all__ = [
    "PriceFeed",
    "Series",
    "PriceSeriesGenerator",
]
