"""Synthetic random-walk price feed.

Two step rules are used:

    initialize:  p[i] = p[i-1] + (u - bias) * base * step_pct
    advance:     p[n] = p[n-1] + (u - 0.5) * step_range

    where u is uniform in [0, 1). Every price is rounded to cents and clamped
    at zero. The initial walk scales with the base price (about +/-2% per step
    with a slight upward drift); live ticks move by a fixed absolute amount.
"""

import logging
from decimal import Decimal
from typing import Optional

import numpy as np

from ..config import DashboardConfig
from ..models import PricePoint, clamp_non_negative, round_money
from .base import PriceFeed, Series

logger = logging.getLogger(__name__)


class PriceSeriesGenerator(PriceFeed):
    """Generates and extends a bounded synthetic price/volume series."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def initialize(
        self, point_count: int, base_price: Decimal | None = None
    ) -> Series:
        base = self.config.BASE_PRICE if base_price is None else base_price
        if point_count < 0:
            raise ValueError(f"Point count must be non-negative, got {point_count}")
        if base < 0:
            raise ValueError(f"Base price must be non-negative, got {base}")

        step_scale = float(base) * self.config.INIT_STEP_PCT
        points: list[PricePoint] = []
        price = base

        for i in range(point_count):
            delta = (self.rng.random() - self.config.INIT_DRIFT_BIAS) * step_scale
            price = self._step(price, delta)
            points.append(
                PricePoint(
                    time=i,
                    price=price,
                    volume=self._volume(self.config.INIT_VOLUME_MAX),
                )
            )

        return self._cap(tuple(points))

    def advance(self, series: Series) -> Series:
        if series:
            last = series[-1]
            delta = (self.rng.random() - 0.5) * self.config.ADVANCE_STEP_RANGE
            point = PricePoint(
                time=last.time + 1,
                price=self._step(last.price, delta),
                volume=self._volume(self.config.ADVANCE_VOLUME_MAX),
            )
        else:
            point = PricePoint(
                time=0,
                price=round_money(self.config.BASE_PRICE),
                volume=self._volume(self.config.ADVANCE_VOLUME_MAX),
            )

        logger.debug("Price tick %s: %s", point.label, point.price)
        return self._cap(series + (point,))

    def _step(self, price: Decimal, delta: float) -> Decimal:
        return clamp_non_negative(round_money(price + Decimal(str(delta))))

    def _volume(self, maximum: int) -> int:
        return int(self.rng.integers(0, maximum, endpoint=True))

    def _cap(self, series: Series) -> Series:
        """Drop the oldest points so the series fits the cap."""
        overflow = len(series) - self.config.SERIES_CAP
        if overflow > 0:
            return series[overflow:]
        return series
