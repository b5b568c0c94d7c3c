"""Portfolio valuation: simulated prices, totals, P/L and pie slices."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

import numpy as np

from .config import DashboardConfig
from .models import Holding, PieSlice, ZERO, clamp_non_negative, round_money

logger = logging.getLogger(__name__)


class PortfolioValuator:
    """Derives current prices and valuations for a set of holdings."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._pie_source: Optional[tuple[Holding, ...]] = None
        self._pie_cache: tuple[PieSlice, ...] = ()

    def revalue(self, holdings: Iterable[Holding]) -> tuple[Holding, ...]:
        """Return copies of the holdings with a freshly simulated current price.

        The price is the average cost perturbed by up to half of
        VALUATION_SPREAD in either direction, so a zero-cost holding always
        values at zero.
        """
        revalued = []
        for holding in holdings:
            factor = 1 + (self.rng.random() - 0.5) * self.config.VALUATION_SPREAD
            price = round_money(holding.average_cost * Decimal(str(factor)))
            revalued.append(replace(holding, current_price=clamp_non_negative(price)))

        logger.debug("Revalued %d holdings", len(revalued))
        return tuple(revalued)

    def compute_total_value(self, holdings: Iterable[Holding]) -> Decimal:
        return sum((h.market_value for h in holdings), start=ZERO)

    def compute_unrealized_pnl(self, holdings: Iterable[Holding]) -> Decimal:
        return sum((h.unrealized_pnl for h in holdings), start=ZERO)

    def to_pie_slices(self, holdings: tuple[Holding, ...]) -> tuple[PieSlice, ...]:
        """Project holdings onto pie slices, in holdings order.

        The result is cached against the identity of ``holdings``; pass the
        same snapshot again and the cached slices are returned.
        """
        if holdings is self._pie_source:
            return self._pie_cache

        slices = tuple(
            PieSlice(
                symbol=h.symbol,
                value=round_money(h.market_value),
                color=h.color,
            )
            for h in holdings
        )
        self._pie_source = holdings
        self._pie_cache = slices
        return slices
