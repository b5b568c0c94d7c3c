import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

from .config import FALLBACK_COLOR, SEED_HOLDINGS, OrderSide, asset_by_symbol
from .models import Holding, PendingOrder, ZERO, clamp_non_negative

logger = logging.getLogger(__name__)


def _color_for(symbol: str) -> str:
    asset = asset_by_symbol(symbol)
    return asset.color if asset else FALLBACK_COLOR


class Portfolio:
    """The set of holdings owned by one dashboard session, keyed by symbol."""

    def __init__(self, holdings: Iterable[Holding] = ()) -> None:
        self.holdings: dict[str, Holding] = {}
        self._snapshot: Optional[tuple[Holding, ...]] = None
        for holding in holdings:
            self.add_holding(holding)

    def add_holding(self, holding: Holding) -> None:
        if holding.symbol in self.holdings:
            raise ValueError(f"Holding for {holding.symbol} already exists")
        self.holdings[holding.symbol] = holding
        self._snapshot = None

    def get(self, symbol: str) -> Optional[Holding]:
        return self.holdings.get(symbol)

    def snapshot(self) -> tuple[Holding, ...]:
        """Holdings in insertion order.

        The same tuple object is returned until the holdings change, so
        callers can memoize derived values on its identity.
        """
        if self._snapshot is None:
            self._snapshot = tuple(self.holdings.values())
        return self._snapshot

    def replace_holdings(self, holdings: Iterable[Holding]) -> None:
        """Swap in updated holdings for symbols that are already held."""
        updated = dict(self.holdings)
        for holding in holdings:
            if holding.symbol not in updated:
                raise ValueError(f"Unknown holding: {holding.symbol}")
            updated[holding.symbol] = holding
        self.holdings = updated
        self._snapshot = None

    def apply_order(self, order: PendingOrder) -> Optional[Holding]:
        """Apply a confirmed order and return the resulting holding.

        Returns None when a sell targets a symbol that is not held; such
        orders are dropped without touching the portfolio.
        """
        existing = self.holdings.get(order.symbol)

        if order.side is OrderSide.BUY:
            if existing is not None:
                result = replace(existing, quantity=existing.quantity + order.amount)
            else:
                result = Holding(
                    symbol=order.symbol,
                    quantity=order.amount,
                    average_cost=clamp_non_negative(order.limit_price),
                    color=_color_for(order.symbol),
                )
        else:
            if existing is None:
                logger.debug("Dropping sell of %s: no holding", order.symbol)
                return None
            result = replace(
                existing,
                quantity=clamp_non_negative(existing.quantity - order.amount),
            )

        self.holdings[order.symbol] = result
        self._snapshot = None
        return result

    def total_value(self) -> Decimal:
        return sum(
            (holding.market_value for holding in self.holdings.values()),
            start=ZERO,
        )

    @classmethod
    def seeded(cls) -> "Portfolio":
        """Create the demo portfolio shown when the dashboard opens."""
        return cls(
            Holding(
                symbol=symbol,
                quantity=quantity,
                average_cost=average_cost,
                color=_color_for(symbol),
            )
            for symbol, quantity, average_cost in SEED_HOLDINGS
        )

    def __repr__(self) -> str:
        return (
            f"Portfolio(holdings={list(self.holdings.keys())}, "
            f"total_value={self.total_value()})"
        )
