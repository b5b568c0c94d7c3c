"""Data models for the trading dashboard."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .config import FALLBACK_COLOR, OrderSide

CENT = Decimal("0.01")
ZERO = Decimal("0")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


@dataclass(frozen=True)
class PricePoint:
    """One sample of the simulated price series."""

    time: int
    price: Decimal
    volume: int

    @property
    def label(self) -> str:
        return f"T{self.time}"


@dataclass(frozen=True)
class Holding:
    """A single asset position valued at its latest simulated price."""

    symbol: str
    quantity: Decimal
    average_cost: Decimal
    current_price: Optional[Decimal] = None
    color: str = FALLBACK_COLOR

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(
                f"Quantity for {self.symbol} must be non-negative, got {self.quantity}"
            )
        if self.average_cost < 0:
            raise ValueError(
                f"Average cost for {self.symbol} must be non-negative, got {self.average_cost}"
            )

    @property
    def effective_price(self) -> Decimal:
        """Latest simulated price, or the average cost before the first valuation."""
        if self.current_price is None:
            return self.average_cost
        return self.current_price

    @property
    def market_value(self) -> Decimal:
        return self.quantity * self.effective_price

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.average_cost

    @property
    def unrealized_pnl(self) -> Decimal:
        return self.market_value - self.cost_basis


@dataclass(frozen=True)
class PendingOrder:
    """Order parameters held by the order-entry form."""

    side: OrderSide
    symbol: str
    amount: Decimal
    limit_price: Decimal = ZERO

    def __str__(self) -> str:
        return f"{self.side.value.upper()} {self.amount} {self.symbol}"


@dataclass(frozen=True)
class NewsItem:
    id: int
    title: str
    timestamp_label: str
    body: str


@dataclass(frozen=True)
class PieSlice:
    """Valuation of one holding, as consumed by the pie renderer."""

    symbol: str
    value: Decimal
    color: str
