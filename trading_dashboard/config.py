"""Configuration constants for the trading dashboard."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class WidgetId(Enum):
    """Widgets that can be placed on the dashboard grid."""

    CHARTS = "charts"
    ORDERS = "orders"
    PORTFOLIO = "portfolio"
    NEWS = "news"


class OrderSide(Enum):
    """Direction of an order."""

    BUY = "buy"
    SELL = "sell"


class OrderState(Enum):
    """Lifecycle of the order-entry form."""

    EDITING = "editing"
    CONFIRMING = "confirming"
    COMMITTED = "committed"


@dataclass(frozen=True)
class Asset:
    """An entry of the static asset catalog."""

    symbol: str
    name: str
    color: str


ASSETS: tuple[Asset, ...] = (
    Asset("BTC", "Bitcoin", "#f7931a"),
    Asset("ETH", "Ethereum", "#3c3c3d"),
    Asset("SOL", "Solana", "#00FFA3"),
    Asset("ADA", "Cardano", "#0033ad"),
)

FALLBACK_COLOR = "#888888"

# (symbol, quantity, average cost) of the demo portfolio
SEED_HOLDINGS: tuple[tuple[str, Decimal, Decimal], ...] = (
    ("BTC", Decimal("0.25"), Decimal("42000")),
    ("ETH", Decimal("1.8"), Decimal("2900")),
    ("SOL", Decimal("10"), Decimal("32")),
)

DEFAULT_LAYOUT: tuple[WidgetId, ...] = (
    WidgetId.CHARTS,
    WidgetId.ORDERS,
    WidgetId.PORTFOLIO,
    WidgetId.NEWS,
)


@dataclass(frozen=True)
class DashboardConfig:
    """Tunables for the simulated market data, timers and panels."""

    SERIES_CAP: int = 120
    INITIAL_POINTS: int = 120
    BASE_PRICE: Decimal = Decimal("4250")

    # initial walk: (u - INIT_DRIFT_BIAS) * base * INIT_STEP_PCT
    INIT_STEP_PCT: float = 0.02
    INIT_DRIFT_BIAS: float = 0.48
    INIT_VOLUME_MAX: int = 1000

    # live ticks: (u - 0.5) * ADVANCE_STEP_RANGE
    ADVANCE_STEP_RANGE: float = 20.0
    ADVANCE_VOLUME_MAX: int = 2000

    # revaluation: average_cost * (1 + (u - 0.5) * VALUATION_SPREAD)
    VALUATION_SPREAD: float = 0.06

    PRICE_REFRESH_SECONDS: float = 2.0
    VALUATION_REFRESH_SECONDS: float = 5.0

    INITIAL_NEWS_COUNT: int = 8
    NEWS_VISIBLE_LIMIT: int = 6
    NEWS_PAGE_SIZE: int = 5

    ORDER_AMOUNT_MIN: Decimal = Decimal("0")
    ORDER_AMOUNT_MAX: Decimal = Decimal("5")
    DEFAULT_ORDER_SYMBOL: str = "BTC"
    DEFAULT_ORDER_AMOUNT: Decimal = Decimal("0.001")


def asset_by_symbol(symbol: str) -> Asset | None:
    for asset in ASSETS:
        if asset.symbol == symbol:
            return asset
    return None
