"""
Trading Dashboard - In-memory state engine for a simulated trading dashboard.

Exports:
    DashboardController: Owns dashboard state, refresh timers and change events
    DashboardView: Frozen snapshot handed to the rendering layer
    DashboardConfig: Tunables for market simulation, timers and panels
    Portfolio: Holdings keyed by symbol, applies committed orders
    PortfolioValuator: Simulated prices, total value, P/L and pie slices
    PriceSeriesGenerator: Synthetic bounded price/volume series
    OrderIntake: Order-entry state machine
    WidgetLayoutManager: Reorderable widget grid
    NewsFeedStore: Append-only news feed
"""

from .config import (
    ASSETS,
    Asset,
    DashboardConfig,
    OrderSide,
    OrderState,
    WidgetId,
)
from .controller import DashboardController, DashboardView, StateChange
from .feeds import PriceFeed, PriceSeriesGenerator
from .layout import WidgetLayoutManager, move, parse_drag_index
from .models import Holding, NewsItem, PendingOrder, PieSlice, PricePoint
from .news import NewsFeedStore
from .orders import OrderIntake
from .portfolio import Portfolio
from .scheduler import PeriodicTask
from .valuation import PortfolioValuator

__all__ = [
    "ASSETS",
    "Asset",
    "DashboardConfig",
    "OrderSide",
    "OrderState",
    "WidgetId",
    "DashboardController",
    "DashboardView",
    "StateChange",
    "PriceFeed",
    "PriceSeriesGenerator",
    "WidgetLayoutManager",
    "move",
    "parse_drag_index",
    "Holding",
    "NewsItem",
    "PendingOrder",
    "PieSlice",
    "PricePoint",
    "NewsFeedStore",
    "OrderIntake",
    "Portfolio",
    "PeriodicTask",
    "PortfolioValuator",
]
