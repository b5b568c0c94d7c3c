import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional

import numpy as np

from .config import DashboardConfig, OrderState, WidgetId
from .feeds import PriceFeed, PriceSeriesGenerator, Series
from .layout import WidgetLayoutManager, parse_drag_index
from .models import Holding, NewsItem, PendingOrder, PieSlice, ZERO
from .news import NewsFeedStore
from .orders import OrderIntake
from .portfolio import Portfolio
from .scheduler import PeriodicTask
from .valuation import PortfolioValuator

logger = logging.getLogger(__name__)


class StateChange(Enum):
    """Which part of the dashboard state an event refers to."""

    SERIES = "series"
    PORTFOLIO = "portfolio"
    LAYOUT = "layout"
    ORDER = "order"
    NEWS = "news"


Listener = Callable[[StateChange], None]


@dataclass(frozen=True)
class DashboardView:
    """Everything the rendering layer needs for one frame."""

    series: Series
    holdings: tuple[Holding, ...]
    pie_slices: tuple[PieSlice, ...]
    total_value: Decimal
    unrealized_pnl: Decimal
    layout: tuple[WidgetId, ...]
    order: PendingOrder
    order_state: OrderState
    news: tuple[NewsItem, ...]
    news_count: int

    @property
    def chart_points(self) -> list[dict]:
        return [{"time": p.label, "price": p.price} for p in self.series]

    @property
    def last_price(self) -> Optional[Decimal]:
        return self.series[-1].price if self.series else None

    @property
    def price_change(self) -> Decimal:
        """Change of the last price against the point before it."""
        if len(self.series) < 2:
            return ZERO
        return self.series[-1].price - self.series[-2].price

    @property
    def volume(self) -> int:
        return sum(p.volume for p in self.series)

    @property
    def open_orders(self) -> int:
        return 1 if self.order_state is OrderState.CONFIRMING else 0


class DashboardController:
    """Owns the dashboard state, its refresh timers and change notifications.

    Timers run only between start() and stop(); use the controller as an
    async context manager to tie them to a block:

        async with DashboardController() as dashboard:
            ...
    """

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        feed: Optional[PriceFeed] = None,
        valuator: Optional[PortfolioValuator] = None,
        portfolio: Optional[Portfolio] = None,
        layout: Optional[WidgetLayoutManager] = None,
        news: Optional[NewsFeedStore] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        rng = rng if rng is not None else np.random.default_rng()

        self.feed = feed or PriceSeriesGenerator(self.config, rng)
        self.valuator = valuator or PortfolioValuator(self.config, rng)
        self.portfolio = portfolio if portfolio is not None else Portfolio.seeded()
        self.layout = layout or WidgetLayoutManager()
        self.news = news if news is not None else NewsFeedStore.seeded(
            self.config.INITIAL_NEWS_COUNT
        )
        self.order_intake = OrderIntake(self.portfolio, self.config)
        self.series: Series = self.feed.initialize(
            self.config.INITIAL_POINTS, self.config.BASE_PRICE
        )

        self._listeners: list[Listener] = []
        self._tasks: list[PeriodicTask] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Listener failed handling %s", change.value)

    def tick_prices(self) -> None:
        self.series = self.feed.advance(self.series)
        self._notify(StateChange.SERIES)

    def tick_valuation(self) -> None:
        self.portfolio.replace_holdings(
            self.valuator.revalue(self.portfolio.snapshot())
        )
        self._notify(StateChange.PORTFOLIO)

    def move_widget(self, from_index: object, to_index: int) -> bool:
        changed = self.layout.move_widget(from_index, to_index)
        if changed:
            self._notify(StateChange.LAYOUT)
        return changed

    def drop_widget(self, payload: object, drop_index: int) -> bool:
        """Handle a drop of the widget whose source index is in ``payload``."""
        return self.move_widget(parse_drag_index(payload), drop_index)

    def edit_order(self, **fields) -> PendingOrder:
        """Update draft fields by name: side, symbol, amount, limit_price.

        The fields are applied together; on ValueError nothing changes and
        no event is sent.
        """
        order = self.order_intake.update(**fields)
        self._notify(StateChange.ORDER)
        return order

    def place_order(self) -> PendingOrder:
        order = self.order_intake.open_confirmation()
        self._notify(StateChange.ORDER)
        return order

    def cancel_order(self) -> None:
        self.order_intake.cancel()
        self._notify(StateChange.ORDER)

    def confirm_order(self) -> PendingOrder:
        order = self.order_intake.commit()
        self._notify(StateChange.PORTFOLIO)
        return order

    def load_more_news(self) -> list[NewsItem]:
        batch = self.news.load_more(self.config.NEWS_PAGE_SIZE)
        self._notify(StateChange.NEWS)
        return batch

    def view(self) -> DashboardView:
        holdings = self.portfolio.snapshot()
        return DashboardView(
            series=self.series,
            holdings=holdings,
            pie_slices=self.valuator.to_pie_slices(holdings),
            total_value=self.valuator.compute_total_value(holdings),
            unrealized_pnl=self.valuator.compute_unrealized_pnl(holdings),
            layout=self.layout.layout,
            order=self.order_intake.order,
            order_state=self.order_intake.state,
            news=self.news.visible(self.config.NEWS_VISIBLE_LIMIT),
            news_count=len(self.news),
        )

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def start(self) -> None:
        """Start both refresh timers on the running event loop."""
        if self._tasks:
            raise RuntimeError("Dashboard is already running")
        tasks = [
            PeriodicTask("price-refresh", self.config.PRICE_REFRESH_SECONDS, self.tick_prices),
            PeriodicTask(
                "valuation-refresh",
                self.config.VALUATION_REFRESH_SECONDS,
                self.tick_valuation,
            ),
        ]
        for task in tasks:
            task.start()
        self._tasks = tasks

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            await task.stop()

    async def __aenter__(self) -> "DashboardController":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
