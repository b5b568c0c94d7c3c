import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Optional

from .config import ASSETS, DashboardConfig, OrderSide, OrderState
from .models import PendingOrder
from .portfolio import Portfolio

logger = logging.getLogger(__name__)


def _to_decimal(value: Decimal | str | int | float, field: str) -> Decimal:
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid {field}: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Invalid {field}: {value!r}")
    return result


class OrderIntake:
    """Order-entry form: edit a draft, confirm it, then commit it once.

    State flow is EDITING -> CONFIRMING -> COMMITTED, with cancel() going
    back from CONFIRMING to EDITING. Editing after a commit starts a new
    draft from the last values, and a committed draft can be placed again
    as it is.
    """

    def __init__(
        self,
        portfolio: Portfolio,
        config: Optional[DashboardConfig] = None,
        symbols: Optional[tuple[str, ...]] = None,
    ) -> None:
        self.portfolio = portfolio
        self.config = config or DashboardConfig()
        self.symbols = symbols or tuple(asset.symbol for asset in ASSETS)
        self.state = OrderState.EDITING
        self.order = PendingOrder(
            side=OrderSide.BUY,
            symbol=self.config.DEFAULT_ORDER_SYMBOL,
            amount=self.config.DEFAULT_ORDER_AMOUNT,
        )
        self._parsers = {
            "side": self._parse_side,
            "symbol": self._parse_symbol,
            "amount": self._parse_amount,
            "limit_price": self._parse_limit_price,
        }

    def update(self, **fields) -> PendingOrder:
        """Set several draft fields at once: side, symbol, amount, limit_price.

        Every value is checked before the draft changes, so a rejected
        field leaves both the draft and the state as they were.
        """
        unknown = set(fields) - set(self._parsers)
        if unknown:
            raise ValueError(f"Unknown order fields: {', '.join(sorted(unknown))}")
        if self.state is OrderState.CONFIRMING:
            raise ValueError("Cannot edit an order while it awaits confirmation")

        changes = {name: self._parsers[name](value) for name, value in fields.items()}
        self.order = replace(self.order, **changes)
        self.state = OrderState.EDITING
        return self.order

    def set_side(self, side: OrderSide | str) -> None:
        self.update(side=side)

    def set_symbol(self, symbol: str) -> None:
        self.update(symbol=symbol)

    def set_amount(self, amount: Decimal | str | float) -> None:
        self.update(amount=amount)

    def set_limit_price(self, price: Decimal | str | float) -> None:
        self.update(limit_price=price)

    def open_confirmation(self) -> PendingOrder:
        self._require((OrderState.EDITING, OrderState.COMMITTED), "open confirmation")
        self.state = OrderState.CONFIRMING
        return self.order

    def cancel(self) -> None:
        self._require((OrderState.CONFIRMING,), "cancel")
        self.state = OrderState.EDITING

    def commit(self) -> PendingOrder:
        """Apply the confirmed order to the portfolio.

        The state leaves CONFIRMING before the portfolio is touched, so a
        repeated call raises instead of applying the order twice.
        """
        self._require((OrderState.CONFIRMING,), "commit")
        self.state = OrderState.COMMITTED

        order = self.order
        holding = self.portfolio.apply_order(order)
        if holding is None:
            logger.info("Order %s ignored: no %s holding to sell", order, order.symbol)
        else:
            logger.info("Committed %s, now holding %s", order, holding.quantity)
        return order

    def _parse_side(self, side: OrderSide | str) -> OrderSide:
        try:
            return OrderSide(side)
        except ValueError:
            raise ValueError(f"Unknown order side: {side!r}") from None

    def _parse_symbol(self, symbol: str) -> str:
        if symbol not in self.symbols:
            raise ValueError(
                f"Unknown symbol: '{symbol}'. Valid symbols are: {', '.join(self.symbols)}"
            )
        return symbol

    def _parse_amount(self, amount: Decimal | str | float) -> Decimal:
        amount = _to_decimal(amount, "amount")
        low, high = self.config.ORDER_AMOUNT_MIN, self.config.ORDER_AMOUNT_MAX
        if not low <= amount <= high:
            raise ValueError(f"Amount must be between {low} and {high}, got {amount}")
        return amount

    def _parse_limit_price(self, price: Decimal | str | float) -> Decimal:
        price = _to_decimal(price, "limit price")
        if price < 0:
            raise ValueError(f"Limit price must be non-negative, got {price}")
        return price

    def _require(self, allowed: tuple[OrderState, ...], action: str) -> None:
        if self.state not in allowed:
            expected = " or ".join(state.value for state in allowed)
            raise ValueError(
                f"Cannot {action} in state {self.state.value}, expected {expected}"
            )
