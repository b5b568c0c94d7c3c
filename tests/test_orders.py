"""Tests for the order-entry state machine."""

from decimal import Decimal

import pytest

from trading_dashboard.config import DashboardConfig, OrderSide, OrderState
from trading_dashboard.models import Holding
from trading_dashboard.orders import OrderIntake
from trading_dashboard.portfolio import Portfolio


@pytest.fixture
def portfolio():
    return Portfolio.seeded()


@pytest.fixture
def intake(portfolio):
    return OrderIntake(portfolio)


class TestEditing:
    def test_default_draft(self, intake):
        assert intake.state is OrderState.EDITING
        assert intake.order.side is OrderSide.BUY
        assert intake.order.symbol == "BTC"
        assert intake.order.amount == Decimal("0.001")
        assert intake.order.limit_price == Decimal("0")

    def test_set_fields(self, intake):
        intake.set_side("sell")
        intake.set_symbol("ETH")
        intake.set_amount("1.25")
        intake.set_limit_price(Decimal("2950"))

        assert intake.order.side is OrderSide.SELL
        assert intake.order.symbol == "ETH"
        assert intake.order.amount == Decimal("1.25")
        assert intake.order.limit_price == Decimal("2950")

    def test_unknown_side(self, intake):
        with pytest.raises(ValueError, match="Unknown order side"):
            intake.set_side("short")

    def test_unknown_symbol(self, intake):
        with pytest.raises(ValueError, match="Unknown symbol"):
            intake.set_symbol("DOGE")
        assert intake.order.symbol == "BTC"

    def test_amount_above_range(self, intake):
        with pytest.raises(ValueError, match="between 0 and 5"):
            intake.set_amount("5.01")
        assert intake.order.amount == Decimal("0.001")

    def test_amount_below_range(self, intake):
        with pytest.raises(ValueError, match="between 0 and 5"):
            intake.set_amount(-1)

    def test_amount_range_edges(self, intake):
        intake.set_amount("0")
        assert intake.order.amount == Decimal("0")
        intake.set_amount("5")
        assert intake.order.amount == Decimal("5")

    def test_amount_not_numeric(self, intake):
        with pytest.raises(ValueError, match="Invalid amount"):
            intake.set_amount("abc")

    def test_amount_nan(self, intake):
        with pytest.raises(ValueError, match="Invalid amount"):
            intake.set_amount("NaN")

    def test_widened_amount_range(self, portfolio):
        config = DashboardConfig(ORDER_AMOUNT_MAX=Decimal("100"))
        intake = OrderIntake(portfolio, config)
        intake.set_amount("50")
        assert intake.order.amount == Decimal("50")

    def test_negative_limit_price(self, intake):
        with pytest.raises(ValueError, match="non-negative"):
            intake.set_limit_price("-1")

    def test_update_sets_fields_together(self, intake):
        order = intake.update(side="sell", symbol="SOL", amount="2", limit_price="30")

        assert order is intake.order
        assert str(order) == "SELL 2 SOL"
        assert order.limit_price == Decimal("30")

    def test_rejected_update_leaves_draft_unchanged(self, intake):
        before = intake.order

        with pytest.raises(ValueError, match="between 0 and 5"):
            intake.update(side="sell", symbol="ETH", amount="9")

        assert intake.order == before
        assert intake.state is OrderState.EDITING

    def test_rejected_update_after_commit_keeps_state(self, intake):
        intake.open_confirmation()
        intake.commit()
        before = intake.order

        with pytest.raises(ValueError, match="Invalid limit price"):
            intake.update(symbol="ETH", limit_price="abc")

        assert intake.order == before
        assert intake.state is OrderState.COMMITTED

    def test_update_unknown_field(self, intake):
        with pytest.raises(ValueError, match="Unknown order fields: price"):
            intake.update(amount="1", price="10")
        assert intake.order.amount == Decimal("0.001")


class TestTransitions:
    def test_open_confirmation(self, intake):
        order = intake.open_confirmation()
        assert intake.state is OrderState.CONFIRMING
        assert order == intake.order

    def test_cannot_edit_while_confirming(self, intake):
        intake.open_confirmation()
        with pytest.raises(ValueError, match="awaits confirmation"):
            intake.set_amount("1")

    def test_cancel_returns_to_editing(self, intake, portfolio):
        snapshot = portfolio.snapshot()
        intake.set_amount("2")
        intake.open_confirmation()

        intake.cancel()

        assert intake.state is OrderState.EDITING
        assert intake.order.amount == Decimal("2")
        assert portfolio.snapshot() is snapshot

    def test_cancel_requires_confirming(self, intake):
        with pytest.raises(ValueError, match="Cannot cancel"):
            intake.cancel()

    def test_commit_requires_confirming(self, intake, portfolio):
        with pytest.raises(ValueError, match="Cannot commit"):
            intake.commit()
        assert portfolio.get("BTC").quantity == Decimal("0.25")

    def test_commit_applies_once(self, intake, portfolio):
        intake.set_amount("1")
        intake.open_confirmation()
        intake.commit()

        assert intake.state is OrderState.COMMITTED
        with pytest.raises(ValueError, match="Cannot commit"):
            intake.commit()
        assert portfolio.get("BTC").quantity == Decimal("1.25")

    def test_edit_after_commit_starts_new_draft(self, intake):
        intake.set_symbol("SOL")
        intake.open_confirmation()
        intake.commit()

        intake.set_amount("3")

        assert intake.state is OrderState.EDITING
        assert intake.order.symbol == "SOL"
        assert intake.order.amount == Decimal("3")

    def test_place_again_after_commit(self, intake, portfolio):
        intake.open_confirmation()
        intake.commit()

        order = intake.open_confirmation()
        assert intake.state is OrderState.CONFIRMING
        assert str(order) == "BUY 0.001 BTC"

        intake.commit()
        assert portfolio.get("BTC").quantity == Decimal("0.252")


class TestCommit:
    def _commit(self, intake, side, symbol, amount, limit="0"):
        intake.set_side(side)
        intake.set_symbol(symbol)
        intake.set_amount(amount)
        intake.set_limit_price(limit)
        intake.open_confirmation()
        return intake.commit()

    def test_buy_existing(self, intake, portfolio):
        others = {s: portfolio.get(s) for s in ("ETH", "SOL")}

        self._commit(intake, "buy", "BTC", "0.5")

        assert portfolio.get("BTC").quantity == Decimal("0.75")
        assert {s: portfolio.get(s) for s in ("ETH", "SOL")} == others

    def test_buy_new_symbol(self, intake, portfolio):
        self._commit(intake, "buy", "ADA", "4", limit="0.5")

        assert len(portfolio.holdings) == 4
        ada = portfolio.get("ADA")
        assert ada.quantity == Decimal("4")
        assert ada.average_cost == Decimal("0.5")

    def test_sell_clamps_at_zero(self):
        portfolio = Portfolio([Holding("BTC", Decimal("0.25"), Decimal("42000"))])
        intake = OrderIntake(portfolio)

        self._commit(intake, "sell", "BTC", "1")

        assert portfolio.get("BTC") == Holding("BTC", Decimal("0"), Decimal("42000"))

    def test_sell_unknown_symbol_dropped(self, intake, portfolio):
        order = self._commit(intake, "sell", "ADA", "1")

        assert order.symbol == "ADA"
        assert intake.state is OrderState.COMMITTED
        assert portfolio.get("ADA") is None
        assert len(portfolio.holdings) == 3

    def test_commit_returns_order(self, intake):
        order = self._commit(intake, "buy", "ETH", "0.1")
        assert str(order) == "BUY 0.1 ETH"
