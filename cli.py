#!/usr/bin/env python3
import asyncio
import logging
import threading
from decimal import Decimal

from rich import box
from rich.console import Console, Group
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from trading_dashboard import (
    ASSETS,
    DashboardController,
    DashboardView,
    OrderSide,
    WidgetId,
)

logger = logging.getLogger(__name__)
console = Console()

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"
SPARK_WIDTH = 60

COMMANDS: list[str] = ["refresh", "buy", "sell", "move", "more", "quit"]

ASSET_NAMES: dict[str, str] = {asset.symbol: asset.name for asset in ASSETS}


def _signed_color(value: Decimal) -> str:
    return "green" if value >= 0 else "red"


def sparkline(prices: list[Decimal], width: int = SPARK_WIDTH) -> str:
    """Render the most recent prices as a row of block characters."""
    prices = prices[-width:]
    if not prices:
        return ""
    low, high = min(prices), max(prices)
    span = high - low
    if span == 0:
        return SPARK_BLOCKS[0] * len(prices)
    top = len(SPARK_BLOCKS) - 1
    return "".join(SPARK_BLOCKS[int((p - low) / span * top)] for p in prices)


def kpi_table(view: DashboardView) -> Table:
    """Build the header row of key figures."""
    t = Table(box=box.SIMPLE_HEAVY, show_edge=False, expand=True)
    t.add_column("Portfolio Value", justify="center")
    t.add_column("Volume", justify="center")
    t.add_column("Open Orders", justify="center")
    t.add_column("Unrealized P/L", justify="center")
    t.add_row(
        f"[bold]${view.total_value:,.2f}[/bold]",
        f"{view.volume:,}",
        str(view.open_orders),
        Text(f"${view.unrealized_pnl:+,.2f}", style=_signed_color(view.unrealized_pnl)),
    )
    return t


def charts_panel(view: DashboardView) -> Panel:
    prices = [p["price"] for p in view.chart_points]
    last = view.last_price
    headline = Text()
    if last is not None:
        headline.append(f"${last:,.2f} ", style="bold")
        headline.append(f"{view.price_change:+,.2f}", style=_signed_color(view.price_change))
    body = Group(headline, Text(sparkline(prices), style="blue"))
    first = view.series[0].label if view.series else "-"
    latest = view.series[-1].label if view.series else "-"
    return Panel(body, title="Charts", subtitle=f"{first} … {latest}", box=box.ROUNDED)


def holdings_table(view: DashboardView) -> Table:
    """Build a Rich table showing holdings, their valuation and P/L."""
    t = Table(title="Portfolio", box=box.ROUNDED, title_style="bold white")
    t.add_column("Asset", style="cyan")
    t.add_column("Qty", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right")
    t.add_column("P/L", justify="right")

    for h in view.holdings:
        t.add_row(
            Text(h.symbol, style=h.color),
            str(h.quantity),
            f"${h.effective_price:,.2f}",
            f"${h.market_value:,.2f}",
            Text(f"{h.unrealized_pnl:+,.2f}", style=_signed_color(h.unrealized_pnl)),
        )

    t.add_section()
    t.add_row("", "", "Total", f"[bold]${view.total_value:,.2f}[/bold]", "")
    return t


def orders_panel(view: DashboardView) -> Panel:
    order = view.order
    style = "green" if order.side is OrderSide.BUY else "red"
    lines = [
        Text(f"Side:   {order.side.value}", style=f"bold {style}"),
        Text(f"Symbol: {order.symbol} — {ASSET_NAMES.get(order.symbol, order.symbol)}"),
        Text(f"Amount: {order.amount}"),
        Text(f"Limit:  {order.limit_price}"),
        Text(f"Preview: {order}", style="dim"),
    ]
    return Panel(Group(*lines), title=f"Orders ({view.order_state.value})", box=box.ROUNDED)


def news_panel(view: DashboardView) -> Panel:
    rows = []
    for item in view.news:
        rows.append(Text(item.title, style="bold"))
        rows.append(Text(f"{item.timestamp_label} · {item.body}", style="dim"))
    caption = Text(f"{len(view.news)} of {view.news_count} shown", style="dim italic")
    return Panel(Group(*rows, caption), title="News", box=box.ROUNDED)


WIDGET_RENDERERS = {
    WidgetId.CHARTS: charts_panel,
    WidgetId.ORDERS: orders_panel,
    WidgetId.PORTFOLIO: holdings_table,
    WidgetId.NEWS: news_panel,
}


def render(view: DashboardView) -> None:
    console.print(Panel(kpi_table(view), title="Trading Dashboard", box=box.DOUBLE))
    for widget in view.layout:
        console.print(WIDGET_RENDERERS[widget](view))


def _layout_labels(view: DashboardView) -> str:
    return "  ".join(f"{i}:{w.value}" for i, w in enumerate(view.layout))


async def _in_daemon_thread(func, *args, **kwargs):
    """Run a blocking prompt on a daemon thread and await its answer.

    Interpreter shutdown does not join daemon threads, so Ctrl-C exits even
    while the prompt is still blocked reading stdin.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def deliver(result=None, error=None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def target() -> None:
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            loop.call_soon_threadsafe(deliver, None, e)
        else:
            loop.call_soon_threadsafe(deliver, result)

    threading.Thread(target=target, name="cli-prompt", daemon=True).start()
    return await future


async def _ask(prompt: str, **kwargs) -> str:
    """Prompt off the event loop so the refresh timers keep running."""
    return await _in_daemon_thread(Prompt.ask, prompt, **kwargs)


async def _enter_order(dashboard: DashboardController, side: OrderSide) -> None:
    current = dashboard.order_intake.order
    symbol = await _ask(
        "  Symbol", choices=[a.symbol for a in ASSETS], default=current.symbol
    )
    amount = await _ask("  Amount", default=str(current.amount))
    limit = await _ask("  Limit price (0 for none)", default=str(current.limit_price))

    try:
        dashboard.edit_order(side=side, symbol=symbol, amount=amount, limit_price=limit)
    except ValueError as e:
        console.print(f"  [red]{e}[/red]")
        return

    order = dashboard.place_order()
    confirmed = await _in_daemon_thread(
        Confirm.ask, f"  Confirm {order}?", default=True
    )
    if confirmed:
        dashboard.confirm_order()
        console.print(f"  [green]Placed {order}[/green]")
    else:
        dashboard.cancel_order()
        console.print("  [dim]Order cancelled.[/dim]")


async def _move_widget(dashboard: DashboardController) -> None:
    console.print(f"  [dim]{_layout_labels(dashboard.view())}[/dim]")
    source = await _ask("  Move widget at index")
    target = await _ask("  Drop at index")
    try:
        drop_index = int(target)
    except ValueError:
        console.print(f"  [red]Invalid drop index: {target}[/red]")
        return
    if not dashboard.drop_widget(source, drop_index):
        console.print("  [dim]Layout unchanged.[/dim]")


async def run_cli_loop(dashboard: DashboardController) -> None:
    while True:
        console.print()
        render(dashboard.view())

        command = await _ask("  Command", choices=COMMANDS, default="refresh")
        logger.debug("Command: %s", command)
        if command == "quit":
            break
        if command == "buy":
            await _enter_order(dashboard, OrderSide.BUY)
        elif command == "sell":
            await _enter_order(dashboard, OrderSide.SELL)
        elif command == "move":
            await _move_widget(dashboard)
        elif command == "more":
            batch = dashboard.load_more_news()
            console.print(f"  [dim]Loaded {len(batch)} news items.[/dim]")


async def _main() -> None:
    async with DashboardController() as dashboard:
        await run_cli_loop(dashboard)


def main() -> None:
    """Entry point for the CLI application."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    console.print()
    console.print(
        Panel("[bold]Trading Dashboard[/bold] · mocked real-time demo", box=box.DOUBLE)
    )
    console.print("[dim]Type quit or press Ctrl-C to exit.[/dim]")
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted, goodbye.[/dim]")


if __name__ == "__main__":
    main()
