import asyncio
import logging
import os
import time
from datetime import datetime

from rich.console import Group
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.logging import TextualHandler
from textual.screen import Screen
from textual.theme import Theme
from textual.widgets import Button, DataTable, Footer, Input, Static, TabbedContent, TabPane

from netrum_monitor import __version__ as MONITOR_VERSION
from netrum_monitor.cache import NodeCache
from netrum_monitor.formatting import (
    MISSING,
    format_average,
    format_datetime,
    format_duration,
    format_metric,
    format_mining_speed,
    format_percent_metric,
    format_reward,
    format_timestamp,
    short_wallet,
)
from netrum_monitor.freshness import classify
from netrum_monitor.models import MiningStatus, Node, TaskStats, TokenBalance
from netrum_monitor.query import NetworkSummary, NodeQuery, Page, SortKey, filter_nodes, paginate, summarize
from netrum_monitor.refresh import RefreshLoop, RefreshState
from netrum_monitor.rewards import (
    APPROXIMATION_NOTE,
    DASHBOARD_FORMULA,
    DETAIL_BLOCK_FORMULA,
    RewardEstimate,
    estimate_for_node,
)
from netrum_monitor.services.api import NodeApiClient, NodeApiError
from netrum_monitor.services.balance import BalanceLookup, default_balance_lookup, lookup_balance_or_none
from netrum_monitor.services.mining_status import MiningStatusChecker

logger = logging.getLogger(__name__)

DEFAULT_SYMBOL = "NPT"
SORT_BUTTONS: list[tuple[SortKey, str]] = [
    (SortKey.FRESHNESS, "Status"),
    (SortKey.CPU, "CPU"),
    (SortKey.RAM, "RAM"),
    (SortKey.DISK, "Disk"),
]

THEME_NETRUM_DARK = Theme(
    name="netrum-dark",
    primary="#00d4ff",
    secondary="#00ff88",
    accent="#ff7a00",
    foreground="#e0e0e0",
    background="#0d0d0d",
    surface="#1a1a1a",
    panel="#252525",
    success="#00ff00",
    warning="#ffaa00",
    error="#ff4444",
    dark=True,
)


def configure_logging() -> None:
    """Send log records to the Textual devtools console instead of the screen."""
    level = os.environ.get("NETRUM_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, handlers=[TextualHandler()], force=True)


def summary_lines(summary: NetworkSummary | None) -> list[str]:
    if summary is None:
        return []
    return [
        f"Active Nodes: {summary.total}",
        f"Fresh {summary.fresh} ({summary.fresh_pct}%)   "
        f"Delayed {summary.delayed} ({summary.delayed_pct}%)   "
        f"Stale {summary.stale} ({summary.stale_pct}%)",
        f"Avg CPU: {format_average(summary.avg_cpu)}   "
        f"Avg RAM: {format_average(summary.avg_ram, 0)}   "
        f"Avg Disk: {format_average(summary.avg_disk, 0)}",
    ]


def refresh_status_lines(loop: RefreshLoop) -> list[str]:
    lines: list[str] = []
    if loop.state is RefreshState.FETCHING_INITIAL:
        lines.append("Initial loading…")
    elif loop.state is RefreshState.FETCHING_BACKGROUND:
        lines.append("Updating in background…")
    elif loop.running:
        lines.append(f"Next refresh in {max(loop.remaining, 0)}s")
    if loop.last_updated_at is not None:
        lines.append(f"Last update: {datetime.fromtimestamp(loop.last_updated_at).strftime('%H:%M:%S')}")
    if loop.error:
        lines.append(f"Error: {loop.error}")
    return lines


def node_row(node: Node, now: float) -> tuple[str, ...]:
    m = node.metrics
    return (
        node.node_id,
        short_wallet(node.wallet),
        str(classify(m.last_seen, now)),
        format_metric(m.cpu),
        format_metric(m.ram),
        format_metric(m.disk),
        format_metric(m.speed),
        format_timestamp(m.last_seen),
    )


def reward_row(node: Node, est: RewardEstimate, now: float) -> tuple[str, ...]:
    return (
        node.node_id,
        short_wallet(node.wallet),
        str(classify(node.metrics.last_seen, now)),
        format_duration(est.mining_seconds) if est.has_checkpoint else MISSING,
        format_reward(est.total_reward) if est.has_checkpoint else MISSING,
        format_reward(est.reward_per_day),
        format_metric(node.metrics.speed),
        format_datetime(est.checkpoint),
    )


def page_label(page: Page) -> str:
    return f"Page {page.page} / {max(page.total_pages, 1)}"


def _row_key(node: Node, seen: set[str]) -> str | None:
    # Rows without a usable id are listed but cannot open the detail screen
    if not node.internal_id or node.internal_id in seen:
        return None
    seen.add(node.internal_id)
    return node.internal_id


def mining_status_lines(status: MiningStatus) -> list[str]:
    if status.time_remaining_hours and status.time_remaining_hours > 0:
        remaining = f"{status.time_remaining_hours:.2f} h"
    else:
        remaining = "Completed"
    progress = f"{status.percent_complete:g}%" if status.percent_complete is not None else "-"
    mined = f"{status.mined_tokens:.2f} {DEFAULT_SYMBOL}" if status.mined_tokens is not None else "-"
    return [
        f"Network: {status.network_name or '-'}",
        f"Block Number: {status.block_number if status.block_number is not None else '-'}",
        f"Gas Price: {format_metric(status.gas_price_gwei)} Gwei",
        f"Contract: {status.contract_address or '-'}",
        f"Mining: {'Active' if status.mining_active else 'Inactive'}",
        f"Mining Speed: {format_mining_speed(status.speed_per_sec_wei)}",
        f"Time Remaining: {remaining}",
        f"Progress: {progress}",
        f"Mined Tokens: {mined}",
        f"Wallet Balance: {status.wallet_balance or '-'}",
        f"ETH Balance: {'OK for claim' if status.has_min_balance else 'Not enough for claim'}",
    ]


def task_stats_lines(stats: TaskStats) -> list[str]:
    ram = f"{format_metric(stats.available_ram)} GB" if stats.available_ram is not None else MISSING
    return [
        f"Total Tasks Completed: {stats.task_count:,}",
        f"Node Status: {stats.node_status or '-'}",
        f"Current Activity: {stats.tts_power_status or '-'}",
        f"Current Task Type: {stats.current_task_type or '-'}",
        f"Available RAM: {ram}",
        f"Last Task Assigned: {format_datetime(stats.last_task_assigned)}",
        f"Last Task Completed: {format_datetime(stats.last_task_completed)}",
        f"Last polled at {format_datetime(stats.last_polled_at)}",
    ]


class CustomHeader(Static):
    """Title, local clock and refresh indicator."""

    DEFAULT_CSS = """
    CustomHeader {
        dock: top;
        width: 100%;
        background: $boost;
        color: $text;
        height: 1;
    }
    """

    INDICATORS = {"green": "🟢", "yellow": "🟡", "blue": "🔵", "red": "🔴"}

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.indicator_state = "green"
        self._reset_timer = None

    def on_mount(self) -> None:
        self.update_clock()
        self.set_interval(1.0, self.update_clock)

    def set_indicator(self, state: str) -> None:
        self.indicator_state = state
        if self._reset_timer:
            self._reset_timer.stop()
        if state in ("yellow", "blue"):
            self._reset_timer = self.set_timer(1.0, self.reset_indicator)
        self.update_clock()

    def reset_indicator(self) -> None:
        self.indicator_state = "green"
        self.update_clock()

    def update_clock(self) -> None:
        time_str = datetime.now().strftime("%A, %B %d, %Y  %I:%M:%S %p")
        indicator = self.INDICATORS.get(self.indicator_state, "🟢")
        right = f"{time_str} {indicator}"
        title = self.app.title
        width = self.size.width
        if width <= len(title) + len(right) + 2:
            self.update(f"{title}  {right}")
            return
        gap = width - len(title) - len(right) - 2
        self.update(f"{title}{' ' * gap}{right}")


class StatusBar(Static):
    def __init__(self) -> None:
        super().__init__(id="status-bar")
        self.node_count: int | None = None
        self.refresh_state = "idle"
        self.last_update = "-"

    def render(self) -> str:
        count = "-" if self.node_count is None else str(self.node_count)
        return f"Nodes: {count} | Refresh: {self.refresh_state} | Updated: {self.last_update}"


class CardPanel(Static):
    def __init__(self, title: str, accent_class: str, alternating_rows: bool = False, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.accent_class = accent_class
        self.alternating_rows = alternating_rows
        self.border_title = title
        self.lines: list[str] = []
        self.empty_text = "... loading"
        self.add_class("card")
        self.add_class(accent_class)

    def update_lines(self, lines: list[str]) -> None:
        self.lines = lines
        self.update(self.render())

    def render(self) -> str | Group:
        if not self.lines:
            return self.empty_text
        if self.alternating_rows:
            texts = [
                Text(line, style="dim" if i % 2 == 1 else "")
                for i, line in enumerate(self.lines)
            ]
            return Group(*texts)
        return "\n".join(self.lines)


class NodeDetailScreen(Screen):
    BINDINGS = [("escape", "app.pop_screen", "Back")]

    DEFAULT_CSS = """
    #detail-body {
        padding: 0 1;
    }
    #detail-error {
        color: $error;
        height: auto;
    }
    #detail-grid {
        layout: grid;
        grid-size: 2;
        grid-gutter: 0 1;
        height: auto;
    }
    """

    def __init__(
        self,
        internal_id: str,
        cache: NodeCache,
        api: NodeApiClient,
        balance: BalanceLookup,
    ) -> None:
        super().__init__()
        self.internal_id = internal_id
        self.cache = cache
        self.api = api
        self.balance = balance
        self.node: Node | None = None
        self.error_message = ""
        self.error = Static("", id="detail-error")
        self.identity = CardPanel("🖥 Node", "node", id="detail-identity")
        self.metrics = CardPanel("📊 Metrics", "network", alternating_rows=True, id="detail-metrics")
        self.timestamps = CardPanel("🕑 Timeline", "sync", alternating_rows=True, id="detail-timestamps")
        self.rewards = CardPanel("💰 Rewards", "pricing", alternating_rows=True, id="detail-rewards")
        self.reward_block = CardPanel("🧮 Reward Detail", "pricing", alternating_rows=True, id="detail-reward-block")
        self.tasks = CardPanel("🛠 Task Activity", "activity", alternating_rows=True, id="detail-tasks")

    def compose(self) -> ComposeResult:
        yield CustomHeader()
        with VerticalScroll(id="detail-body"):
            yield self.error
            yield self.identity
            with Container(id="detail-grid"):
                yield self.metrics
                yield self.timestamps
                yield self.rewards
                yield self.reward_block
                yield self.tasks
        yield Footer()

    async def on_mount(self) -> None:
        loop = asyncio.get_event_loop()
        node = self.cache.find(self.internal_id)
        if node is None:
            try:
                node = await loop.run_in_executor(None, self.api.fetch_node, self.internal_id)
            except NodeApiError as exc:
                logger.warning("Node %s unavailable: %s", self.internal_id, exc)
                self.error_message = f"Node not found or no longer active ({exc})"
                self.error.update(self.error_message)
                return
        self.node = node
        self._render_node(node, balance=None, balance_pending=True)
        asyncio.ensure_future(self._load_task_stats(node))
        token_balance = await loop.run_in_executor(None, lookup_balance_or_none, self.balance, node.wallet)
        self._render_node(node, balance=token_balance, balance_pending=False)

    async def _load_task_stats(self, node: Node) -> None:
        try:
            stats = await asyncio.get_event_loop().run_in_executor(
                None, self.api.fetch_task_stats, node.internal_id
            )
        except NodeApiError as exc:
            logger.warning("Task stats for %s unavailable: %s", node.internal_id, exc)
            self.tasks.update_lines([str(exc)])
            return
        self.tasks.update_lines(task_stats_lines(stats))

    def _render_node(self, node: Node, balance: TokenBalance | None, balance_pending: bool) -> None:
        now = time.time()
        m = node.metrics
        symbol = balance.symbol if balance else DEFAULT_SYMBOL
        self.identity.update_lines(
            [
                node.node_id,
                f"Node ID: {node.internal_id}",
                f"Wallet: {node.wallet or '-'}",
                f"Status: {node.status}   Type: {node.node_type or MISSING}",
            ]
        )
        self.metrics.update_lines(
            [
                f"CPU: {format_percent_metric(m.cpu)}",
                f"RAM: {format_percent_metric(m.ram)}",
                f"Disk: {format_percent_metric(m.disk)}",
                f"Speed: {format_metric(m.speed)}",
                f"Freshness: {classify(m.last_seen, now)}",
            ]
        )
        self.timestamps.update_lines(
            [
                f"Created: {format_datetime(node.created_at)}",
                f"Last claim: {format_datetime(node.last_claim_time)}",
                f"Last mining start: {format_datetime(node.last_mining_start)}",
                f"Last metrics: {format_datetime(m.last_seen)}",
            ]
        )
        if balance_pending:
            balance_text = "loading…"
        elif balance is None:
            balance_text = MISSING
        else:
            balance_text = f"{balance.balance:.4f} {balance.symbol}"
        est = estimate_for_node(node, now, DASHBOARD_FORMULA)
        if est.has_checkpoint:
            potential = f"{format_reward(est.total_reward)} {symbol}"
            mining_time = format_duration(est.mining_seconds)
        else:
            potential = mining_time = MISSING
        self.rewards.update_lines(
            [
                f"Claimed balance (External RPC): {balance_text}",
                f"Estimated mining potential: {potential}",
                f"Mining time: {mining_time}",
                APPROXIMATION_NOTE,
            ]
        )
        block = estimate_for_node(node, now, DETAIL_BLOCK_FORMULA)
        self.reward_block.update_lines(
            [
                f"Speed: {format_metric(m.speed)}",
                f"Mining Time: {mining_time}",
                f"Estimated Reward (calc.): {format_reward(block.total_reward) if block.has_checkpoint else MISSING}",
                f"Rate / Day (calc.): {format_reward(block.reward_per_day)}",
                "Calculated value based on current network rewards. Actual claimable amount may differ.",
            ]
        )


class NetrumMonitorApp(App):
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh_now", "Refresh"),
        ("n", "next_page", "Next Page"),
        ("p", "prev_page", "Prev Page"),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }
    #body {
        width: 1fr;
        height: 1fr;
    }
    TabbedContent,
    TabPane {
        width: 1fr;
    }
    #status-bar {
        height: 1;
    }
    .card {
        padding: 0 1;
        border: round $primary-darken-2;
        height: auto;
        min-height: 3;
    }
    .card.node {
        color: $primary-lighten-2;
    }
    .card.wallet {
        color: $success-lighten-2;
    }
    .card.network {
        color: $secondary-lighten-2;
    }
    .card.activity {
        color: $accent-lighten-2;
    }
    .card.pricing {
        color: $accent-lighten-2;
    }
    .card.sync {
        color: $error-lighten-2;
    }
    .refresh-status {
        height: auto;
        color: $text-muted;
    }
    .toolbar {
        height: auto;
    }
    .toolbar Button {
        min-width: 10;
        margin-right: 1;
    }
    .toolbar Button.active {
        background: $accent;
    }
    .pager {
        height: auto;
        align-horizontal: center;
    }
    .pager Static {
        width: auto;
        padding: 1 2;
    }
    DataTable {
        height: 1fr;
    }
    .inline-error {
        color: $error;
        height: auto;
    }
    #wallet-input {
        width: 60;
    }
    """

    def __init__(
        self,
        api: NodeApiClient | None = None,
        cache: NodeCache | None = None,
        balance: BalanceLookup | None = None,
    ) -> None:
        super().__init__()
        self.api = api or NodeApiClient()
        self.cache = cache or NodeCache()
        self.balance = balance or default_balance_lookup()
        self.mining_checker = MiningStatusChecker(self.api)
        self.refresh_loop = RefreshLoop(self.cache, self.api.fetch_active_nodes, on_change=self._on_refresh_change)
        self.node_query = NodeQuery()
        self.reward_query = NodeQuery()
        self._rendered_at: float | None = None
        self._mining_in_progress = False
        self.title = f"Netrum Node Monitor v{MONITOR_VERSION}"

        self.header = CustomHeader()
        self.status_bar = StatusBar()
        self.summary_card = CardPanel("📡 Network Summary", "network", alternating_rows=True, id="summary-card")
        self.summary_card.border_subtitle = f"Public API · {self.refresh_loop.interval}s refresh"
        self.summary_card.empty_text = "No nodes loaded yet"
        self.refresh_status = Static("", classes="refresh-status", id="refresh-status")
        self.nodes_error = Static("", classes="inline-error", id="nodes-error")
        self.nodes_table = DataTable(id="nodes-table", cursor_type="row", zebra_stripes=True)
        self.nodes_page = Static("Page 1 / 1", id="nodes-page")
        self.rewards_note = Static(APPROXIMATION_NOTE, classes="refresh-status", id="rewards-note")
        self.rewards_table = DataTable(id="rewards-table", cursor_type="row", zebra_stripes=True)
        self.rewards_page = Static("Page 1 / 1", id="rewards-page")
        self.wallet_input = Input(placeholder="Wallet address (0x...)", id="wallet-input")
        self.mining_button = Button("Check Mining Status", id="mining-check")
        self.mining_error = Static("", classes="inline-error", id="mining-error")
        self.mining_card = CardPanel("⛏ Mining Status", "wallet", alternating_rows=True, id="mining-card")
        self.mining_card.empty_text = "Enter a wallet address and press Check."

    def compose(self) -> ComposeResult:
        yield self.header
        with Container(id="body"):
            with TabbedContent(id="tabs"):
                with TabPane("Nodes", id="tab-nodes"):
                    yield self.summary_card
                    yield self.refresh_status
                    yield Input(placeholder="Search by nodeId or wallet…", id="node-search")
                    with Horizontal(classes="toolbar"):
                        for key, label in SORT_BUTTONS:
                            yield Button(label, id=f"sort-{key.value}")
                    yield self.nodes_error
                    yield self.nodes_table
                    with Horizontal(classes="pager"):
                        yield Button("← Prev", id="nodes-prev")
                        yield self.nodes_page
                        yield Button("Next →", id="nodes-next")
                with TabPane("Rewards", id="tab-rewards"):
                    yield self.rewards_note
                    yield Input(placeholder="Search by nodeId or wallet…", id="reward-search")
                    yield self.rewards_table
                    with Horizontal(classes="pager"):
                        yield Button("← Prev", id="rewards-prev")
                        yield self.rewards_page
                        yield Button("Next →", id="rewards-next")
                with TabPane("Mining Status", id="tab-mining"):
                    with Horizontal(classes="toolbar"):
                        yield self.wallet_input
                        yield self.mining_button
                    yield self.mining_error
                    yield self.mining_card
        yield self.status_bar
        yield Footer()

    async def on_mount(self) -> None:
        self.register_theme(THEME_NETRUM_DARK)
        self.theme = "netrum-dark"
        self.nodes_table.add_columns("Node", "Wallet", "Status", "CPU", "RAM", "Disk", "Speed", "Last Metrics")
        self.rewards_table.add_columns(
            "Node", "Wallet", "Status", "Mining Time", "Est. Reward", "Rate / Day", "Speed", "Mining Since"
        )
        self._mark_sort_button()
        self._render_lists()
        self.set_interval(1.0, self._refresh_tick)
        asyncio.ensure_future(self.refresh_loop.start())

    def on_unmount(self) -> None:
        self.refresh_loop.stop()

    def _refresh_tick(self) -> None:
        task = self.refresh_loop.tick()
        if task is not None:
            self.header.set_indicator("yellow")
        self._update_mining_button()

    def _on_refresh_change(self, loop: RefreshLoop) -> None:
        self.refresh_status.update("\n".join(refresh_status_lines(loop)))
        self.status_bar.refresh_state = loop.state.value
        if loop.last_updated_at is not None:
            self.status_bar.last_update = datetime.fromtimestamp(loop.last_updated_at).strftime("%H:%M:%S")
        if loop.state is RefreshState.ERROR:
            self.header.set_indicator("red")
        elif loop.state is RefreshState.IDLE and self.header.indicator_state == "red":
            self.header.reset_indicator()
        # Errors stay on the nodes tab; the cached list keeps rendering
        self.nodes_error.update(loop.error or "")
        if self.cache.updated_at != self._rendered_at:
            self._render_lists()
        self.status_bar.refresh()

    def _render_lists(self) -> None:
        self._rendered_at = self.cache.updated_at
        nodes = self.cache.read() or ()
        self.status_bar.node_count = len(nodes) if self.cache.has_data else None
        now = time.time()
        self.summary_card.update_lines(summary_lines(summarize(nodes, now)))
        self._render_nodes_table(nodes, now)
        self._render_rewards_table(nodes, now)

    def _render_nodes_table(self, nodes: tuple[Node, ...], now: float) -> None:
        page = self.node_query.apply(nodes, now)
        self.nodes_table.clear()
        seen: set[str] = set()
        for node in page.items:
            self.nodes_table.add_row(*node_row(node, now), key=_row_key(node, seen))
        self.nodes_page.update(page_label(page))

    def _render_rewards_table(self, nodes: tuple[Node, ...], now: float) -> None:
        active = filter_nodes([n for n in nodes if n.is_active], self.reward_query.search)
        enriched = [(node, estimate_for_node(node, now)) for node in active]
        enriched.sort(key=lambda pair: pair[1].reward_per_day, reverse=True)
        page = paginate(enriched, self.reward_query.page)
        self.reward_query.page = page.page
        self.rewards_table.clear()
        seen: set[str] = set()
        for node, est in page.items:
            self.rewards_table.add_row(*reward_row(node, est, now), key=_row_key(node, seen))
        self.rewards_page.update(page_label(page))

    def _mark_sort_button(self) -> None:
        for key, _ in SORT_BUTTONS:
            button = self.query_one(f"#sort-{key.value}", Button)
            button.set_class(key is self.node_query.sort_key, "active")

    def _active_tab(self) -> str:
        return self.query_one("#tabs", TabbedContent).active

    async def action_refresh_now(self) -> None:
        task = self.refresh_loop.force_refresh()
        if task is None:
            self.notify("A refresh is already in progress", timeout=3)
            return
        self.header.set_indicator("blue")

    def action_next_page(self) -> None:
        if self._active_tab() == "tab-rewards":
            self.reward_query.next_page()
        else:
            self.node_query.next_page()
        self._render_lists()

    def action_prev_page(self) -> None:
        if self._active_tab() == "tab-rewards":
            self.reward_query.prev_page()
        else:
            self.node_query.prev_page()
        self._render_lists()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "node-search":
            self.node_query.set_search(event.value)
            self._render_lists()
        elif event.input.id == "reward-search":
            self.reward_query.set_search(event.value)
            self._render_lists()
        elif event.input.id == "wallet-input":
            self.mining_error.update("")

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "wallet-input":
            await self._check_mining_status()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("sort-"):
            self.node_query.set_sort(SortKey(button_id.removeprefix("sort-")))
            self._mark_sort_button()
            self._render_lists()
        elif button_id == "nodes-prev":
            self.node_query.prev_page()
            self._render_lists()
        elif button_id == "nodes-next":
            self.node_query.next_page()
            self._render_lists()
        elif button_id == "rewards-prev":
            self.reward_query.prev_page()
            self._render_lists()
        elif button_id == "rewards-next":
            self.reward_query.next_page()
            self._render_lists()
        elif button_id == "mining-check":
            await self._check_mining_status()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        internal_id = event.row_key.value
        if internal_id is None:
            return
        self.push_screen(NodeDetailScreen(internal_id, self.cache, self.api, self.balance))

    async def _check_mining_status(self) -> None:
        if self._mining_in_progress or self.mining_checker.remaining() > 0:
            return
        self._mining_in_progress = True
        self.mining_error.update("")
        self._update_mining_button()
        try:
            result = await asyncio.get_event_loop().run_in_executor(
                None, self.mining_checker.check, self.wallet_input.value
            )
        finally:
            self._mining_in_progress = False
        if result.ok:
            self.mining_card.update_lines(mining_status_lines(result.status))
        else:
            self.mining_card.update_lines([])
            self.mining_error.update(result.message)
        self._update_mining_button()

    def _update_mining_button(self) -> None:
        remaining = self.mining_checker.remaining()
        if remaining > 0:
            self.mining_button.label = f"Cooldown {remaining}s"
        elif self._mining_in_progress:
            self.mining_button.label = "Checking…"
        else:
            self.mining_button.label = "Check Mining Status"
        self.mining_button.disabled = remaining > 0 or self._mining_in_progress


def run() -> None:
    configure_logging()
    NetrumMonitorApp().run()
