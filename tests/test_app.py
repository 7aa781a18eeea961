import time

from netrum_monitor.app import (
    NetrumMonitorApp,
    NodeDetailScreen,
    mining_status_lines,
    node_row,
    page_label,
    refresh_status_lines,
    summary_lines,
)
from netrum_monitor.cache import NodeCache
from netrum_monitor.models import MiningStatus, Node, TaskStats
from netrum_monitor.query import paginate, summarize
from netrum_monitor.refresh import RefreshLoop, RefreshState
from netrum_monitor.rewards import APPROXIMATION_NOTE
from netrum_monitor.services.api import NodeApiError
from netrum_monitor.services.balance import NullBalanceLookup

from tests.factories import NOW, make_node


class CountingApi:
    def __init__(self, nodes=None):
        self.nodes = nodes or []
        self.calls = 0

    def fetch_active_nodes(self):
        self.calls += 1
        return list(self.nodes)


class DetailApi(CountingApi):
    def __init__(self, nodes=None, node=None, node_error=None, stats=None, stats_error=None):
        super().__init__(nodes)
        self.node = node
        self.node_error = node_error
        self.stats = stats or TaskStats(node_id="")
        self.stats_error = stats_error
        self.node_calls = []
        self.stats_calls = []

    def fetch_node(self, internal_id):
        self.node_calls.append(internal_id)
        if self.node_error:
            raise self.node_error
        return self.node

    def fetch_task_stats(self, internal_id):
        self.stats_calls.append(internal_id)
        if self.stats_error:
            raise self.stats_error
        return self.stats


def build_app(api, cache):
    return NetrumMonitorApp(api=api, cache=cache, balance=NullBalanceLookup())


async def test_mount_with_cached_nodes_issues_no_requests():
    cache = NodeCache()
    cache.write([make_node("a", cpu=10), make_node("b")])
    api = CountingApi()
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        await pilot.pause(0.1)
        assert api.calls == 0
        assert app.refresh_loop.state is RefreshState.IDLE
        assert app.nodes_table.row_count == 2


async def test_mount_with_empty_cache_fetches_once():
    cache = NodeCache()
    api = CountingApi([make_node("a", status="Active"), make_node("b", status="Inactive")])
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        for _ in range(40):
            if cache.has_data:
                break
            await pilot.pause(0.05)
        await pilot.pause(0.05)
        assert api.calls == 1
        assert app.nodes_table.row_count == 2
        # Only active nodes earn an estimate
        assert app.rewards_table.row_count == 1


async def wait_until(pilot, predicate, attempts=60):
    for _ in range(attempts):
        if predicate():
            return
        await pilot.pause(0.05)


def bad_clock_nodes():
    return [
        Node.from_api({"_id": "micro", "nodeId": "micro", "nodeMetrics": {"lastSeen": 1_750_000_000_000_000}}),
        Node.from_api({"_id": "nano", "nodeId": "nano", "nodeMetrics": {"lastSeen": 1_750_000_000_000_000_000}}),
        Node.from_api({"_id": "inf", "nodeId": "inf", "nodeMetrics": {"lastSeen": "Infinity"}}),
    ]


async def test_mount_survives_out_of_range_timestamps():
    cache = NodeCache()
    cache.write(bad_clock_nodes())
    app = build_app(CountingApi(), cache)
    async with app.run_test() as pilot:
        await pilot.pause(0.1)
        assert app.nodes_table.row_count == 3


def test_node_row_with_unusable_last_seen():
    rows = {n.node_id: node_row(n, NOW) for n in bad_clock_nodes()}
    assert rows["inf"][2] == "N/A"
    assert rows["inf"][-1] == "N/A"
    assert rows["micro"][-1] != "N/A"
    assert rows["nano"][-1] != "N/A"
    # Built directly, bypassing ingestion
    assert node_row(make_node("raw", last_seen=float("inf")), NOW)[-1] == "N/A"


def test_empty_pages_read_one_of_one():
    assert page_label(paginate([], 1)) == "Page 1 / 1"
    assert page_label(paginate(list(range(45)), 3)) == "Page 3 / 3"


async def open_detail(app, pilot, internal_id):
    screen = NodeDetailScreen(internal_id, app.cache, app.api, app.balance)
    await app.push_screen(screen)
    await pilot.pause()
    return screen


async def test_detail_reads_cached_node():
    node = make_node("alpha", internal_id="n1", speed=5, last_claim=time.time() - 3600)
    cache = NodeCache()
    cache.write([node])
    api = DetailApi(stats=TaskStats(node_id="alpha", task_count=7))
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        screen = await open_detail(app, pilot, "n1")
        await wait_until(
            pilot, lambda: screen.tasks.lines and screen.rewards.lines and "loading" not in screen.rewards.lines[0]
        )
        assert api.node_calls == []
        assert screen.node is node
        assert screen.rewards.lines[0] == "Claimed balance (External RPC): N/A"
        assert screen.rewards.lines[1].endswith(" NPT")
        assert screen.rewards.lines[-1] == APPROXIMATION_NOTE
        # Dashboard and reward block formulas render side by side
        assert "Rate / Day (calc.): 0.3709" in screen.reward_block.lines
        assert screen.tasks.lines[0] == "Total Tasks Completed: 7"


async def test_detail_fetches_uncached_node():
    node = make_node("beta", internal_id="n2")
    cache = NodeCache()
    cache.write([make_node("alpha", internal_id="n1")])
    api = DetailApi(node=node)
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        screen = await open_detail(app, pilot, "n2")
        await wait_until(pilot, lambda: screen.node is not None)
        assert api.node_calls == ["n2"]
        assert screen.identity.lines[0] == "beta"


async def test_detail_shows_missing_node_message():
    cache = NodeCache()
    cache.write([make_node("alpha", internal_id="n1")])
    api = DetailApi(node_error=NodeApiError("Failed to fetch node (HTTP 404)"))
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        screen = await open_detail(app, pilot, "gone")
        await wait_until(pilot, lambda: screen.error_message)
        assert screen.error_message.startswith("Node not found or no longer active")
        assert screen.node is None
        assert screen.identity.lines == []
        assert api.stats_calls == []


async def test_detail_task_stats_failure_stays_in_its_card():
    node = make_node("alpha", internal_id="n1", cpu=12)
    cache = NodeCache()
    cache.write([node])
    api = DetailApi(stats_error=NodeApiError("Failed to fetch node task stats (HTTP 500)"))
    app = build_app(api, cache)
    async with app.run_test() as pilot:
        screen = await open_detail(app, pilot, "n1")
        await wait_until(pilot, lambda: screen.tasks.lines)
        assert screen.tasks.lines == ["Failed to fetch node task stats (HTTP 500)"]
        assert screen.error_message == ""
        assert screen.identity.lines[0] == "alpha"
        assert "CPU: 12%" in screen.metrics.lines


def test_refresh_status_lines():
    loop = RefreshLoop(NodeCache(), lambda: [], interval=30)
    loop.running = True
    loop.remaining = 12
    assert refresh_status_lines(loop) == ["Next refresh in 12s"]
    loop.state = RefreshState.FETCHING_BACKGROUND
    loop.error = "Invalid API response"
    assert refresh_status_lines(loop) == ["Updating in background…", "Error: Invalid API response"]


def test_summary_lines():
    lines = summary_lines(summarize([make_node("a", cpu=12, last_seen=NOW - 1)], NOW))
    assert lines[0] == "Active Nodes: 1"
    assert "Fresh 1 (100%)" in lines[1]
    assert lines[2].startswith("Avg CPU: 12.0")
    assert summary_lines(None) == []


def test_mining_status_lines_for_finished_run():
    lines = mining_status_lines(MiningStatus(mining_active=False, time_remaining_hours=0))
    assert "Mining: Inactive" in lines
    assert "Time Remaining: Completed" in lines
    assert lines[-1] == "ETH Balance: Not enough for claim"
