"""Filtered, sorted and paged views over the cached node list."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterable, Sequence, TypeVar

from netrum_monitor.freshness import Freshness, classify
from netrum_monitor.models import Node

PAGE_SIZE = 20

T = TypeVar("T")


class SortKey(Enum):
    FRESHNESS = "freshness"
    CPU = "cpu"
    RAM = "ram"
    DISK = "disk"


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(frozen=True)
class NetworkSummary:
    total: int
    fresh: int
    delayed: int
    stale: int
    fresh_pct: int
    delayed_pct: int
    stale_pct: int
    avg_cpu: float | None
    avg_ram: float | None
    avg_disk: float | None


def matches(node: Node, search: str) -> bool:
    q = search.lower()
    if not q:
        return True
    return q in (node.node_id or "").lower() or q in (node.wallet or "").lower()


def filter_nodes(nodes: Iterable[T], search: str, key: Callable[[T], Node] = lambda n: n) -> list[T]:
    if not search:
        return list(nodes)
    return [item for item in nodes if matches(key(item), search)]


def sort_nodes(nodes: Iterable[Node], sort_key: SortKey, now: float | None = None) -> list[Node]:
    if sort_key is SortKey.FRESHNESS:
        return sorted(nodes, key=lambda n: classify(n.metrics.last_seen, now).rank)
    # A missing metric orders as 0 but is still displayed as N/A
    return sorted(nodes, key=lambda n: n.metrics.get(sort_key.value) or 0.0, reverse=True)


def paginate(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> Page[T]:
    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    page = max(1, min(page, max(total_pages, 1)))
    start = (page - 1) * page_size
    return Page(list(items[start : start + page_size]), page, total_pages, total_items)


class NodeQuery:
    """Search text, sort key and page number for one list view."""

    def __init__(self, sort_key: SortKey = SortKey.FRESHNESS, page_size: int = PAGE_SIZE) -> None:
        self.search = ""
        self.sort_key = sort_key
        self.page = 1
        self.page_size = page_size

    def set_search(self, text: str) -> None:
        self.search = text
        self.page = 1

    def set_sort(self, sort_key: SortKey) -> None:
        self.sort_key = sort_key
        self.page = 1

    def next_page(self) -> None:
        self.page += 1

    def prev_page(self) -> None:
        self.page = max(1, self.page - 1)

    def apply(self, nodes: Iterable[Node], now: float | None = None) -> Page[Node]:
        filtered = filter_nodes(nodes, self.search)
        result = paginate(sort_nodes(filtered, self.sort_key, now), self.page, self.page_size)
        self.page = result.page
        return result


def _pct(count: int, total: int) -> int:
    return round(count / total * 100)


def summarize(nodes: Sequence[Node], now: float | None = None) -> NetworkSummary | None:
    if not nodes:
        return None
    tiers = {Freshness.FRESH: 0, Freshness.DELAYED: 0, Freshness.STALE: 0, Freshness.UNKNOWN: 0}
    cpu_sum = ram_sum = disk_sum = 0.0
    reporting = 0
    for node in nodes:
        m = node.metrics
        tiers[classify(m.last_seen, now)] += 1
        # Nodes with no metrics are left out of the averages, not counted as 0
        if m.reports_any:
            cpu_sum += m.cpu or 0.0
            ram_sum += m.ram or 0.0
            disk_sum += m.disk or 0.0
            reporting += 1
    total = len(nodes)
    return NetworkSummary(
        total=total,
        fresh=tiers[Freshness.FRESH],
        delayed=tiers[Freshness.DELAYED],
        stale=tiers[Freshness.STALE],
        fresh_pct=_pct(tiers[Freshness.FRESH], total),
        delayed_pct=_pct(tiers[Freshness.DELAYED], total),
        stale_pct=_pct(tiers[Freshness.STALE], total),
        avg_cpu=cpu_sum / reporting if reporting else None,
        avg_ram=ram_sum / reporting if reporting else None,
        avg_disk=disk_sum / reporting if reporting else None,
    )
