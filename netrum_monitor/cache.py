"""Process-wide slot holding the last fetched node list."""

import time
from typing import Iterable

from netrum_monitor.models import Node


class NodeCache:
    """Last known full node list, shared by every view.

    Only the refresh loop writes. A write swaps in a new tuple, so readers see
    the old list or the new one, never a mix. There is no expiry: staleness is
    shown per node by the freshness classifier.
    """

    def __init__(self) -> None:
        self._nodes: tuple[Node, ...] | None = None
        self._updated_at: float | None = None

    def read(self) -> tuple[Node, ...] | None:
        """Return the cached list, or None when nothing has been fetched yet."""
        return self._nodes

    def write(self, nodes: Iterable[Node]) -> None:
        self._nodes = tuple(nodes)
        self._updated_at = time.time()

    @property
    def has_data(self) -> bool:
        return self._nodes is not None

    @property
    def updated_at(self) -> float | None:
        return self._updated_at

    def find(self, internal_id: str) -> Node | None:
        for node in self._nodes or ():
            if node.internal_id == internal_id:
                return node
        return None
