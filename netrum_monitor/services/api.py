import logging
import os
from typing import Any

import requests

from netrum_monitor.models import Node, TaskStats

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://node.netrumlabs.dev"


class NodeApiError(RuntimeError):
    """Required data from the node API could not be loaded."""


def _unwrap_nodes(payload: Any) -> list[Any]:
    """Return the node array from the first of data.nodes, result.nodes, nodes."""
    if isinstance(payload, dict):
        for wrapper in ("data", "result"):
            inner = payload.get(wrapper)
            if isinstance(inner, dict) and inner.get("nodes") is not None:
                return _require_list(inner["nodes"])
        if payload.get("nodes") is not None:
            return _require_list(payload["nodes"])
    raise NodeApiError("Invalid API response")


def _require_list(value: Any) -> list[Any]:
    if not isinstance(value, list):
        raise NodeApiError("Invalid API response")
    return value


def _unwrap_object(payload: Any) -> Any:
    if isinstance(payload, dict):
        return payload.get("data") or payload.get("result") or payload
    return payload


def _parse(build, record: Any, failure: str):
    try:
        return build(record)
    except (AttributeError, TypeError, ValueError, OverflowError) as exc:
        raise NodeApiError(failure) from exc


class NodeApiClient:
    def __init__(self, session: requests.Session | None = None) -> None:
        self.base_url = os.environ.get("NETRUM_API_BASE", DEFAULT_API_BASE).rstrip("/")
        self.timeout = float(os.environ.get("NETRUM_API_TIMEOUT", "10"))
        self.session = session or requests.Session()

    def _get_json(self, path: str, failure: str, check_status: bool = True) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NodeApiError(f"{failure}: {exc}") from exc
        if check_status and not response.ok:
            raise NodeApiError(f"{failure} (HTTP {response.status_code})")
        try:
            return response.json()
        except ValueError as exc:
            raise NodeApiError("Invalid API response") from exc

    def fetch_active_nodes(self) -> list[Node]:
        # Upstream reports errors in the body shape, not the status code
        payload = self._get_json("/lite/nodes/active", "Failed to load nodes", check_status=False)
        records = _unwrap_nodes(payload)
        nodes = [Node.from_api(record) for record in records if isinstance(record, dict)]
        skipped = len(records) - len(nodes)
        if skipped:
            logger.debug("Skipped %d malformed node records", skipped)
        return nodes

    def fetch_node(self, internal_id: str) -> Node:
        payload = self._get_json(f"/lite/nodes/id/{internal_id}", "Failed to fetch node")
        record = _unwrap_object(payload)
        if not isinstance(record, dict) or not record:
            raise NodeApiError("Invalid node response")
        return _parse(Node.from_api, record, "Invalid node response")

    def fetch_task_stats(self, internal_id: str) -> TaskStats:
        payload = self._get_json(
            f"/polling/node-stats/{internal_id}", "Failed to fetch node task stats"
        )
        if not isinstance(payload, dict):
            raise NodeApiError("Invalid task stats response")
        return _parse(TaskStats.from_api, payload, "Invalid task stats response")

    def fetch_mining_debug(self, wallet: str) -> dict[str, Any]:
        payload = self._get_json(f"/mining/debug/contract/{wallet}", "Request failed", check_status=False)
        if not isinstance(payload, dict):
            raise NodeApiError("Invalid mining status response")
        return payload
