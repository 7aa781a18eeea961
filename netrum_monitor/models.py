"""Data classes for nodes, task stats and external lookups."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Last second datetime can represent (9999-12-31T23:59:59Z)
MAX_EPOCH = 253402300799.0


def _float_or_none(val: Any) -> float | None:
    if val is None or isinstance(val, bool):
        return None
    try:
        num = float(val)
    except (TypeError, ValueError, OverflowError):
        return None
    return num if math.isfinite(num) else None


def _str_or_none(val: Any) -> str | None:
    if val is None:
        return None
    text = str(val).strip()
    return text or None


def parse_timestamp(value: Any) -> float | None:
    """Return epoch seconds for an epoch number or ISO-8601 string, else None.

    Zero, negative, non-finite and out-of-range values count as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        ts = _float_or_none(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        ts = _float_or_none(text)
        if ts is None:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            ts = parsed.timestamp()
    if ts is None:
        return None
    # Millisecond, microsecond and nanosecond epochs show up in some payloads
    while ts > 1e12:
        ts /= 1000.0
    if ts <= 0 or ts > MAX_EPOCH:
        return None
    return ts


@dataclass(frozen=True)
class NodeMetrics:
    cpu: float | None = None
    ram: float | None = None
    disk: float | None = None
    speed: float | None = None
    last_seen: float | None = None

    @classmethod
    def from_api(cls, data: Any) -> "NodeMetrics":
        if not isinstance(data, dict):
            return cls()
        return cls(
            cpu=_float_or_none(data.get("cpu")),
            ram=_float_or_none(data.get("ram")),
            disk=_float_or_none(data.get("disk")),
            speed=_float_or_none(data.get("speed")),
            last_seen=parse_timestamp(data.get("lastSeen")),
        )

    def get(self, name: str) -> float | None:
        return getattr(self, name, None)

    @property
    def reports_any(self) -> bool:
        """True when at least one load metric is present and non-zero."""
        return any(self.get(name) for name in ("cpu", "ram", "disk"))


@dataclass(frozen=True)
class Node:
    """One monitored network participant, as reported by the node API."""

    internal_id: str
    node_id: str
    wallet: str = ""
    status: str = "unknown"
    node_type: str | None = None
    created_at: float | None = None
    last_claim_time: float | None = None
    last_mining_start: float | None = None
    metrics: NodeMetrics = field(default_factory=NodeMetrics)
    tx_hash: str | None = None
    signature: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Node":
        if not isinstance(data, dict):
            raise TypeError(f"node record must be an object, got {type(data).__name__}")
        internal_id = _str_or_none(data.get("_id")) or _str_or_none(data.get("id")) or ""
        node_id = _str_or_none(data.get("nodeId")) or internal_id
        return cls(
            internal_id=internal_id,
            node_id=node_id,
            wallet=str(data.get("wallet") or ""),
            status=_str_or_none(data.get("nodeStatus")) or "unknown",
            node_type=_str_or_none(data.get("type")),
            created_at=parse_timestamp(data.get("createdAt")),
            last_claim_time=parse_timestamp(data.get("lastClaimTime")),
            last_mining_start=parse_timestamp(data.get("lastMiningStart")),
            metrics=NodeMetrics.from_api(data.get("nodeMetrics")),
            tx_hash=_str_or_none(data.get("txHash")),
            signature=_str_or_none(data.get("signature")),
        )

    @property
    def is_active(self) -> bool:
        return self.status == "Active"


@dataclass(frozen=True)
class TaskStats:
    node_id: str
    task_count: int = 0
    current_task_type: str | None = None
    tts_power_status: str | None = None
    available_ram: float | None = None
    last_task_assigned: float | None = None
    last_task_completed: float | None = None
    last_polled_at: float | None = None
    node_status: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TaskStats":
        count = _float_or_none(data.get("taskCount"))
        return cls(
            node_id=str(data.get("nodeId") or ""),
            task_count=int(count) if count is not None else 0,
            current_task_type=_str_or_none(data.get("currentTaskType")),
            tts_power_status=_str_or_none(data.get("ttsPowerStatus")),
            available_ram=_float_or_none(data.get("availableRam")),
            last_task_assigned=parse_timestamp(data.get("lastTaskAssigned")),
            last_task_completed=parse_timestamp(data.get("lastTaskCompleted")),
            last_polled_at=parse_timestamp(data.get("lastPolledAt")),
            node_status=_str_or_none(data.get("nodeStatus")),
            raw=data,
        )


@dataclass(frozen=True)
class TokenBalance:
    symbol: str
    balance: float
    raw_balance: str
    decimals: int


@dataclass(frozen=True)
class MiningStatus:
    """Summary of the mining debug endpoint for one wallet."""

    network_name: str | None = None
    block_number: int | None = None
    gas_price_gwei: float | None = None
    contract_address: str | None = None
    mining_active: bool = False
    speed_per_sec_wei: str | None = None
    time_remaining_hours: float | None = None
    percent_complete: float | None = None
    mined_tokens: float | None = None
    wallet_balance: str | None = None
    has_min_balance: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "MiningStatus":
        network = data.get("network") or {}
        contract = data.get("contract") or {}
        mining_info = contract.get("miningInfo") or {}
        wallet = data.get("wallet") or {}
        block = _float_or_none(network.get("blockNumber"))
        percent = _float_or_none(mining_info.get("percentCompleteNumber"))
        speed = mining_info.get("speedPerSec")
        return cls(
            network_name=_str_or_none(network.get("networkName")),
            block_number=int(block) if block is not None else None,
            gas_price_gwei=_float_or_none(network.get("gasPriceGwei")),
            contract_address=_str_or_none(contract.get("address")),
            mining_active=bool(mining_info.get("isActive")),
            speed_per_sec_wei=str(speed) if speed is not None else None,
            time_remaining_hours=_float_or_none(mining_info.get("timeRemainingHours")),
            # Upstream reports basis points
            percent_complete=percent / 100 if percent is not None else None,
            mined_tokens=_float_or_none(mining_info.get("minedTokensFormatted")),
            wallet_balance=_str_or_none(wallet.get("currentBalance")),
            has_min_balance=bool(wallet.get("hasMinBalance")),
        )
