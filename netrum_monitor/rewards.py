"""Approximate mining reward estimates.

The node API does not expose real mining uptime. Estimates run from the last
checkpoint the API does report (last claim, else last mining start), and any
restart, binary update, network update or claim moves that checkpoint
upstream without notice. Every figure produced here is an approximation.
"""

import time
from dataclasses import dataclass

from netrum_monitor.models import Node

BASE_RATE = 0.00004293  # tokens per second per unit of speed
SECONDS_PER_DAY = 86400

APPROXIMATION_NOTE = (
    "Approximate value. Calculated from the last claim, node restart, "
    "binary update, or network update. Actual mined amount may differ."
)


@dataclass(frozen=True)
class RewardFormula:
    """A base rate plus the normalization applied to a node's speed."""

    name: str
    base_rate: float = BASE_RATE
    speed_divisor: float = 1.0
    normalizer: float = 1.0

    def rate_per_second(self, speed: float | None) -> float:
        if not speed or speed < 0:
            return 0.0
        return self.base_rate * (speed / self.speed_divisor) / self.normalizer


# Node lists and the node detail header
DASHBOARD_FORMULA = RewardFormula("dashboard")
# Reward block on the node detail screen
DETAIL_BLOCK_FORMULA = RewardFormula("detail-block", speed_divisor=5.0, normalizer=10.0)


@dataclass(frozen=True)
class RewardEstimate:
    mining_seconds: float
    total_reward: float
    reward_per_day: float
    checkpoint: float | None
    formula: RewardFormula
    approximate: bool = True

    @property
    def has_checkpoint(self) -> bool:
        return self.checkpoint is not None


def resolve_checkpoint(last_claim: float | None, last_mining_start: float | None) -> float | None:
    if last_claim is not None:
        return last_claim
    return last_mining_start


def mining_duration(checkpoint: float | None, now: float) -> float:
    if checkpoint is None:
        return 0.0
    # Upstream clock skew can put the checkpoint in the future
    return max(0.0, now - checkpoint)


def estimate(
    last_claim: float | None,
    last_mining_start: float | None,
    speed: float | None,
    now: float | None = None,
    formula: RewardFormula = DASHBOARD_FORMULA,
) -> RewardEstimate:
    if now is None:
        now = time.time()
    checkpoint = resolve_checkpoint(last_claim, last_mining_start)
    seconds = mining_duration(checkpoint, now)
    rate = formula.rate_per_second(speed)
    return RewardEstimate(
        mining_seconds=seconds,
        total_reward=rate * seconds,
        reward_per_day=rate * SECONDS_PER_DAY,
        checkpoint=checkpoint,
        formula=formula,
    )


def estimate_for_node(
    node: Node, now: float | None = None, formula: RewardFormula = DASHBOARD_FORMULA
) -> RewardEstimate:
    return estimate(
        node.last_claim_time,
        node.last_mining_start,
        node.metrics.speed,
        now=now,
        formula=formula,
    )
