"""Per-wallet mining status checks with a session cooldown."""

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable

from netrum_monitor.models import MiningStatus
from netrum_monitor.services.api import NodeApiClient, NodeApiError

logger = logging.getLogger(__name__)

COOLDOWN_SECONDS = 30
WALLET_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


class InvalidWalletError(ValueError):
    pass


def validate_wallet(wallet: str) -> str:
    wallet = (wallet or "").strip()
    if not WALLET_PATTERN.match(wallet):
        raise InvalidWalletError("Invalid wallet address format")
    return wallet


class CallLimiter:
    """Remembers when each key was last called and enforces a cooldown."""

    def __init__(self, cooldown: float = COOLDOWN_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.cooldown = cooldown
        self.clock = clock
        self._calls: dict[str, float] = {}

    def can_call(self, key: str) -> bool:
        return self.remaining(key) <= 0

    def mark_called(self, key: str) -> None:
        self._calls[key] = self.clock()

    def remaining(self, key: str) -> float:
        last = self._calls.get(key)
        if last is None:
            return 0.0
        return max(0.0, self.cooldown - (self.clock() - last))


@dataclass(frozen=True)
class MiningCheckResult:
    status: MiningStatus | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not None


class MiningStatusChecker:
    LIMIT_KEY = "mining-status"

    def __init__(self, api: NodeApiClient, limiter: CallLimiter | None = None) -> None:
        self.api = api
        self.limiter = limiter or CallLimiter()

    def remaining(self) -> int:
        return int(round(self.limiter.remaining(self.LIMIT_KEY)))

    def check(self, wallet: str) -> MiningCheckResult:
        """Look up mining status; every failure comes back as a message."""
        if not self.limiter.can_call(self.LIMIT_KEY):
            return MiningCheckResult(message=f"Cooldown {self.remaining()}s")
        try:
            wallet = validate_wallet(wallet)
        except InvalidWalletError as exc:
            return MiningCheckResult(message=str(exc))
        try:
            payload = self.api.fetch_mining_debug(wallet)
        except NodeApiError as exc:
            logger.debug("Mining status request for %s failed: %s", wallet, exc)
            return MiningCheckResult(message="Request failed")
        if not payload.get("success"):
            return MiningCheckResult(message="Mining data not found for this wallet")
        try:
            status = MiningStatus.from_api(payload)
        except (AttributeError, TypeError, ValueError, OverflowError) as exc:
            logger.debug("Unexpected mining status payload for %s: %s", wallet, exc)
            return MiningCheckResult(message="Mining data not found for this wallet")
        self.limiter.mark_called(self.LIMIT_KEY)
        return MiningCheckResult(status=status)
