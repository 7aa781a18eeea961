import pytest

from netrum_monitor.services.api import NodeApiError
from netrum_monitor.services.mining_status import (
    COOLDOWN_SECONDS,
    CallLimiter,
    InvalidWalletError,
    MiningStatusChecker,
    validate_wallet,
)

from tests.factories import WALLET

PAYLOAD = {
    "success": True,
    "network": {"networkName": "base", "blockNumber": 123, "gasPriceGwei": 0.01},
    "contract": {
        "address": "0xcontract",
        "miningInfo": {
            "isActive": True,
            "speedPerSec": "42930000000000",
            "timeRemainingHours": 3.5,
            "percentCompleteNumber": 2550,
            "minedTokensFormatted": "1.2345",
        },
    },
    "wallet": {"currentBalance": "0.02 ETH", "hasMinBalance": True},
}


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class FakeApi:
    def __init__(self, payload=None, exc=None):
        self.payload = payload
        self.exc = exc
        self.calls = []

    def fetch_mining_debug(self, wallet):
        self.calls.append(wallet)
        if self.exc:
            raise self.exc
        return self.payload


def checker_for(api, clock=None):
    return MiningStatusChecker(api, CallLimiter(clock=clock or FakeClock()))


@pytest.mark.parametrize("wallet", ["", "0x123", "ab" * 21, "0x" + "g" * 40, "0x" + "a" * 41])
def test_invalid_wallets_rejected(wallet):
    with pytest.raises(InvalidWalletError):
        validate_wallet(wallet)


def test_valid_wallet_is_trimmed():
    assert validate_wallet(f"  {WALLET} ") == WALLET


def test_invalid_wallet_never_calls_network():
    api = FakeApi(PAYLOAD)
    result = checker_for(api).check("0xnope")
    assert result.message == "Invalid wallet address format"
    assert api.calls == []


def test_success_returns_status_and_starts_cooldown():
    clock = FakeClock()
    api = FakeApi(PAYLOAD)
    checker = checker_for(api, clock)
    result = checker.check(WALLET)
    assert result.ok
    assert result.status.mining_active
    assert result.status.percent_complete == 25.5
    assert checker.remaining() == COOLDOWN_SECONDS
    blocked = checker.check(WALLET)
    assert not blocked.ok
    assert blocked.message.startswith("Cooldown")
    assert len(api.calls) == 1
    clock.now += COOLDOWN_SECONDS
    assert checker.remaining() == 0
    assert checker.check(WALLET).ok
    assert len(api.calls) == 2


def test_unsuccessful_payload_is_no_data():
    checker = checker_for(FakeApi({"success": False}))
    result = checker.check(WALLET)
    assert result.message == "Mining data not found for this wallet"
    assert checker.remaining() == 0


def test_request_failure_is_a_message():
    result = checker_for(FakeApi(exc=NodeApiError("boom"))).check(WALLET)
    assert result.message == "Request failed"
    assert result.status is None


def test_call_limiter_is_per_key():
    clock = FakeClock()
    limiter = CallLimiter(cooldown=10, clock=clock)
    assert limiter.can_call("a")
    limiter.mark_called("a")
    assert not limiter.can_call("a")
    assert limiter.can_call("b")
    clock.now += 4
    assert limiter.remaining("a") == pytest.approx(6)
    clock.now += 6
    assert limiter.can_call("a")


def test_non_finite_block_number_still_reports():
    result = checker_for(FakeApi({"success": True, "network": {"blockNumber": float("inf")}})).check(WALLET)
    assert result.ok
    assert result.status.block_number is None


def test_unparseable_payload_is_no_data(monkeypatch):
    def explode(payload):
        raise OverflowError("cannot convert float infinity to integer")

    monkeypatch.setattr("netrum_monitor.services.mining_status.MiningStatus.from_api", explode)
    checker = checker_for(FakeApi(PAYLOAD))
    result = checker.check(WALLET)
    assert result.message == "Mining data not found for this wallet"
    assert checker.remaining() == 0
