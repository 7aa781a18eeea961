"""Optional token balance lookup over a third-party RPC.

The balance is a convenience only. Nothing in the dashboard depends on it,
and any failure shows as "N/A".
"""

import logging
import os
from typing import Protocol

from web3 import Web3

from netrum_monitor.models import TokenBalance

logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://mainnet.base.org"
DEFAULT_TOKEN_ADDRESS = "0xB8c2CE84F831175136cebBFD48CE4BAb9c7a6424"

ERC20_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class BalanceUnavailable(RuntimeError):
    pass


class BalanceLookup(Protocol):
    def get_token_balance(self, wallet: str) -> TokenBalance: ...


def normalize_balance(raw_balance: int, decimals: int) -> float:
    return raw_balance / 10 ** decimals


class Web3BalanceLookup:
    def __init__(self, rpc_url: str | None = None, token_address: str | None = None) -> None:
        self.rpc_url = rpc_url or os.environ.get("NETRUM_RPC_URL", DEFAULT_RPC_URL)
        self.token_address = token_address or os.environ.get(
            "NETRUM_TOKEN_ADDRESS", DEFAULT_TOKEN_ADDRESS
        )
        self.timeout = float(os.environ.get("NETRUM_API_TIMEOUT", "10"))
        self._contract = None

    def _token_contract(self):
        if self._contract is None:
            w3 = Web3(Web3.HTTPProvider(self.rpc_url, request_kwargs={"timeout": self.timeout}))
            self._contract = w3.eth.contract(
                address=Web3.to_checksum_address(self.token_address), abi=ERC20_ABI
            )
        return self._contract

    def get_token_balance(self, wallet: str) -> TokenBalance:
        if not wallet:
            raise BalanceUnavailable("Wallet address is required")
        try:
            contract = self._token_contract()
            owner = Web3.to_checksum_address(wallet)
            raw = int(contract.functions.balanceOf(owner).call())
            decimals = int(contract.functions.decimals().call())
            symbol = str(contract.functions.symbol().call())
        except Exception as exc:
            raise BalanceUnavailable(str(exc)) from exc
        return TokenBalance(
            symbol=symbol,
            balance=normalize_balance(raw, decimals),
            raw_balance=str(raw),
            decimals=decimals,
        )


class NullBalanceLookup:
    """Lookup used when no RPC is configured."""

    def get_token_balance(self, wallet: str) -> TokenBalance:
        raise BalanceUnavailable("Balance RPC disabled")


def default_balance_lookup() -> BalanceLookup:
    # An explicitly empty NETRUM_RPC_URL turns the lookup off
    if os.environ.get("NETRUM_RPC_URL", DEFAULT_RPC_URL) == "":
        return NullBalanceLookup()
    return Web3BalanceLookup()


def lookup_balance_or_none(lookup: BalanceLookup, wallet: str) -> TokenBalance | None:
    try:
        return lookup.get_token_balance(wallet)
    except Exception as exc:
        logger.debug("Balance lookup for %s unavailable: %s", wallet, exc)
        return None
