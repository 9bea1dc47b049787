"""Links to block explorers for transactions, accounts and assets."""

from __future__ import annotations

from typing import Literal

Explorer = Literal["stellar.expert", "stellarchain", "horizon"]

EXPLORER_URLS: dict[str, dict[str, str]] = {
    "stellar.expert": {
        "public": "https://stellar.expert/explorer/public",
        "testnet": "https://stellar.expert/explorer/testnet",
    },
    "stellarchain": {
        "public": "https://stellarchain.io",
        "testnet": "https://testnet.stellarchain.io",
    },
    "horizon": {
        "public": "https://horizon.stellar.org",
        "testnet": "https://horizon-testnet.stellar.org",
    },
}

# Path templates per explorer
_TRANSACTION_PATHS = {"stellar.expert": "/tx/{}", "stellarchain": "/transactions/{}", "horizon": "/transactions/{}"}
_ACCOUNT_PATHS = {"stellar.expert": "/account/{}", "stellarchain": "/accounts/{}", "horizon": "/accounts/{}"}
_OPERATION_PATHS = {"stellar.expert": "/op/{}", "stellarchain": "/operations/{}", "horizon": "/operations/{}"}


def _base_url(network: str, explorer: Explorer) -> str:
    try:
        return EXPLORER_URLS[explorer][network]
    except KeyError:
        raise ValueError(f"Unknown explorer/network: {explorer}/{network}") from None


def get_transaction_url(tx_hash: str, network: str = "testnet", explorer: Explorer = "stellar.expert") -> str:
    return _base_url(network, explorer) + _TRANSACTION_PATHS[explorer].format(tx_hash)


def get_account_url(address: str, network: str = "testnet", explorer: Explorer = "stellar.expert") -> str:
    return _base_url(network, explorer) + _ACCOUNT_PATHS[explorer].format(address)


def get_operation_url(operation_id: str, network: str = "testnet", explorer: Explorer = "stellar.expert") -> str:
    return _base_url(network, explorer) + _OPERATION_PATHS[explorer].format(operation_id)


def get_asset_url(code: str, issuer: str, network: str = "testnet", explorer: Explorer = "stellar.expert") -> str:
    base = _base_url(network, explorer)
    if explorer == "stellarchain":
        return f"{base}/assets/{code}:{issuer}"
    if explorer == "horizon":
        return f"{base}/assets?asset_code={code}&asset_issuer={issuer}"
    return f"{base}/asset/{code}-{issuer}"
