"""The pay button: wallet connection, build, sign and submit."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from .bridge import WalletBridge
from .constants import HORIZON_URLS, NETWORK_PASSPHRASES
from .errors import (
    AccountNotFunded,
    Cancelled,
    PaymentFailed,
    StellarSnapError,
    WalletNotConnected,
    WrongNetwork,
)
from .explorer import get_transaction_url
from .models import SnapMetadata
from .validation import is_valid_amount

log = logging.getLogger(__name__)

DEFAULT_PAY_NETWORK = "testnet"
PAY_LABEL = "Pay with Stellar"


class PaymentState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    BUILDING = "building"
    AWAITING_SIGNATURE = "awaiting_signature"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = {PaymentState.SUCCESS, PaymentState.FAILED, PaymentState.CANCELLED}
_STARTABLE_STATES = {PaymentState.IDLE, PaymentState.FAILED, PaymentState.CANCELLED}


@dataclass
class CardView:
    """What a rendered card's button and status line should show."""

    label: str
    disabled: bool = False
    status: str = ""
    status_kind: str = ""  # "", "info", "success" or "error"
    success: bool = False


_PROGRESS_LABELS = {
    PaymentState.CONNECTING: "Connecting...",
    PaymentState.BUILDING: "Building...",
    PaymentState.AWAITING_SIGNATURE: "Sign...",
    PaymentState.SUBMITTING: "Submitting...",
}


class PaymentAction:
    """
    One card's payment flow.

    ``run()`` walks IDLE -> CONNECTING -> BUILDING -> AWAITING_SIGNATURE ->
    SUBMITTING and ends in SUCCESS, FAILED or CANCELLED. Every transition is
    reported to ``on_change`` as a :class:`CardView`. A failed or cancelled
    run can be started again; a successful one cannot.
    """

    def __init__(
        self,
        metadata: SnapMetadata,
        origin: str,
        bridge: WalletBridge,
        client: httpx.AsyncClient,
        *,
        horizon_urls: dict[str, str] | None = None,
        on_change: Callable[[PaymentState, CardView], None] | None = None,
    ):
        self.metadata = metadata
        self.origin = origin.rstrip("/")
        self.bridge = bridge
        self.client = client
        self.horizon_urls = horizon_urls or HORIZON_URLS
        self.on_change = on_change
        self.state = PaymentState.IDLE
        self.tx_hash: str | None = None
        self.explorer_url: str | None = None
        self.error: StellarSnapError | None = None

    @property
    def network(self) -> str:
        return self.metadata.network or DEFAULT_PAY_NETWORK

    def _set(self, state: PaymentState, view: CardView) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(state, view)

    def _progress(self, state: PaymentState) -> None:
        self._set(state, CardView(label=_PROGRESS_LABELS[state], disabled=True))

    async def run(self, amount: str | None = None) -> PaymentState:
        # Only an idle, failed or cancelled button starts a run.
        if self.state not in _STARTABLE_STATES:
            return self.state

        amount = amount or self.metadata.amount
        if not amount or not is_valid_amount(amount):
            self._set(self.state, CardView(label=PAY_LABEL, status="Enter a valid amount", status_kind="error"))
            return self.state

        self.error = None
        try:
            tx_hash = await self._pay(amount)
        except Cancelled as e:
            self.error = e
            self._set(PaymentState.CANCELLED, CardView(label=PAY_LABEL, status=e.message, status_kind="info"))
        except StellarSnapError as e:
            log.info("Payment for snap %s failed: %s", self.metadata.id, e.message)
            self.error = e
            self._set(PaymentState.FAILED, CardView(label="Try Again", status=e.message, status_kind="error"))
        except httpx.HTTPError as e:
            log.info("Payment for snap %s failed: %s", self.metadata.id, e)
            self.error = PaymentFailed("Payment failed")
            self._set(PaymentState.FAILED, CardView(label="Try Again", status="Payment failed", status_kind="error"))
        else:
            self.tx_hash = tx_hash
            if self.network in ("public", "testnet"):
                self.explorer_url = get_transaction_url(tx_hash, self.network)
            self._set(
                PaymentState.SUCCESS,
                CardView(
                    label="Paid!",
                    disabled=True,
                    status=f"TX: {tx_hash[:8]}...",
                    status_kind="success",
                    success=True,
                ),
            )
        return self.state

    async def _pay(self, amount: str) -> str:
        self._progress(PaymentState.CONNECTING)
        address = await self._connect()

        self._progress(PaymentState.BUILDING)
        passphrase = NETWORK_PASSPHRASES.get(self.network)
        if passphrase is None:
            raise PaymentFailed(f"Unsupported network: {self.network}")
        current = _field(await self.bridge.call("getNetwork"), "networkPassphrase")
        if current != passphrase:
            raise WrongNetwork(self.network)

        horizon_url = self.horizon_urls[self.network].rstrip("/")
        sequence = await self._load_sequence(horizon_url, address)
        xdr = await self._build(address, sequence, amount)

        self._progress(PaymentState.AWAITING_SIGNATURE)
        signed = await self.bridge.call("signTransaction", {"xdr": xdr, "networkPassphrase": passphrase})
        signed_xdr = _field(signed, "signedTxXdr")
        if not signed_xdr:
            raise Cancelled()

        self._progress(PaymentState.SUBMITTING)
        return await self._submit(horizon_url, signed_xdr)

    async def _connect(self) -> str:
        if not _field(await self.bridge.call("isConnected"), "isConnected"):
            raise WalletNotConnected("Connect your wallet first")
        if not _field(await self.bridge.call("isAllowed"), "isAllowed"):
            await self.bridge.call("setAllowed")
        address = _field(await self.bridge.call("getAddress"), "address")
        if not address:
            raise WalletNotConnected("Connect your wallet to continue")
        return address

    async def _load_sequence(self, horizon_url: str, address: str) -> str:
        response = await self.client.get(f"{horizon_url}/accounts/{address}")
        if response.status_code == 404:
            raise AccountNotFunded(address)
        if not response.is_success:
            raise PaymentFailed("Failed to load account")
        try:
            return str(response.json()["sequence"])
        except (ValueError, KeyError, TypeError):
            raise PaymentFailed("Failed to load account") from None

    async def _build(self, address: str, sequence: str, amount: str) -> str:
        body = {
            "source": address,
            "sequence": sequence,
            "destination": self.metadata.destination,
            "amount": amount,
            "assetCode": self.metadata.asset_code,
            "assetIssuer": self.metadata.asset_issuer,
            "memo": self.metadata.memo,
            "memoType": self.metadata.memo_type,
            "network": self.network,
        }
        response = await self.client.post(f"{self.origin}/api/build-tx", json=body)
        if not response.is_success:
            raise PaymentFailed("Failed to build tx")
        try:
            xdr = response.json()["xdr"]
        except (ValueError, KeyError, TypeError):
            raise PaymentFailed("Failed to build tx") from None
        if not xdr or not isinstance(xdr, str):
            raise PaymentFailed("Failed to build tx")
        return xdr

    async def _submit(self, horizon_url: str, signed_xdr: str) -> str:
        response = await self.client.post(f"{horizon_url}/transactions", data={"tx": signed_xdr})
        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}
        if response.is_success and result.get("hash"):
            return result["hash"]
        code = ((result.get("extras") or {}).get("result_codes") or {}).get("transaction")
        raise PaymentFailed(code or "Failed")


def _field(result: Any, name: str) -> Any:
    """Wallet answers are objects; older wallets answer with the bare value."""
    if isinstance(result, dict):
        return result.get(name)
    return result
