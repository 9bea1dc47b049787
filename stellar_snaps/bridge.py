"""Request/response channel to the wallet running in another context.

Requests are posted as ``{source, id, method, params}``. The wallet side
answers with ``{source, id, result?, error?}`` and announces itself once with
``{source, ready: true}``; nothing may be sent before that.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from typing import Any

from .errors import BridgeError, BridgeNotReady, BridgeTimeout

log = logging.getLogger(__name__)

REQUEST_SOURCE = "stellar-snaps-content"
RESPONSE_SOURCE = "stellar-snaps-injected"
DEFAULT_TIMEOUT_SECONDS = 60.0

WALLET_METHODS = ("isConnected", "isAllowed", "setAllowed", "getAddress", "getNetwork", "signTransaction")


class WalletBridge:
    def __init__(
        self,
        post_message: Callable[[dict[str, Any]], None],
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.post_message = post_message
        self.timeout = timeout
        self.ready = False
        self._pending: dict[str, asyncio.Future] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def mark_ready(self) -> None:
        self.ready = True
        log.debug("Wallet bridge ready")

    def handle_response(self, message: Any) -> bool:
        """Route one incoming message. Returns True if it was ours."""
        if not isinstance(message, dict) or message.get("source") != RESPONSE_SOURCE:
            return False

        if message.get("ready"):
            self.mark_ready()
            return True

        future = self._pending.pop(message.get("id"), None)
        if future is None or future.done():
            return False

        error = message.get("error")
        if error:
            future.set_exception(BridgeError(str(error)))
        else:
            future.set_result(message.get("result"))
        return True

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Send one request and wait for its answer. No retries."""
        if not self.ready:
            raise BridgeNotReady()

        request_id = uuid.uuid4().hex
        future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future

        try:
            self.post_message({"source": REQUEST_SOURCE, "id": request_id, "method": method, "params": params})
            return await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError:
            raise BridgeTimeout(method, self.timeout) from None
        finally:
            self._pending.pop(request_id, None)
