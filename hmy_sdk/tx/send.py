"""
hmy_sdk.tx.send
===============

Submit raw signed transactions to a node via JSON-RPC and await receipts.

Primary entry points
--------------------
- submit_raw(rpc, raw_tx) -> str
    Sends the 0x-hex raw transaction via `hmy_sendRawTransaction`.
    Returns the node-assigned transaction hash.

- get_transaction_receipt(rpc, tx_hash) -> dict | None
    One receipt lookup; None while the transaction is still pending.

- wait_for_receipt(rpc, tx_hash, *, budget, interval=2.0) -> dict | None
    Best-effort confirmation: polls every `interval` seconds until a receipt
    shows up or `budget` seconds are spent. Running out of time is not an
    error (returns None); a failing lookup is.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

from ..errors import BroadcastRejected, ReceiptQueryFailed, RpcError
from ..rpc.methods import NodeApi
from ..utils.retry import Deadline, poll_until

__all__ = [
    "DEFAULT_CONFIRM_INTERVAL",
    "submit_raw",
    "get_transaction_receipt",
    "wait_for_receipt",
]

DEFAULT_CONFIRM_INTERVAL = 2.0


def submit_raw(rpc: NodeApi, raw_tx: str, *, deadline: Optional[Deadline] = None) -> str:
    """
    Broadcast a signed transaction.

    Raises:
        BroadcastRejected with the node's message if the node refuses it
    """
    if not isinstance(raw_tx, str) or not raw_tx.startswith("0x"):
        raise TypeError("raw_tx must be a 0x-prefixed hex string")
    if deadline is not None:
        deadline.check("broadcast")
    try:
        return rpc.send_raw_transaction(raw_tx)
    except RpcError as e:
        raise BroadcastRejected(e.message) from e


def get_transaction_receipt(rpc: NodeApi, tx_hash: str) -> Optional[Dict[str, Any]]:
    try:
        return rpc.get_transaction_receipt(tx_hash)
    except RpcError as e:
        raise ReceiptQueryFailed(e.message, tx_hash=tx_hash) from e


def wait_for_receipt(
    rpc: NodeApi,
    tx_hash: str,
    *,
    budget: float,
    interval: float = DEFAULT_CONFIRM_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
    deadline: Optional[Deadline] = None,
    on_wait: Optional[Callable[[int, float], None]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Poll for a receipt until it arrives or the wait budget is spent.

    A budget of zero or less skips polling altogether.

    Raises:
        ReceiptQueryFailed on the first lookup that errors
    """
    return poll_until(
        lambda: get_transaction_receipt(rpc, tx_hash),
        budget=budget,
        interval=interval,
        sleep=sleep,
        deadline=deadline,
        on_wait=on_wait,
    )
