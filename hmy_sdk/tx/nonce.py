"""
Sequence-number (nonce) lookup.

Every call asks the node afresh; nothing is cached or incremented locally.
Two pipelines running at once for the same sender can therefore read the same
count, and the node will reject one of the two transactions. Callers that
need one writer per account must serialize their calls.
"""

from __future__ import annotations

from typing import Any, Optional

from ..address import Address
from ..config import SDKConfig
from ..errors import RpcError, SequenceLookupFailed
from ..rpc.methods import HmyRpc, NodeApi
from ..utils.retry import Deadline

__all__ = ["next_nonce", "get_address_nonce"]


def next_nonce(rpc: NodeApi, hex_address: str, *, deadline: Optional[Deadline] = None) -> int:
    """
    Current transaction count of `hex_address`, i.e. the nonce the next
    transaction must carry.

    Raises:
        SequenceLookupFailed if the node answers with an error
    """
    if deadline is not None:
        deadline.check("nonce query")
    try:
        return rpc.get_transaction_count(hex_address)
    except RpcError as e:
        raise SequenceLookupFailed(e.message) from e


def get_address_nonce(
    address: str,
    node_url: str,
    config: Optional[SDKConfig] = None,
    **client_kwargs: Any,
) -> int:
    """
    Standalone nonce lookup for an address in either text form, outside any
    pipeline run. Opens a short-lived connection to `node_url`;
    `client_kwargs` go to `RpcClient` (e.g. `transport=`).
    """
    hex_address = Address.parse(address).hex
    with HmyRpc.connect(node_url, config, **client_kwargs) as rpc:
        return next_nonce(rpc, hex_address)
