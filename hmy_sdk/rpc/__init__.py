"""
hmy_sdk.rpc
-----------

Lightweight RPC helpers.

This package exposes:
- RpcClient: HTTP JSON-RPC client (see .http)
- HmyRpc:    typed wrappers for the hmy_* methods the transaction pipeline needs (see .methods)

Import style:

    from hmy_sdk.rpc import HmyRpc
    rpc = HmyRpc.connect("http://localhost:9500")
    nonce = rpc.get_transaction_count("0x...")
"""

from __future__ import annotations

from .http import RpcClient
from .methods import HmyRpc

__all__ = ["RpcClient", "HmyRpc"]
