"""
hmy_sdk.tx
==========

Transaction pipeline stages.

Submodules
----------
- build  : intrinsic gas, the frozen `TxParams` build state and assembly.
- balance: pre-flight funds check.
- nonce  : sequence-number lookup.
- encode : RLP sign-bytes and raw signed encoding.
- send   : broadcast and best-effort receipt polling.
- handler: the `Handler` orchestrating all of the above (import it from
           `hmy_sdk` or `hmy_sdk.tx.handler`; it depends on `hmy_sdk.wallet`,
           which in turn uses `encode`).

Typical usage
-------------
    from hmy_sdk.tx import build, encode, send

    gas = build.intrinsic_gas(b"hello")
    params = build.TxParams().with_shards(0, 0).with_gas_limit(gas)...
    tx = build.assemble(params, b"hello")
"""

from __future__ import annotations

from . import balance as balance
from . import build as build
from . import encode as encode
from . import nonce as nonce
from . import send as send

__all__ = ["balance", "build", "encode", "nonce", "send"]
