"""
hmy_sdk.tx.encode
=================

Canonical RLP encodings of a Harmony transaction.

Sign bytes (EIP-155 style, the chain id is part of the signed payload so a
signature for one chain is useless on another):

    RLP([nonce, gasPrice, gas, shardID, toShardID, to, value, input, chainId, 0, 0])

Raw signed transaction:

    RLP([nonce, gasPrice, gas, shardID, toShardID, to, value, input, v, r, s])

`to` is the 20 raw address bytes, or empty for contract creation.
"""

from __future__ import annotations

from typing import List, Union

import rlp

from ..types.core import Transaction
from ..utils.bytes import from_hex, to_hex
from ..utils.hash import keccak256

__all__ = ["sign_bytes", "signing_hash", "encode_signed", "decode_raw", "raw_hash"]

RlpItem = Union[int, bytes]


def _to_field(to: str) -> bytes:
    if not to:
        return b""
    try:
        raw = from_hex(to)
    except ValueError:
        raw = b""
    if len(raw) != 20:
        raise ValueError(f"destination {to!r} is neither a one1 address nor 20-byte hex")
    return raw


def _body(tx: Transaction) -> List[RlpItem]:
    return [
        tx.nonce,
        tx.gas_price,
        tx.gas_limit,
        tx.shard_id,
        tx.to_shard_id,
        _to_field(tx.to),
        tx.amount,
        tx.data,
    ]


def sign_bytes(tx: Transaction, chain_id: int) -> bytes:
    """Bytes the signature commits to."""
    return rlp.encode(_body(tx) + [int(chain_id), 0, 0])


def signing_hash(tx: Transaction, chain_id: int) -> bytes:
    return keccak256(sign_bytes(tx, chain_id))


def encode_signed(tx: Transaction, *, v: int, r: int, s: int) -> bytes:
    return rlp.encode(_body(tx) + [v, r, s])


def decode_raw(raw: Union[str, bytes]) -> List[bytes]:
    """Split a raw signed transaction back into its eleven RLP fields."""
    data = from_hex(raw) if isinstance(raw, str) else bytes(raw)
    fields = rlp.decode(data)
    if not isinstance(fields, list) or len(fields) != 11:
        raise ValueError("raw transaction must be an RLP list of 11 fields")
    return fields


def raw_hash(raw: Union[str, bytes]) -> str:
    """Transaction hash as computed locally (keccak256 of the raw bytes)."""
    data = from_hex(raw) if isinstance(raw, str) else bytes(raw)
    return to_hex(keccak256(data))
