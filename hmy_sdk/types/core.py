"""
Core chain types for the Python SDK.

- `Transaction` is the canonical transaction record. Its body (nonce, shard
  pair, destination, amount, gas fields, payload) is fixed at assembly. The
  signature and raw encoding are attached once by the signer, and the
  node-assigned hash once after broadcast. Each step returns a new frozen
  instance.
- `ReceiptDict` mirrors the JSON-RPC receipt payload.

Nothing here performs network I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, TypedDict

from ..utils.bytes import to_hex

__all__ = ["Hash", "Hex", "ReceiptDict", "Transaction"]

Hash = str  # 0x-prefixed hex string
Hex = str  # 0x-prefixed hex string


class ReceiptDict(TypedDict, total=False):
    transactionHash: Hash
    transactionIndex: Hex
    blockHash: Hash
    blockNumber: Hex
    shardID: int
    status: Hex
    gasUsed: Hex
    cumulativeGasUsed: Hex
    contractAddress: Optional[str]
    logs: List[Dict[str, Any]]


@dataclass(frozen=True)
class Transaction:
    nonce: int
    to: str  # canonical 0x hex address; "" for contract creation
    shard_id: int
    to_shard_id: int
    amount: int  # base units
    gas_limit: int
    gas_price: int  # base units per gas
    data: bytes = b""
    # Attached by the signer
    v: Optional[int] = None
    r: Optional[int] = None
    s: Optional[int] = None
    raw: Optional[Hex] = None
    # Attached after broadcast
    tx_hash: Optional[Hash] = None

    @property
    def is_signed(self) -> bool:
        return self.raw is not None

    def with_signature(self, *, v: int, r: int, s: int, raw: Hex) -> "Transaction":
        if self.is_signed:
            raise ValueError("transaction is already signed")
        return replace(self, v=v, r=r, s=s, raw=raw)

    def with_hash(self, tx_hash: Hash) -> "Transaction":
        if not self.is_signed:
            raise ValueError("cannot attach a hash to an unsigned transaction")
        if self.tx_hash is not None:
            raise ValueError("transaction hash already assigned")
        return replace(self, tx_hash=tx_hash)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view (ints stay ints, bytes become hex)."""
        d: Dict[str, Any] = {
            "nonce": self.nonce,
            "to": self.to,
            "shardID": self.shard_id,
            "toShardID": self.to_shard_id,
            "value": self.amount,
            "gas": self.gas_limit,
            "gasPrice": self.gas_price,
            "input": to_hex(self.data),
        }
        if self.is_signed:
            d.update(v=self.v, r=hex(self.r or 0), s=hex(self.s or 0), raw=self.raw)
        if self.tx_hash is not None:
            d["hash"] = self.tx_hash
        return d
