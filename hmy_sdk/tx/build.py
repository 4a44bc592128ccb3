"""
hmy_sdk.tx.build
================

Intrinsic-gas computation and the transaction build state.

Gas
---
`intrinsic_gas(data, contract_creation, homestead)` prices a payload the way
the node does: a flat base (53000 for a post-Homestead contract creation,
21000 otherwise) plus 68 per non-zero byte and 4 per zero byte. The running
total lives in a 64-bit unsigned counter on the node, so each per-byte
contribution is checked against the remaining headroom *before* it is added
and `OutOfGas` is raised instead of overflowing.

Build state
-----------
`TxParams` collects the fields of one transaction as the pipeline computes
them. It is frozen: every `with_*` step returns a new value, so each stage can
be exercised on its own and a half-built state is never shared.

    params = (
        TxParams()
        .with_shards(0, 0)
        .with_gas_limit(intrinsic_gas(b""))
        .with_amount("1.5")
        .with_receiver("one1...")
        .with_gas_price(1)
        .with_nonce(7)
    )
    tx = assemble(params, b"")
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from ..address import to_canonical
from ..errors import OutOfGas
from ..types.core import Transaction
from ..utils.units import Amount, to_base_units, to_nano_units

__all__ = [
    "MAX_UINT64",
    "TX_GAS",
    "TX_GAS_CONTRACT_CREATION",
    "TX_DATA_NON_ZERO_GAS",
    "TX_DATA_ZERO_GAS",
    "payload_bytes",
    "intrinsic_gas",
    "intrinsic_gas_for_counts",
    "TxParams",
    "assemble",
]

MAX_UINT64 = 2**64 - 1

TX_GAS = 21_000  # per transaction not creating a contract
TX_GAS_CONTRACT_CREATION = 53_000  # per transaction that creates a contract
TX_DATA_NON_ZERO_GAS = 68
TX_DATA_ZERO_GAS = 4


def payload_bytes(payload: Union[str, bytes, bytearray, None]) -> bytes:
    """Payload text is sent as its UTF-8 bytes; bytes pass through."""
    if payload is None:
        return b""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    raise TypeError("payload must be str or bytes-like")


def intrinsic_gas_for_counts(
    non_zero: int,
    zero: int,
    *,
    contract_creation: bool = False,
    homestead: bool = True,
) -> int:
    """Intrinsic gas from byte counts alone."""
    if non_zero < 0 or zero < 0:
        raise ValueError("byte counts must be non-negative")
    gas = TX_GAS_CONTRACT_CREATION if contract_creation and homestead else TX_GAS

    if non_zero + zero > 0:
        # Make sure we don't exceed uint64 for all data combinations
        if (MAX_UINT64 - gas) // TX_DATA_NON_ZERO_GAS < non_zero:
            raise OutOfGas(gas=gas, byte_count=non_zero, per_byte=TX_DATA_NON_ZERO_GAS)
        gas += non_zero * TX_DATA_NON_ZERO_GAS

        if (MAX_UINT64 - gas) // TX_DATA_ZERO_GAS < zero:
            raise OutOfGas(gas=gas, byte_count=zero, per_byte=TX_DATA_ZERO_GAS)
        gas += zero * TX_DATA_ZERO_GAS

    return gas


def intrinsic_gas(
    data: Union[str, bytes, bytearray],
    contract_creation: bool = False,
    homestead: bool = True,
) -> int:
    """
    Minimum gas to carry `data`. Pure function of its inputs.

    Raises:
        OutOfGas if the total would not fit a 64-bit unsigned counter.
    """
    raw = payload_bytes(data)
    zero = raw.count(0)
    return intrinsic_gas_for_counts(
        len(raw) - zero,
        zero,
        contract_creation=contract_creation,
        homestead=homestead,
    )


# -----------------------------------------------------------------------------
# Build state
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TxParams:
    from_shard: Optional[int] = None
    to_shard: Optional[int] = None
    receiver: Optional[str] = None
    amount: Optional[Amount] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[Amount] = None
    nonce: Optional[int] = None

    def with_shards(self, from_shard: int, to_shard: int) -> "TxParams":
        if from_shard < 0 or to_shard < 0:
            raise ValueError("shard ids must be non-negative")
        return replace(self, from_shard=int(from_shard), to_shard=int(to_shard))

    def with_gas_limit(self, gas_limit: int) -> "TxParams":
        return replace(self, gas_limit=int(gas_limit))

    def with_amount(self, amount: Amount) -> "TxParams":
        return replace(self, amount=amount)

    def with_receiver(self, receiver: str) -> "TxParams":
        """Human-form receivers are decoded; canonical ones are kept as given."""
        return replace(self, receiver=to_canonical(receiver))

    def with_gas_price(self, gas_price: Amount) -> "TxParams":
        return replace(self, gas_price=gas_price)

    def with_nonce(self, nonce: int) -> "TxParams":
        if nonce < 0:
            raise ValueError("nonce must be non-negative")
        return replace(self, nonce=int(nonce))

    def missing(self) -> list[str]:
        return [name for name, value in self.__dict__.items() if value is None]


def assemble(params: TxParams, payload: Union[str, bytes, bytearray]) -> Transaction:
    """
    Construct the canonical unsigned transaction.

    The amount is converted from display units to base units (x 10**18) and
    the gas price from nano units (x 10**9). No other validation happens here.
    """
    missing = params.missing()
    if missing:
        raise ValueError(f"transaction parameters not set: {', '.join(missing)}")
    return Transaction(
        nonce=params.nonce,  # type: ignore[arg-type]
        to=params.receiver,  # type: ignore[arg-type]
        shard_id=params.from_shard,  # type: ignore[arg-type]
        to_shard_id=params.to_shard,  # type: ignore[arg-type]
        amount=to_base_units(params.amount),  # type: ignore[arg-type]
        gas_limit=params.gas_limit,  # type: ignore[arg-type]
        gas_price=to_nano_units(params.gas_price),  # type: ignore[arg-type]
        data=payload_bytes(payload),
    )
