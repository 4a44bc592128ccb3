"""
Typed error classes for the Python SDK.

These are raised by rpc/http, the transaction pipeline stages (tx/*), the
signer and the address codec so callers can catch specific failure modes while
still being able to catch the base `HmySdkError`.

Remote failures keep the node's error message verbatim and chain the
underlying `RpcError` as `__cause__`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

__all__ = [
    "HmySdkError",
    "RpcError",
    "JsonRpcCode",
    "from_jsonrpc_error",
    "InvalidShardRoute",
    "OutOfGas",
    "InsufficientFunds",
    "RemoteError",
    "RemoteQueryFailed",
    "SequenceLookupFailed",
    "BroadcastRejected",
    "ReceiptQueryFailed",
    "SigningFailed",
    "DeadlineExceeded",
    "AddressError",
]


class HmySdkError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 reserved codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000

    # Client-side transport failure (no usable response from the node)
    TRANSPORT_ERROR = -32098


@dataclass(eq=False)
class RpcError(HmySdkError):
    """Raised when a JSON-RPC call returns an error object or the transport fails."""

    code: int
    message: str
    data: Optional[Any] = None
    method: Optional[str] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)


def from_jsonrpc_error(
    err_obj: Dict[str, Any],
    *,
    method: Optional[str] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """
    Convert a JSON-RPC error object into RpcError.

    `err_obj` should resemble: {"code": int, "message": str, "data": any?}
    """
    code = int(err_obj.get("code", JsonRpcCode.SERVER_ERROR))
    message = str(err_obj.get("message", "Unknown JSON-RPC error"))
    return RpcError(
        code=code,
        message=message,
        data=err_obj.get("data"),
        method=method,
        http_status=http_status,
    )


# --- Pipeline failures ---------------------------------------------------------


@dataclass(eq=False)
class InvalidShardRoute(HmySdkError):
    """Requested shard pair is outside the live sharding structure."""

    from_shard: int
    to_shard: int
    shard_count: int

    def __str__(self) -> str:
        return (
            f"invalid shard ids passed: from={self.from_shard} to={self.to_shard} "
            f"(network has {self.shard_count} shards)"
        )


@dataclass(eq=False)
class OutOfGas(HmySdkError):
    """Intrinsic gas would overflow the 64-bit gas counter."""

    gas: int
    byte_count: int
    per_byte: int

    def __str__(self) -> str:
        return f"out of gas: {self.byte_count} bytes at {self.per_byte}/byte on top of {self.gas}"


@dataclass(eq=False)
class InsufficientFunds(HmySdkError):
    """
    The requested transfer exceeds the sender's current balance.

    Both amounts are exact base-unit integers; the message renders them in
    display units for humans only.
    """

    requested: int
    balance: int

    def __str__(self) -> str:
        from .utils.units import from_base_units

        return (
            f"current balance of {from_base_units(self.balance)} is not enough "
            f"for the requested transfer {from_base_units(self.requested)}"
        )


@dataclass(eq=False)
class RemoteError(HmySdkError):
    """A remote node answered a query with an explicit error."""

    message: str

    def __str__(self) -> str:
        return self.message


class RemoteQueryFailed(RemoteError):
    """Balance or shard-topology query failed."""


class SequenceLookupFailed(RemoteError):
    """Transaction-count (nonce) query failed."""


class BroadcastRejected(RemoteError):
    """The node refused the raw transaction."""


@dataclass(eq=False)
class ReceiptQueryFailed(RemoteError):
    """
    A receipt poll failed. The broadcast already succeeded at this point, so
    `tx_hash` is always set.
    """

    tx_hash: Optional[str] = None

    def __str__(self) -> str:
        suffix = f" (tx={self.tx_hash})" if self.tx_hash else ""
        return f"{self.message}{suffix}"


@dataclass(eq=False)
class SigningFailed(HmySdkError):
    """The key material or the transaction encoding was rejected by the signer."""

    message: str

    def __str__(self) -> str:
        return f"signing failed: {self.message}"


class DeadlineExceeded(HmySdkError):
    """The caller-supplied deadline expired before a remote call could be issued."""


class AddressError(ValueError):
    """Raised for malformed or invalid addresses."""
