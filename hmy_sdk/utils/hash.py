from __future__ import annotations

from eth_utils import keccak

from .bytes import BytesLike, ensure_bytes


def keccak256(data: BytesLike) -> bytes:
    """Return Keccak-256 digest of *data* (bytes)."""
    return keccak(ensure_bytes(data))


__all__ = ["keccak256"]
