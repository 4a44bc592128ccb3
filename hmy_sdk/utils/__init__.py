"""
Utility helpers for the Python SDK.

Re-exports:
- bytes: hex helpers and JSON-RPC quantity decoding
- hash: Keccak-256
- units: NANO / ONE denomination conversions
- retry: deadline and bounded polling
"""

from .bytes import ensure_bytes, from_hex, quantity_to_int, strip_0x, to_hex
from .hash import keccak256
from .retry import Deadline, poll_until
from .units import NANO, ONE, from_base_units, to_base_units, to_nano_units

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "strip_0x",
    "ensure_bytes",
    "quantity_to_int",
    # hash
    "keccak256",
    # units
    "NANO",
    "ONE",
    "to_base_units",
    "to_nano_units",
    "from_base_units",
    # retry
    "Deadline",
    "poll_until",
]
