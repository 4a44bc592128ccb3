"""
hmy_sdk.types
=============

Typed data structures shared across the SDK.
"""

from __future__ import annotations

from .core import Hash, Hex, ReceiptDict, Transaction

__all__ = ["Hash", "Hex", "ReceiptDict", "Transaction"]
