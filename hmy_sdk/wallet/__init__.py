"""
hmy_sdk.wallet
==============

Signing credentials for transactions.
"""

from __future__ import annotations

from .signer import Credential, Signer, resolve_signer

__all__ = ["Credential", "Signer", "resolve_signer"]
